# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Output sinks: verbosity-filtered styled lines, questions and tables.

:class:`Output` is the raw sink created once per application run.
:class:`OutputStyle` decorates it with interactive helpers and is what
commands talk to.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import questionary
from rich.console import Console
from rich.style import Style
from rich.text import Text
from rich.theme import Theme

from flyconsole.console.question import ChoiceQuestion, Question
from flyconsole.console.table import TableSeparator, TableStyles, render_table
from flyconsole.console.verbosity import Verbosity
from flyconsole.kernel.exceptions import InfrastructureException, InvalidArgumentException

OUTPUT_META_KEY = "flyconsole.output"

DEFAULT_STYLES: dict[str, str] = {
    "info": "green",
    "comment": "yellow",
    "question": "black on cyan",
    "error": "white on red",
}


class OutputFormatter:
    """Named line styles and table styles available on one sink."""

    def __init__(self, styles: dict[str, str | Style] | None = None) -> None:
        self._styles: dict[str, Style] = {}
        self._theme: Theme | None = None
        self.table_styles = TableStyles()
        for name, style in (DEFAULT_STYLES if styles is None else styles).items():
            self.set_style(name, style)

    def has_style(self, name: str) -> bool:
        return name.lower() in self._styles

    def get_style(self, name: str) -> Style:
        if not self.has_style(name):
            raise InvalidArgumentException(f'Undefined style: "{name}".')
        return self._styles[name.lower()]

    def set_style(self, name: str, style: str | Style) -> None:
        self._styles[name.lower()] = Style.parse(style) if isinstance(style, str) else style
        self._theme = None

    @property
    def theme(self) -> Theme:
        if self._theme is None:
            self._theme = Theme(dict(self._styles))
        return self._theme


class Output:
    """Verbosity-aware writer over a rich :class:`Console`.

    Strings are written literally; square brackets are never read as
    markup. Pass ``style`` to colour a whole line, or a :class:`Text` to mix
    styles within one.
    """

    def __init__(
        self,
        console: Console | None = None,
        verbosity: int = Verbosity.NORMAL,
        *,
        interactive: bool = True,
        formatter: OutputFormatter | None = None,
    ) -> None:
        self.console = console or Console(highlight=False)
        self.verbosity = verbosity
        self.formatter = formatter or OutputFormatter()
        self._interactive = interactive

    def is_interactive(self) -> bool:
        return self._interactive

    def is_quiet(self) -> bool:
        return self.verbosity == Verbosity.QUIET

    def is_verbose(self) -> bool:
        return self.verbosity >= Verbosity.VERBOSE

    def is_very_verbose(self) -> bool:
        return self.verbosity >= Verbosity.VERY_VERBOSE

    def is_debug(self) -> bool:
        return self.verbosity >= Verbosity.DEBUG

    def writeln(self, message: str | Text, verbosity: int = Verbosity.NORMAL, style: str | None = None) -> None:
        self.write(message, newline=True, verbosity=verbosity, style=style)

    def write(
        self,
        message: str | Text,
        newline: bool = False,
        verbosity: int = Verbosity.NORMAL,
        style: str | None = None,
    ) -> None:
        """Print *message* unless *verbosity* is above the sink's level."""
        if verbosity > self.verbosity:
            return
        if style is not None:
            # resolve here so an unknown style fails with our error, not rich's
            self.formatter.get_style(style)
        with self.console.use_theme(self.formatter.theme):
            self.console.print(
                message,
                style=style,
                end="\n" if newline else "",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )


class OutputStyle:
    """Interactive decorator around an :class:`Output`."""

    def __init__(self, output: Output | OutputStyle) -> None:
        self.output: Output = output.output if isinstance(output, OutputStyle) else output

    @property
    def console(self) -> Console:
        return self.output.console

    @property
    def formatter(self) -> OutputFormatter:
        return self.output.formatter

    @property
    def verbosity(self) -> int:
        return self.output.verbosity

    def is_interactive(self) -> bool:
        return self.output.is_interactive()

    def writeln(self, message: str | Text, verbosity: int = Verbosity.NORMAL, style: str | None = None) -> None:
        self.output.writeln(message, verbosity, style)

    def write(
        self,
        message: str | Text,
        newline: bool = False,
        verbosity: int = Verbosity.NORMAL,
        style: str | None = None,
    ) -> None:
        self.output.write(message, newline, verbosity, style)

    def new_line(self, count: int = 1) -> None:
        self.output.write("\n" * count)

    def table(
        self,
        headers: Sequence[Any],
        rows: Iterable[Sequence[Any] | TableSeparator],
        style: str = "default",
    ) -> None:
        definition = self.formatter.table_styles.get_style_definition(style)
        with self.console.use_theme(self.formatter.theme):
            render_table(self.console, headers, rows, definition)

    def confirm(self, question: str, default: bool = True) -> bool:
        if not self.is_interactive():
            return default
        return questionary.confirm(question, default=default).unsafe_ask()  # pragma: no cover

    def ask(self, question: str, default: str | None = None) -> Any:
        return self.ask_question(Question(question, default))

    def ask_question(self, question: Question) -> Any:
        """Ask *question*; non-interactive sinks answer with its default."""
        if not self.is_interactive():
            return question.resolve_default()
        if isinstance(question, ChoiceQuestion):  # pragma: no cover
            return self._ask_choice(question)
        if question.hidden:  # pragma: no cover
            return self._ask_hidden(question)
        if question.autocompleter_values:  # pragma: no cover
            return questionary.autocomplete(
                question.question,
                choices=list(question.autocompleter_values),
                default=_text_default(question.default),
            ).unsafe_ask()
        return questionary.text(question.question, default=_text_default(question.default)).unsafe_ask()  # pragma: no cover

    def _ask_hidden(self, question: Question) -> Any:  # pragma: no cover
        if self.console.is_terminal:
            return questionary.password(question.question).unsafe_ask()
        if not question.hidden_fallback:
            raise InfrastructureException("Unable to hide the response.")
        return questionary.text(question.question, default=_text_default(question.default)).unsafe_ask()

    def _ask_choice(self, question: ChoiceQuestion) -> Any:  # pragma: no cover
        """Prompt until the answer validates or ``max_attempts`` runs out."""
        attempts = question.max_attempts
        error: InvalidArgumentException | None = None
        while attempts is None or attempts > 0:
            if error is not None:
                self.output.writeln(str(error), Verbosity.QUIET, style="error")
            try:
                return question.validate(self._select(question))
            except InvalidArgumentException as exc:
                error = exc
            if attempts is not None:
                attempts -= 1
        if error is None:
            raise InvalidArgumentException(f'No attempts allowed for "{question.question}".')
        raise error

    def _select(self, question: ChoiceQuestion) -> Any:  # pragma: no cover
        pairs = (
            [(str(key), str(label)) for key, label in question.choices.items()]
            if isinstance(question.choices, Mapping)
            else [(str(label), str(label)) for label in question.choices]
        )
        defaults = _default_values(question)
        if question.multiselect:
            choices = [questionary.Choice(title=t, value=v, checked=v in defaults) for v, t in pairs]
            return questionary.checkbox(question.question, choices=choices).unsafe_ask()
        choices = [questionary.Choice(title=t, value=v) for v, t in pairs]
        return questionary.select(
            question.question,
            choices=choices,
            default=defaults[0] if defaults else None,
        ).unsafe_ask()


def _text_default(default: Any) -> str:
    return "" if default is None else str(default)


def _default_values(question: ChoiceQuestion) -> list[str]:  # pragma: no cover
    resolved = question.resolve_default()
    if resolved is None:
        return []
    values = resolved if isinstance(resolved, list) else [resolved]
    return [str(value) for value in values]
