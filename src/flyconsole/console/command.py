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
"""Base class for container-aware console commands."""

from __future__ import annotations

import abc
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar

import click
from rich.style import Style

from flyconsole.console.input import CommandInput, InputArgument, InputDefinition, InputOption
from flyconsole.console.output import OUTPUT_META_KEY, Output, OutputStyle
from flyconsole.console.question import ChoiceQuestion, Question
from flyconsole.console.table import TableSeparator
from flyconsole.console.verbosity import VERBOSITY_MAP, parse_verbosity
from flyconsole.kernel.exceptions import ConfigurationException, InvalidArgumentException

if TYPE_CHECKING:
    from flyconsole.console.application import Application
    from flyconsole.container.container import Container


class Command(click.Command, abc.ABC):
    """A click command whose logic lives in a container-invoked ``handle``.

    Subclasses declare ``name``, ``description`` and optionally ``help``, list
    their parameters in :meth:`get_arguments` / :meth:`get_options`, and
    implement ``handle``. Every annotated parameter of ``handle`` is resolved
    from the container at run time::

        class GreetCommand(Command):
            name = "greet"
            description = "Say hello"

            def get_arguments(self):
                return [("who", InputArgument.OPTIONAL, "Who to greet", "world")]

            def handle(self, greeter: Greeter) -> int:
                self.info(greeter.greet(self.argument("who")))
                return 0
    """

    name: str = ""
    description: str = ""
    help: str = ""

    verbosity_map: ClassVar[Mapping[str, int]] = VERBOSITY_MAP

    def __init__(self) -> None:
        if not self.name:
            raise ConfigurationException(
                f"The command defined in '{type(self).__qualname__}' cannot have an empty name."
            )
        super().__init__(
            name=self.name,
            help=self.help or self.description or None,
            short_help=self.description or None,
        )
        self.definition = InputDefinition()
        self.input: CommandInput | None = None
        self.output: OutputStyle | None = None
        self._container: Container | None = None
        self._application: Application | None = None
        self.specify_params()

    # -- lifecycle -------------------------------------------------------------

    def invoke(self, ctx: click.Context) -> int:
        """Entry point used by click once the arguments are parsed and validated."""
        output = ctx.meta.get(OUTPUT_META_KEY)
        if output is None:
            output = ctx.meta[OUTPUT_META_KEY] = Output()
        command_input = CommandInput.from_context(
            ctx,
            self.definition,
            self.name,
            interactive=output.is_interactive(),
        )
        return self.run(command_input, output)

    def run(self, input: CommandInput, output: Output | OutputStyle) -> int:
        """Capture the invocation context and execute, returning the exit status."""
        self.input = input
        self.output = OutputStyle(output)
        status = self.execute(input, self.output)
        if status is None:
            return 0
        if isinstance(status, bool) or not isinstance(status, int):
            raise TypeError(
                f"Return value of \"{type(self).__qualname__}.handle()\" must be of the type int, "
                f"\"{type(status).__name__}\" returned."
            )
        return status

    def execute(self, input: CommandInput, output: OutputStyle) -> int | None:
        if self._container is None:
            raise ConfigurationException(
                f'Command "{self.name}" has no container; register it through Application.add().'
            )
        return self._container.call(self.handle)

    @abc.abstractmethod
    def handle(self, *args: Any, **kwargs: Any) -> int | None:
        """Run the command. Annotated parameters are injected by the container."""

    def is_enabled(self) -> bool:
        return True

    # -- parameters ------------------------------------------------------------

    def get_arguments(self) -> Sequence[InputArgument | tuple[Any, ...]]:
        return []

    def get_options(self) -> Sequence[InputOption | tuple[Any, ...]]:
        return []

    def specify_params(self) -> None:
        for argument in self.get_arguments():
            if isinstance(argument, InputArgument):
                self.add_argument(argument)
            else:
                self.add_argument(*argument)
        for option in self.get_options():
            if isinstance(option, InputOption):
                self.add_option(option)
            else:
                self.add_option(*option)

    def add_argument(
        self,
        name: str | InputArgument,
        mode: int | None = None,
        description: str = "",
        default: Any = None,
    ) -> Command:
        argument = name if isinstance(name, InputArgument) else InputArgument(name, mode, description, default)
        self.definition.add_argument(argument)
        self.params.append(argument.to_click_param())
        return self

    def add_option(
        self,
        name: str | InputOption,
        shortcut: str | None = None,
        mode: int | None = None,
        description: str = "",
        default: Any = None,
    ) -> Command:
        option = name if isinstance(name, InputOption) else InputOption(name, shortcut, mode, description, default)
        self.definition.add_option(option)
        self.params.append(option.to_click_param())
        return self

    def argument(self, key: str | None = None) -> Any:
        command_input = self._active_input()
        if key is None:
            return command_input.get_arguments()
        return command_input.get_argument(key)

    def option(self, key: str | None = None) -> Any:
        command_input = self._active_input()
        if key is None:
            return command_input.get_options()
        return command_input.get_option(key)

    # -- output ----------------------------------------------------------------

    def info(self, message: str, verbosity: int | str | None = None) -> None:
        self.line(message, "info", verbosity)

    def comment(self, message: str, verbosity: int | str | None = None) -> None:
        self.line(message, "comment", verbosity)

    def question(self, message: str, verbosity: int | str | None = None) -> None:
        self.line(message, "question", verbosity)

    def error(self, message: str, verbosity: int | str | None = None) -> None:
        self.line(message, "error", verbosity)

    def warn(self, message: str, verbosity: int | str | None = None) -> None:
        formatter = self._active_output().formatter
        if not formatter.has_style("warning"):
            formatter.set_style("warning", Style(color="yellow"))
        self.line(message, "warning", verbosity)

    def line(self, message: str, style: str | None = None, verbosity: int | str | None = None) -> None:
        """Write *message* literally, in the formatter's *style* when given."""
        self._active_output().writeln(message, self.parse_verbosity(verbosity), style)

    def table(
        self,
        headers: Sequence[Any],
        rows: Iterable[Sequence[Any] | TableSeparator],
        style: str = "default",
    ) -> None:
        self._active_output().table(headers, rows, style)

    def time(self, message: str, format: str = "H:i:s") -> str:
        """Prefix *message* with ``[<now>]`` rendered in a ``date()``-style *format*."""
        return (f"[{format_datetime(format)}]" if format else "") + message

    @classmethod
    def parse_verbosity(cls, level: int | str | None = None) -> int:
        return parse_verbosity(level, cls.verbosity_map)

    # -- interaction (blocks on user input) ------------------------------------

    def confirm(self, question: str, default: bool = False) -> bool:  # pragma: no cover
        return self._active_output().confirm(question, default)

    def ask(self, question: str, default: str | None = None) -> Any:  # pragma: no cover
        return self._active_output().ask(question, default)

    def ask_with_completion(
        self, question: str, choices: Iterable[str], default: str | None = None
    ) -> Any:  # pragma: no cover
        return self._active_output().ask_question(
            Question(question, default, autocompleter_values=list(choices))
        )

    def secret(self, question: str, fallback: bool = True) -> Any:  # pragma: no cover
        return self._active_output().ask_question(
            Question(question, hidden=True, hidden_fallback=fallback)
        )

    def choice(
        self,
        question: str,
        choices: Sequence[str] | Mapping[str, str],
        default: str | None = None,
        attempts: int | None = None,
        multiple: bool = False,
    ) -> Any:  # pragma: no cover
        return self._active_output().ask_question(
            ChoiceQuestion(question, default, choices=choices, max_attempts=attempts, multiselect=multiple)
        )

    # -- nested invocation -----------------------------------------------------

    def call(self, command: str, arguments: Mapping[str, Any] | None = None) -> int:
        """Run the sibling *command* on the same output and return its exit status.

        *arguments* maps argument names and ``--option`` keys to values.
        """
        arguments = dict(arguments or {})
        if "command" in arguments:
            raise ConfigurationException(
                'The "command" key is reserved; pass the command name as the first parameter of call().'
            )
        target = self.get_application().find(command)
        argv = _build_argv(target, arguments)
        output = self._active_output().output

        parent = click.get_current_context(silent=True)
        with target.make_context(command, argv, parent=parent) as ctx:
            ctx.meta[OUTPUT_META_KEY] = output
            status = target.invoke(ctx)
        return status if isinstance(status, int) and not isinstance(status, bool) else 0

    # -- wiring ----------------------------------------------------------------

    def set_container(self, container: Container) -> None:
        self._container = container

    def get_container(self) -> Container | None:
        return self._container

    def set_application(self, application: Application | None) -> None:
        self._application = application

    def get_application(self) -> Application:
        if self._application is None:
            raise ConfigurationException(f'Command "{self.name}" is not attached to an application.')
        return self._application

    def _active_input(self) -> CommandInput:
        if self.input is None:
            raise ConfigurationException(f'Command "{self.name}" is not running; no input is available.')
        return self.input

    def _active_output(self) -> OutputStyle:
        if self.output is None:
            raise ConfigurationException(f'Command "{self.name}" is not running; no output is available.')
        return self.output


def _build_argv(target: click.Command, arguments: Mapping[str, Any]) -> list[str]:
    """Turn ``{"name": value, "--flag": True}`` into argv for *target*."""
    declared = [p for p in target.params if isinstance(p, click.Argument)]
    known = {p.name for p in declared}
    options: list[str] = []
    positional: dict[str, Any] = {}

    for key, value in arguments.items():
        if key.startswith("-"):
            if value is True or value is None:
                options.append(key)
            elif value is False:
                continue
            elif isinstance(value, (list, tuple)):
                for item in value:
                    options.extend([key, str(item)])
            else:
                options.extend([key, str(value)])
        elif key.replace("-", "_") in known:
            positional[key.replace("-", "_")] = value
        else:
            raise InvalidArgumentException(f'The "{key}" argument does not exist.')

    supplied = [i for i, param in enumerate(declared) if param.name in positional]
    defaults = _argument_defaults(target)
    values: list[str] = []
    # arguments are positional: a later one needs every earlier slot filled
    for param in declared[: supplied[-1] + 1] if supplied else []:
        if param.name in positional:
            value = positional[param.name]
        elif defaults.get(param.name) is not None:
            value = defaults[param.name]
        else:
            later = declared[supplied[-1]].name
            raise InvalidArgumentException(
                f'Cannot pass the "{later}" argument to "{target.name}" without the "{param.name}" argument, '
                "which has no default."
            )
        if isinstance(value, (list, tuple)):
            values.extend(str(item) for item in value)
        else:
            values.append(str(value))

    return [*options, "--", *values] if values else options


def _argument_defaults(target: click.Command) -> dict[str, Any]:
    if isinstance(target, Command):
        return {arg.param_name: arg.default for arg in target.definition.arguments.values()}
    return {
        param.name: param.default
        for param in target.params
        if isinstance(param, click.Argument) and isinstance(param.default, (str, int, float))
    }


_DATE_FORMATS: dict[str, Any] = {
    "Y": lambda d: f"{d.year:04d}",
    "y": lambda d: f"{d.year % 100:02d}",
    "m": lambda d: f"{d.month:02d}",
    "n": lambda d: str(d.month),
    "d": lambda d: f"{d.day:02d}",
    "j": lambda d: str(d.day),
    "H": lambda d: f"{d.hour:02d}",
    "G": lambda d: str(d.hour),
    "h": lambda d: f"{(d.hour % 12) or 12:02d}",
    "g": lambda d: str((d.hour % 12) or 12),
    "i": lambda d: f"{d.minute:02d}",
    "s": lambda d: f"{d.second:02d}",
    "A": lambda d: "PM" if d.hour >= 12 else "AM",
    "a": lambda d: "pm" if d.hour >= 12 else "am",
    "D": lambda d: d.strftime("%a"),
    "l": lambda d: d.strftime("%A"),
    "M": lambda d: d.strftime("%b"),
    "F": lambda d: d.strftime("%B"),
    "U": lambda d: str(int(d.timestamp())),
}


def format_datetime(format: str, moment: datetime | None = None) -> str:
    """Render *moment* (default: now) with ``date()``-style format letters; ``\\`` escapes one character."""
    moment = moment or datetime.now()
    parts: list[str] = []
    escaped = False
    for char in format:
        if escaped:
            parts.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _DATE_FORMATS:
            parts.append(_DATE_FORMATS[char](moment))
        else:
            parts.append(char)
    return "".join(parts)
