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
"""Tests for the Output sink and the OutputStyle decorator."""

from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from flyconsole.console.output import Output, OutputFormatter, OutputStyle
from flyconsole.console.question import ChoiceQuestion, Question
from flyconsole.console.verbosity import Verbosity
from flyconsole.kernel.exceptions import InvalidArgumentException


def _output(verbosity: int = Verbosity.NORMAL, interactive: bool = True) -> tuple[Output, StringIO]:
    buffer = StringIO()
    return Output(Console(file=buffer, width=120), verbosity, interactive=interactive), buffer


class TestOutputFormatter:
    def test_default_styles(self) -> None:
        formatter = OutputFormatter()
        for name in ("info", "comment", "question", "error"):
            assert formatter.has_style(name)
        assert not formatter.has_style("warning")

    def test_set_style_refreshes_theme(self) -> None:
        formatter = OutputFormatter()
        before = formatter.theme
        formatter.set_style("warning", "yellow")
        assert formatter.theme is not before
        assert "warning" in formatter.theme.styles

    def test_names_are_case_insensitive(self) -> None:
        formatter = OutputFormatter({})
        formatter.set_style("Loud", "bold")
        assert formatter.has_style("loud")
        assert formatter.get_style("LOUD").bold


class TestOutput:
    def test_writeln_prints_brackets_verbatim(self) -> None:
        output, buffer = _output()
        output.writeln("[info]done[/info]")
        output.writeln("removed [/tmp] dir")
        assert buffer.getvalue() == "[info]done[/info]\nremoved [/tmp] dir\n"

    def test_named_style_keeps_text_plain(self) -> None:
        output, buffer = _output()
        output.writeln("done", style="info")
        assert buffer.getvalue() == "done\n"

    def test_unknown_style_is_rejected(self) -> None:
        output, _ = _output()
        with pytest.raises(InvalidArgumentException):
            output.writeln("done", style="sparkly")

    def test_lines_above_verbosity_are_dropped(self) -> None:
        output, buffer = _output()
        output.writeln("chatty", Verbosity.VERBOSE)
        output.writeln("shown", Verbosity.NORMAL)
        assert buffer.getvalue() == "shown\n"

    def test_quiet_sink_keeps_quiet_lines(self) -> None:
        output, buffer = _output(Verbosity.QUIET)
        output.writeln("normal")
        output.writeln("always", Verbosity.QUIET)
        assert buffer.getvalue() == "always\n"
        assert output.is_quiet()

    def test_verbosity_predicates(self) -> None:
        output, _ = _output(Verbosity.VERY_VERBOSE)
        assert output.is_verbose()
        assert output.is_very_verbose()
        assert not output.is_debug()


class TestOutputStyle:
    def test_wrapping_a_style_reuses_the_sink(self) -> None:
        output, _ = _output()
        assert OutputStyle(OutputStyle(output)).output is output

    def test_table(self) -> None:
        output, buffer = _output()
        OutputStyle(output).table(["Name"], [["ada"]])
        assert "ada" in buffer.getvalue()

    def test_table_uses_styles_registered_on_the_sink(self) -> None:
        output, buffer = _output()
        output.formatter.table_styles.set_style_definition("plain", None, show_header=False)
        OutputStyle(output).table(["Name"], [["ada"]], style="plain")
        assert "Name" not in buffer.getvalue()
        assert "ada" in buffer.getvalue()

    def test_non_interactive_prompts_return_defaults(self) -> None:
        style = OutputStyle(_output(interactive=False)[0])
        assert style.confirm("Continue?", default=False) is False
        assert style.ask("Name?", "ada") == "ada"
        assert style.ask_question(Question("Secret?", hidden=True, hidden_fallback=False)) is None
        assert style.ask_question(ChoiceQuestion("Color?", "0", choices=["red", "blue"])) == "red"
