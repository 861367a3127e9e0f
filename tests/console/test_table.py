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
"""Tests for named table styles and rendering."""

from __future__ import annotations

from io import StringIO

import pytest
from rich import box
from rich.console import Console

from flyconsole.console.output import OutputFormatter
from flyconsole.console.table import TableSeparator, TableStyles, build_table, render_table
from flyconsole.kernel.exceptions import InvalidArgumentException


def _render(headers, rows, style: str = "default") -> str:
    buffer = StringIO()
    render_table(Console(file=buffer, width=80), headers, rows, TableStyles().get_style_definition(style))
    return buffer.getvalue()


class TestTableStyles:
    @pytest.mark.parametrize("name", ["default", "borderless", "compact", "box", "box-double", "markdown"])
    def test_builtin_styles_exist(self, name: str) -> None:
        styles = TableStyles()
        assert name in styles
        assert "box" in styles.get_style_definition(name)

    def test_unknown_style(self) -> None:
        with pytest.raises(InvalidArgumentException, match='Style "fancy" is not defined.'):
            TableStyles().get_style_definition("fancy")

    def test_register_style(self) -> None:
        styles = TableStyles()
        styles.set_style_definition("rounded", box.ROUNDED, show_lines=True)
        assert styles.get_style_definition("rounded") == {"box": box.ROUNDED, "show_lines": True}

    def test_definition_is_a_copy(self) -> None:
        styles = TableStyles()
        styles.get_style_definition("default")["box"] = None
        assert styles.get_style_definition("default")["box"] is box.ASCII

    def test_registration_stays_on_one_formatter(self) -> None:
        first, second = OutputFormatter(), OutputFormatter()
        first.table_styles.set_style_definition("rounded", box.ROUNDED)
        assert "rounded" in first.table_styles
        assert "rounded" not in second.table_styles
        with pytest.raises(InvalidArgumentException):
            second.table_styles.get_style_definition("rounded")


class TestBuildTable:
    def test_columns_and_rows(self) -> None:
        table = build_table(["Name", "Age"], [["ada", 36], ["alan", None]], TableStyles().get_style_definition("default"))
        assert [str(c.header) for c in table.columns] == ["Name", "Age"]
        assert table.row_count == 2

    def test_separator_starts_section(self) -> None:
        table = build_table(["Name"], [["a"], TableSeparator(), ["b"]], {"box": box.ASCII})
        assert table.row_count == 2
        assert table.rows[0].end_section is True

    def test_default_style_renders_ascii(self) -> None:
        output = _render(["Name"], [["ada"]])
        assert "+" in output
        assert "ada" in output

    def test_markdown_style(self) -> None:
        output = _render(["Name"], [["ada"]], style="markdown")
        assert "|" in output

    def test_bracketed_cells_render_verbatim(self) -> None:
        output = _render(["[Path]"], [["[/tmp]"], ["[bold]x[/bold]"]])
        assert "[Path]" in output
        assert "[/tmp]" in output
        assert "[bold]x[/bold]" in output
