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
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from flyconsole.kernel.exceptions import InvalidArgumentException


class TableSeparator:
    """Row marker that starts a new section of the table."""


_DEFAULT_STYLES: Mapping[str, Mapping[str, Any]] = {
    "default": {"box": box.ASCII},
    "borderless": {"box": box.SIMPLE_HEAD, "show_edge": False},
    "compact": {"box": None, "show_edge": False, "pad_edge": False},
    "box": {"box": box.SQUARE},
    "box-double": {"box": box.DOUBLE},
    "markdown": {"box": box.MARKDOWN},
}


class TableStyles:
    """Named table styles known to one output sink.

    Each instance starts from the built-in styles; registering a style on
    one sink leaves every other sink untouched.
    """

    def __init__(self) -> None:
        self._styles: dict[str, dict[str, Any]] = {name: dict(opts) for name, opts in _DEFAULT_STYLES.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._styles

    def set_style_definition(self, name: str, table_box: box.Box | None, **options: Any) -> None:
        """Register (or replace) a named style; *options* are :class:`rich.table.Table` keywords."""
        self._styles[name] = {"box": table_box, **options}

    def get_style_definition(self, name: str) -> dict[str, Any]:
        if name not in self._styles:
            raise InvalidArgumentException(f'Style "{name}" is not defined.')
        return dict(self._styles[name])


def _cell(value: Any) -> Text:
    # cells are literal text, never markup
    return Text("" if value is None else str(value))


def build_table(
    headers: Sequence[Any],
    rows: Iterable[Sequence[Any] | TableSeparator],
    style_definition: Mapping[str, Any],
) -> Table:
    """Build a rich :class:`Table` for *headers* and *rows* with the given style options."""
    table = Table(header_style="green", **style_definition)
    for header in headers:
        table.add_column(_cell(header))
    for row in rows:
        if isinstance(row, TableSeparator):
            table.add_section()
            continue
        table.add_row(*(_cell(value) for value in row))
    return table


def render_table(
    console: Console,
    headers: Sequence[Any],
    rows: Iterable[Sequence[Any] | TableSeparator],
    style_definition: Mapping[str, Any],
) -> None:
    console.print(build_table(headers, rows, style_definition))
