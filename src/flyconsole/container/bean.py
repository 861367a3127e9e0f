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
"""@primary marker and Qualifier for disambiguation."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T", bound=type)


_PRIMARY_ATTR = "__flyconsole_primary__"


def primary(cls: T) -> T:
    """Prefer *cls* when several implementations are bound to one interface."""
    setattr(cls, _PRIMARY_ATTR, True)
    return cls


def is_primary(cls: type) -> bool:
    return getattr(cls, _PRIMARY_ATTR, False)


class Qualifier:
    """Used with typing.Annotated to select a specific named bean.

    Usage::

        def handle(self, db: Annotated[DataSource, Qualifier("primary_db")]) -> int:
            ...
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Qualifier({self.name!r})"
