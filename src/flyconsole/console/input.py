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
"""Argument and option declarations, and the parsed input handed to commands."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import click

from flyconsole.kernel.exceptions import InvalidArgumentException


@dataclass
class InputArgument:
    """A positional argument declaration.

    ``mode`` is a bit mask of :attr:`REQUIRED` or :attr:`OPTIONAL`, optionally
    combined with :attr:`IS_ARRAY`. It defaults to :attr:`OPTIONAL`.
    """

    REQUIRED: ClassVar[int] = 1
    OPTIONAL: ClassVar[int] = 2
    IS_ARRAY: ClassVar[int] = 4

    name: str
    mode: int | None = None
    description: str = ""
    default: Any = None

    def __post_init__(self) -> None:
        if self.mode is None:
            self.mode = self.OPTIONAL
        elif self.mode > 7 or self.mode < 1:
            raise InvalidArgumentException(f'Argument mode "{self.mode}" is not valid.')
        if self.is_required and self.default is not None:
            raise InvalidArgumentException("Cannot set a default value except for OPTIONAL mode.")

    @property
    def is_required(self) -> bool:
        return bool(self.mode & self.REQUIRED)

    @property
    def is_array(self) -> bool:
        return bool(self.mode & self.IS_ARRAY)

    @property
    def param_name(self) -> str:
        return self.name.replace("-", "_")

    def to_click_param(self) -> click.Argument:
        """Convert the declaration into a :class:`click.Argument`."""
        kwargs: dict[str, Any] = {"required": self.is_required}
        if self.is_array:
            kwargs["nargs"] = -1
            if not self.is_required and self.default:
                kwargs["default"] = tuple(self.default)
        elif not self.is_required:
            kwargs["default"] = self.default
        return click.Argument([self.param_name], **kwargs)


@dataclass
class InputOption:
    """A ``--name`` option declaration.

    ``shortcut`` accepts ``"f"``, ``"-f"`` or several joined by ``|``.
    ``mode`` defaults to :attr:`VALUE_NONE` (a boolean flag).
    """

    VALUE_NONE: ClassVar[int] = 1
    VALUE_REQUIRED: ClassVar[int] = 2
    VALUE_OPTIONAL: ClassVar[int] = 4
    VALUE_IS_ARRAY: ClassVar[int] = 8
    VALUE_NEGATABLE: ClassVar[int] = 16

    name: str
    shortcut: str | None = None
    mode: int | None = None
    description: str = ""
    default: Any = None

    def __post_init__(self) -> None:
        self.name = self.name.lstrip("-")
        if not self.name:
            raise InvalidArgumentException("An option name cannot be empty.")
        if self.mode is None:
            self.mode = self.VALUE_NONE
        elif self.mode >= 32 or self.mode < 1:
            raise InvalidArgumentException(f'Option mode "{self.mode}" is not valid.')
        if self.is_array and not self.accepts_value:
            raise InvalidArgumentException(
                "Impossible to have an option mode VALUE_IS_ARRAY if the option does not accept a value."
            )
        if self.is_negatable and self.accepts_value:
            raise InvalidArgumentException("Impossible to have an option mode VALUE_NEGATABLE if the option also accepts a value.")
        if self.mode & self.VALUE_NONE and self.default not in (None, False):
            raise InvalidArgumentException("Cannot set a default value when using VALUE_NONE mode.")

    @property
    def accepts_value(self) -> bool:
        return bool(self.mode & (self.VALUE_REQUIRED | self.VALUE_OPTIONAL))

    @property
    def is_array(self) -> bool:
        return bool(self.mode & self.VALUE_IS_ARRAY)

    @property
    def is_negatable(self) -> bool:
        return bool(self.mode & self.VALUE_NEGATABLE)

    @property
    def param_name(self) -> str:
        return self.name.replace("-", "_")

    @property
    def shortcuts(self) -> list[str]:
        if not self.shortcut:
            return []
        return [s.lstrip("-") for s in self.shortcut.split("|") if s.lstrip("-")]

    def to_click_param(self) -> click.Option:
        """Convert the declaration into a :class:`click.Option`."""
        decls = [f"--{self.name}", *(f"-{s}" for s in self.shortcuts), self.param_name]
        help_text = self.description or None

        if self.is_negatable:
            decls[0] = f"--{self.name}/--no-{self.name}"
            kwargs: dict[str, Any] = {"help": help_text}
            if self.default is not None:
                kwargs["default"] = bool(self.default)
            return click.Option(decls, **kwargs)

        if not self.accepts_value:
            return click.Option(decls, is_flag=True, default=False, help=help_text)

        if self.is_array:
            return click.Option(decls, multiple=True, default=tuple(self.default or ()), help=help_text)

        if self.mode & self.VALUE_OPTIONAL:
            return click.Option(
                decls,
                is_flag=False,
                flag_value="" if self.default is None else self.default,
                default=self.default,
                help=help_text,
            )

        return click.Option(decls, default=self.default, help=help_text)


class InputDefinition:
    """Ordered collection of argument and option declarations for one command."""

    def __init__(self) -> None:
        self.arguments: dict[str, InputArgument] = {}
        self.options: dict[str, InputOption] = {}

    def add_argument(self, argument: InputArgument) -> None:
        if argument.name in self.arguments:
            raise InvalidArgumentException(f'An argument with name "{argument.name}" already exists.')
        last = next(reversed(self.arguments.values()), None)
        if last is not None and last.is_array:
            raise InvalidArgumentException("Cannot add an argument after an array argument.")
        if last is not None and argument.is_required and not last.is_required:
            raise InvalidArgumentException("Cannot add a required argument after an optional one.")
        self.arguments[argument.name] = argument

    def add_option(self, option: InputOption) -> None:
        if option.name in self.options:
            raise InvalidArgumentException(f'An option named "{option.name}" already exists.')
        self.options[option.name] = option


class CommandInput:
    """Parsed arguments and options of a single command invocation.

    Arguments are keyed by declared name and always start with ``command``
    holding the invoked command's name. Options are keyed by declared name
    without leading dashes.
    """

    def __init__(
        self,
        arguments: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        interactive: bool = True,
    ) -> None:
        self._arguments = dict(arguments or {})
        self._options = dict(options or {})
        self._interactive = interactive

    @classmethod
    def from_context(
        cls,
        ctx: click.Context,
        definition: InputDefinition,
        command_name: str,
        *,
        interactive: bool = True,
    ) -> CommandInput:
        """Collect the values click parsed for *definition* from *ctx*."""
        arguments: dict[str, Any] = {"command": command_name}
        for argument in definition.arguments.values():
            arguments[argument.name] = _normalize(ctx.params.get(argument.param_name))
        options: dict[str, Any] = {}
        for option in definition.options.values():
            options[option.name] = _normalize(ctx.params.get(option.param_name))
        return cls(arguments, options, interactive=interactive)

    def get_arguments(self) -> dict[str, Any]:
        return dict(self._arguments)

    def get_argument(self, name: str) -> Any:
        if name not in self._arguments:
            raise InvalidArgumentException(f'The "{name}" argument does not exist.')
        return self._arguments[name]

    def has_argument(self, name: str) -> bool:
        return name in self._arguments

    def get_options(self) -> dict[str, Any]:
        return dict(self._options)

    def get_option(self, name: str) -> Any:
        if name not in self._options:
            raise InvalidArgumentException(f'The "{name}" option does not exist.')
        return self._options[name]

    def has_option(self, name: str) -> bool:
        return name in self._options

    def is_interactive(self) -> bool:
        return self._interactive

    def __repr__(self) -> str:
        return f"CommandInput(arguments={self._arguments!r}, options={self._options!r})"


def _normalize(value: Any) -> Any:
    return list(value) if isinstance(value, tuple) else value
