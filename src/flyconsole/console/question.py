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
"""Question models asked through :class:`~flyconsole.console.output.OutputStyle`."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from flyconsole.kernel.exceptions import InvalidArgumentException


@dataclass
class Question:
    """A free-text question.

    ``hidden`` masks the answer; ``hidden_fallback`` allows a visible prompt
    when the terminal cannot hide input. ``autocompleter_values`` enables
    completion.
    """

    question: str
    default: Any = None
    hidden: bool = False
    hidden_fallback: bool = True
    autocompleter_values: list[str] = field(default_factory=list)

    def resolve_default(self) -> Any:
        return self.default


@dataclass
class ChoiceQuestion(Question):
    """A question whose answer must be one of ``choices``.

    Answers may be given as a value or as its key (list index for sequences).
    ``max_attempts`` of ``None`` retries forever. With ``multiselect`` the
    answer is a comma-separated string or a list of answers, and a list is
    returned.
    """

    choices: Sequence[str] | Mapping[str, str] = field(default_factory=list)
    max_attempts: int | None = None
    multiselect: bool = False
    error_message: str = 'Value "{}" is invalid'

    def __post_init__(self) -> None:
        if not self.choices:
            raise InvalidArgumentException("Choice question must have at least 1 choice available.")

    def validate(self, answer: Any) -> Any:
        """Map *answer* onto the accepted choice(s) or raise :class:`InvalidArgumentException`."""
        if isinstance(answer, (list, tuple)):
            parts = [str(part).strip() for part in answer]
        else:
            selected = "" if answer is None else str(answer)
            parts = [part.strip() for part in selected.split(",")] if self.multiselect else [selected.strip()]
        if not parts:
            raise InvalidArgumentException(self.error_message.format(""))
        matched = [self._match(part) for part in parts]
        return matched if self.multiselect else matched[0]

    def resolve_default(self) -> Any:
        if self.default is None:
            return None
        return self.validate(self.default)

    def _match(self, value: str) -> Any:
        if isinstance(self.choices, Mapping):
            for key, label in self.choices.items():
                if value == str(key) or value == label:
                    return key
        else:
            if value in self.choices:
                return value
            if value.isdigit() and int(value) < len(self.choices):
                return self.choices[int(value)]
        raise InvalidArgumentException(self.error_message.format(value))
