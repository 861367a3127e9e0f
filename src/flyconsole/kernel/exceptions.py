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
"""Unified exception hierarchy for flyconsole.

All library exceptions inherit from FlyConsoleException, so callers can
catch one type at the process boundary or a specific subclass for targeted
handling.

Categories:
- BusinessException: invalid input and lookups that find nothing
- InfrastructureException: wiring and configuration failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyConsoleException(Exception):
    """Base exception for all flyconsole errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "COMMAND_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(FlyConsoleException):
    """Errors caused by what the caller asked for."""


class ValidationException(BusinessException):
    """Input validation failures."""


class InvalidArgumentException(ValidationException):
    """An argument, option, style or answer is not known or not acceptable."""


class ResourceNotFoundException(BusinessException):
    """Requested resource does not exist."""


class CommandNotFoundException(ResourceNotFoundException, LookupError):
    """No command is registered under the requested name."""

    def __init__(self, name: str, alternatives: list[str] | None = None) -> None:
        self.name = name
        self.alternatives = alternatives or []
        message = f'Command "{name}" is not defined.'
        if self.alternatives:
            message += "\n\nDid you mean one of these?\n    " + "\n    ".join(self.alternatives)
        super().__init__(
            message,
            code="COMMAND_NOT_FOUND",
            context={"name": name, "alternatives": self.alternatives},
        )


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyConsoleException):
    """Wiring failures: container, registry and configuration problems."""


class ConfigurationException(InfrastructureException):
    """The application or a command was set up or called inconsistently."""
