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
"""Errors raised while the container builds or looks up a service."""

from __future__ import annotations

from flyconsole.kernel.exceptions import InfrastructureException


def _type_name(obj: object) -> str:
    return getattr(obj, "__name__", repr(obj))


class BeanCreationException(InfrastructureException):
    """A service could not be produced by the container.

    ``headline`` is the one-line reason; ``details`` are indented lines
    appended below it (dependency path, hints).
    """

    def __init__(self, headline: str, details: list[str] | None = None, code: str = "BEAN_CREATION") -> None:
        self.headline = headline
        self.details = details or []
        message = "\n".join([f"{type(self).__name__}: {headline}", *self.details])
        super().__init__(message, code=code, context={"reason": headline})


def _origin(required_by: str | None, parameter: str | None) -> list[str]:
    lines = []
    if required_by:
        lines.append(f"  Required by: {required_by}")
    if parameter:
        lines.append(f"    Parameter: {parameter}")
    return ["", *lines] if lines else []


class NoSuchBeanError(BeanCreationException, LookupError):
    """Nothing is registered for the requested type or name."""

    def __init__(
        self,
        *,
        bean_type: type | None = None,
        bean_name: str | None = None,
        required_by: str | None = None,
        parameter: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.bean_type = bean_type
        self.bean_name = bean_name
        self.required_by = required_by
        self.parameter = parameter
        self.suggestions = suggestions or []

        if bean_type is not None:
            headline = f"No bean of type '{_type_name(bean_type)}' is registered"
        elif bean_name:
            headline = f"No bean named '{bean_name}' is registered"
        else:
            headline = "No matching bean is registered"

        details = _origin(required_by, parameter)
        details += [
            "",
            "  Register it with Container.register() / register_instance(),",
            "  or bind an interface to an implementation with Container.bind().",
        ]
        if self.suggestions:
            details += ["", f"  Similar registered types: {', '.join(self.suggestions)}"]
        super().__init__(headline, details, code="NO_SUCH_BEAN")


class NoUniqueBeanError(BeanCreationException):
    """Several implementations are bound to one interface and none is primary."""

    def __init__(
        self,
        *,
        bean_type: type,
        candidates: list[type],
        required_by: str | None = None,
        parameter: str | None = None,
    ) -> None:
        self.bean_type = bean_type
        self.candidates = candidates
        self.required_by = required_by
        self.parameter = parameter

        names = ", ".join(_type_name(c) for c in candidates)
        details = ["", f"  Candidates: {names}", *_origin(required_by, parameter)]
        details += ["", "  Mark one implementation with @primary or inject it with Qualifier('name')."]
        super().__init__(
            f"Multiple beans of type '{_type_name(bean_type)}' found but none is marked @primary",
            details,
            code="NO_UNIQUE_BEAN",
        )


class BeanCurrentlyInCreationError(BeanCreationException):
    """A service depends on itself, directly or through others.

    ``chain`` holds the types being built, outermost first.
    """

    def __init__(self, *, chain: list[type], current: type) -> None:
        self.chain = chain
        self.current = current
        path = " -> ".join(_type_name(t) for t in [*chain, current])
        super().__init__(
            f"Circular dependency: {path}",
            ["", "  Resolve one side lazily, e.g. from the Container inside handle()."],
            code="CIRCULAR_DEPENDENCY",
        )
