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
"""Type-hint driven service container."""

from __future__ import annotations

import difflib
import importlib
import inspect
import types
import typing
from collections.abc import Callable
from typing import Annotated, Any, TypeVar, Union, cast, get_args, get_origin

from flyconsole.container.bean import Qualifier, is_primary
from flyconsole.container.exceptions import (
    BeanCurrentlyInCreationError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from flyconsole.container.registry import Registration
from flyconsole.container.types import Scope

T = TypeVar("T")


def _type_name(obj: Any) -> str:
    return getattr(obj, "__name__", repr(obj))


class Container:
    """Builds services and invokes callables from their type hints.

    Services are added with :meth:`register` (built on demand, constructor
    parameters injected) or :meth:`register_instance`. :meth:`bind` maps an
    interface onto registered implementations; a ``@primary`` one wins when
    several are bound. Parameter hints may be plain types, ``T | None``
    (``None`` when missing), ``list[T]`` (every bound implementation) or
    ``Annotated[T, Qualifier(name)]``.

    The container registers itself, so ``Container`` can be injected too.
    """

    def __init__(self) -> None:
        self._registrations: dict[type, Registration] = {}
        self._named: dict[str, Registration] = {}
        self._bindings: dict[type, list[type]] = {}
        self._building: list[type] = []
        self.register_instance(Container, self)

    # -- registration ----------------------------------------------------------

    def register(self, cls: type, scope: Scope = Scope.SINGLETON, name: str = "") -> None:
        self._add(Registration(impl_type=cls, scope=scope, name=name))

    def register_instance(self, cls: type, instance: Any, name: str = "") -> None:
        self._add(Registration(impl_type=cls, instance=instance, name=name))

    def bind(self, interface: type, implementation: type) -> None:
        """Make *implementation* (itself registered) resolvable as *interface*."""
        implementations = self._bindings.setdefault(interface, [])
        if implementation not in implementations:
            implementations.append(implementation)

    def contains(self, name: str) -> bool:
        return name in self._named

    def _add(self, registration: Registration) -> None:
        self._registrations[registration.impl_type] = registration
        if registration.name:
            self._named[registration.name] = registration

    # -- lookup ----------------------------------------------------------------

    def resolve(self, cls: type[T]) -> T:
        registration = self._registrations.get(cls)
        if registration is not None:
            return cast(T, self._instance_of(registration))

        candidates = self._bindings.get(cls, [])
        if not candidates:
            raise NoSuchBeanError(bean_type=cls, suggestions=self._similar_types(cls))
        if len(candidates) > 1:
            preferred = [c for c in candidates if is_primary(c)]
            if not preferred:
                raise NoUniqueBeanError(bean_type=cls, candidates=candidates)
            candidates = preferred
        return cast(T, self._instance_of(self._registration_for(candidates[0])))

    def resolve_by_name(self, name: str) -> Any:
        registration = self._named.get(name)
        if registration is None:
            raise NoSuchBeanError(
                bean_name=name,
                suggestions=difflib.get_close_matches(name, list(self._named), n=5, cutoff=0.4),
            )
        return self._instance_of(registration)

    def resolve_all(self, cls: type[T]) -> list[T]:
        """Every implementation bound to *cls*, in binding order."""
        return [self._instance_of(self._registration_for(impl)) for impl in self._bindings.get(cls, [])]

    def make(self, identifier: type[T] | str) -> Any:
        """Build a service from a class, a bean name, or a dotted import path.

        Unregistered concrete classes are registered as ``TRANSIENT`` on the
        fly so that every ``make`` of them yields a fresh, fully-wired
        instance. Strings are tried as bean names first and then as
        ``"package.module:Name"`` / ``"package.module.Name"`` import paths.
        """
        if isinstance(identifier, str):
            if identifier in self._named:
                return self.resolve_by_name(identifier)
            target = _import_string(identifier)
            if target is None:
                return self.resolve_by_name(identifier)
            identifier = target

        if (
            identifier not in self._registrations
            and identifier not in self._bindings
            and inspect.isclass(identifier)
            and not inspect.isabstract(identifier)
        ):
            self.register(identifier, scope=Scope.TRANSIENT)
        return self.resolve(identifier)

    def call(self, func: Callable[..., T], /, **overrides: Any) -> T:
        """Invoke *func* with its annotated parameters resolved from the container.

        Keyword *overrides* take precedence over container resolution.
        Parameters that cannot be resolved fall back to their declared
        default, or raise :class:`NoSuchBeanError` when they have none.
        """
        required_by = f"{getattr(func, '__qualname__', repr(func))}()"
        return func(**self._arguments_for(func, required_by, overrides))

    # -- building --------------------------------------------------------------

    def _registration_for(self, cls: type) -> Registration:
        registration = self._registrations.get(cls)
        if registration is None:
            raise NoSuchBeanError(bean_type=cls, suggestions=self._similar_types(cls))
        return registration

    def _instance_of(self, registration: Registration) -> Any:
        if registration.instance is not None:
            return registration.instance
        instance = self._build(registration.impl_type)
        if registration.scope is Scope.SINGLETON:
            registration.instance = instance
        return instance

    def _build(self, cls: type) -> Any:
        if cls in self._building:
            raise BeanCurrentlyInCreationError(chain=list(self._building), current=cls)
        self._building.append(cls)
        try:
            init = cls.__init__  # type: ignore[misc]
            if init is object.__init__:
                return cls()
            return cls(**self._arguments_for(init, f"{cls.__qualname__}.__init__()"))
        finally:
            self._building.pop()

    def _arguments_for(
        self,
        func: Callable[..., Any],
        required_by: str,
        overrides: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        hints = typing.get_type_hints(func, include_extras=True)
        overrides = overrides or {}
        kwargs: dict[str, Any] = {}
        for name, param in inspect.signature(func).parameters.items():
            if name in overrides:
                kwargs[name] = overrides[name]
                continue
            if name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue

            optional = param.default is not param.empty
            hint = hints.get(name)
            if hint is None:
                if optional:
                    continue
                raise NoSuchBeanError(required_by=required_by, parameter=name)

            try:
                kwargs[name] = self._resolve_hint(hint)
            except (NoSuchBeanError, NoUniqueBeanError):
                if optional:
                    continue
                raise NoSuchBeanError(
                    bean_type=hint if isinstance(hint, type) else None,
                    required_by=required_by,
                    parameter=f"{name}: {_type_name(hint)}",
                    suggestions=self._similar_types(hint),
                ) from None
        return kwargs

    def _resolve_hint(self, hint: Any) -> Any:
        origin = get_origin(hint)

        if origin is Annotated:
            base, *metadata = get_args(hint)
            qualifier = next((m for m in metadata if isinstance(m, Qualifier)), None)
            if qualifier is not None:
                return self.resolve_by_name(qualifier.name)
            return self._resolve_hint(base)

        if origin is Union or isinstance(hint, types.UnionType):
            members = [arg for arg in get_args(hint) if arg is not type(None)]
            if len(members) == 1:
                try:
                    return self.resolve(members[0])
                except (NoSuchBeanError, NoUniqueBeanError):
                    return None

        if origin is list and get_args(hint):
            return self.resolve_all(get_args(hint)[0])

        # class references are values, not services
        if hint is type or origin is type:
            raise NoSuchBeanError(bean_type=hint if isinstance(hint, type) else None)

        return self.resolve(hint)

    def _similar_types(self, cls: Any) -> list[str]:
        name = getattr(cls, "__name__", "")
        if not name:
            return []
        registered = [_type_name(c) for c in self._registrations]
        return difflib.get_close_matches(name, registered, n=5, cutoff=0.4)


def _import_string(path: str) -> Any:
    """Import ``"pkg.mod:Name"`` or ``"pkg.mod.Name"``; ``None`` if *path* is not dotted."""
    if ":" in path:
        module_name, _, attr = path.partition(":")
    elif "." in path:
        module_name, _, attr = path.rpartition(".")
    else:
        return None
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise NoSuchBeanError(bean_name=path) from None
