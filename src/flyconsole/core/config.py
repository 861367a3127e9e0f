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
"""Type-safe configuration with YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import os
import re
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__flyconsole_config_prefix__"

_CONFIG_STEM = "flyconsole"

_MISSING = object()

_MAX_PLACEHOLDER_DEPTH = 10


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="flyconsole.console")
        @dataclass
        class ConsoleProperties:
            name: str = "flyconsole"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def _lookup(data: dict[str, Any], key: str) -> Any:
    """Walk *data* along a dot-notation *key*; ``_MISSING`` when a segment is absent."""
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _candidates(base_dir: Path, stem: str) -> Iterator[Path]:
    for search_dir in (base_dir / "config", base_dir):
        for ext in (".yaml", ".toml"):
            path = search_dir / f"{stem}{ext}"
            if path.is_file():
                yield path


def _env_key(key: str) -> str:
    # flyconsole.console.name -> FLYCONSOLE_CONSOLE_NAME
    name = key.removeprefix(f"{_CONFIG_STEM}.")
    return "FLYCONSOLE_" + name.upper().replace(".", "_").replace("-", "_")


def _coerce(value: Any, expected: Any) -> Any:
    if not isinstance(value, str):
        return value
    if expected is bool:
        return value.lower() in ("true", "1", "yes")
    if expected is int:
        return int(value)
    if expected is float:
        return float(value)
    if get_origin(expected) is list:
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Config:
    """Dot-notation view over merged configuration files.

    A value is looked up in this order:
    1. ``FLYCONSOLE_<KEY>`` environment variables
    2. the merged file / dict data
    3. the caller's default (dataclass defaults when binding)
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Files that were merged, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
    ) -> Config:
        """Merge ``flyconsole.{yaml,toml}`` from ``config/`` and *base_dir*, then profile overlays.

        Later files win: ``config/`` before the project root, the base files
        before ``flyconsole-<profile>.*`` for each active profile in order.
        """
        base_dir = Path(base_dir)
        config = cls()
        layers = [(_CONFIG_STEM, "")]
        layers += [(f"{_CONFIG_STEM}-{p}", f" (profile: {p})") for p in active_profiles or []]
        for stem, label in layers:
            for path in _candidates(base_dir, stem):
                config._data = _merge(config._data, _read(path))
                config._loaded_sources.append(f"{path}{label}")
        return config

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load one YAML or TOML file; a missing file gives an empty config."""
        path = Path(path)
        if not path.is_file():
            return cls()
        config = cls(_read(path))
        config._loaded_sources.append(str(path))
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Value at *key*, with env override and ``${...}`` placeholders resolved.

        Placeholders name an environment variable or another config key and
        may carry a fallback after a colon: ``${HOME}``, ``${app.name}``,
        ``${PORT:8080}``.
        """
        env_val = os.environ.get(_env_key(key))
        if env_val is not None:
            return env_val

        value = _lookup(self._data, key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for circular references.")

        def replace(match: re.Match[str]) -> str:
            inner = match.group(1)
            ref, sep, fallback = inner.partition(":")

            env_val = os.environ.get(ref)
            if env_val is not None:
                return env_val

            found = _lookup(self._data, ref)
            if found is not _MISSING and found is not None:
                resolved = str(found)
                return self._resolve_placeholders(resolved, depth + 1) if "${" in resolved else resolved

            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = _lookup(self._data, prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from its configuration prefix.

        Each field goes through :meth:`get`, so env overrides apply; string
        values are coerced to ``bool``, ``int``, ``float`` and comma-separated
        ``list`` fields. Missing fields keep their dataclass default.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}", _MISSING)
            if value is not _MISSING:
                kwargs[field.name] = _coerce(value, hints.get(field.name))
        return config_cls(**kwargs)
