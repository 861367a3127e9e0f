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
"""Output verbosity levels and their symbolic names."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Any


class Verbosity(IntEnum):
    """Ordered output thresholds; a line is written when its level <= the sink's."""

    QUIET = 16
    NORMAL = 32
    VERBOSE = 64
    VERY_VERBOSE = 128
    DEBUG = 256


DEFAULT_VERBOSITY = Verbosity.NORMAL

VERBOSITY_MAP: dict[str, Verbosity] = {
    "v": Verbosity.VERBOSE,
    "vv": Verbosity.VERY_VERBOSE,
    "vvv": Verbosity.DEBUG,
    "quiet": Verbosity.QUIET,
    "normal": Verbosity.NORMAL,
}


def parse_verbosity(level: Any = None, mapping: Mapping[str, int] = VERBOSITY_MAP) -> int:
    """Map a symbolic name or raw ordinal to a verbosity level.

    Known names map through *mapping*, integers pass through
    unchanged, anything else (``None``, unknown names, ``bool``) falls back
    to :data:`DEFAULT_VERBOSITY`.
    """
    if isinstance(level, str) and level in mapping:
        return mapping[level]
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    return DEFAULT_VERBOSITY


def verbosity_from_flags(quiet: bool = False, verbose: int = 0) -> Verbosity:
    """Translate ``-q`` / repeated ``-v`` flags into a level."""
    if quiet:
        return Verbosity.QUIET
    if verbose >= 3:
        return Verbosity.DEBUG
    if verbose == 2:
        return Verbosity.VERY_VERBOSE
    if verbose == 1:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL
