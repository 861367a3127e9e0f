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
"""Tests for verbosity levels and their symbolic names."""

from __future__ import annotations

import pytest

from flyconsole.console.verbosity import (
    DEFAULT_VERBOSITY,
    Verbosity,
    parse_verbosity,
    verbosity_from_flags,
)


class TestVerbosityOrder:
    def test_levels_are_ordered(self) -> None:
        assert Verbosity.QUIET < Verbosity.NORMAL < Verbosity.VERBOSE < Verbosity.VERY_VERBOSE < Verbosity.DEBUG

    def test_default_is_normal(self) -> None:
        assert DEFAULT_VERBOSITY == Verbosity.NORMAL == 32


class TestParseVerbosity:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("v", Verbosity.VERBOSE),
            ("vv", Verbosity.VERY_VERBOSE),
            ("vvv", Verbosity.DEBUG),
            ("quiet", Verbosity.QUIET),
            ("normal", Verbosity.NORMAL),
        ],
    )
    def test_symbolic_names(self, name: str, expected: Verbosity) -> None:
        assert parse_verbosity(name) == expected

    def test_integers_pass_through(self) -> None:
        assert parse_verbosity(64) == 64
        assert parse_verbosity(7) == 7

    @pytest.mark.parametrize("level", [None, "loud", "V", True, 1.5])
    def test_everything_else_is_normal(self, level: object) -> None:
        assert parse_verbosity(level) == Verbosity.NORMAL

    def test_custom_mapping(self) -> None:
        assert parse_verbosity("shout", {"shout": Verbosity.QUIET}) == Verbosity.QUIET
        assert parse_verbosity("v", {"shout": Verbosity.QUIET}) == Verbosity.NORMAL


class TestVerbosityFromFlags:
    def test_quiet_wins(self) -> None:
        assert verbosity_from_flags(quiet=True, verbose=3) == Verbosity.QUIET

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, Verbosity.NORMAL),
            (1, Verbosity.VERBOSE),
            (2, Verbosity.VERY_VERBOSE),
            (3, Verbosity.DEBUG),
            (5, Verbosity.DEBUG),
        ],
    )
    def test_verbose_count(self, count: int, expected: Verbosity) -> None:
        assert verbosity_from_flags(verbose=count) == expected
