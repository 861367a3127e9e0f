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
"""Application banner rendering: ASCII art, minimal, or custom file."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flyconsole.core.config import Config

_DEFAULT_BANNER = r"""
    ______          ______                       __
   / __/ /_  __    / ____/___  ____  _________  / /__
  / /_/ / / / /   / /   / __ \/ __ \/ ___/ __ \/ / _ \
 / __/ / /_/ /   / /___/ /_/ / / / (__  ) /_/ / /  __/
/_/ /_/\__, /____\____/\____/_/ /_/____/\____/_/\___/
      /____/_____/
""".lstrip("\n")


class BannerMode(enum.Enum):
    TEXT = "TEXT"
    MINIMAL = "MINIMAL"
    OFF = "OFF"


class BannerPrinter:
    """Builds the text shown above help and version output.

    ``TEXT`` uses the file at *custom_location* when it can be read, the
    built-in logo otherwise; ``${app.name}`` in either is replaced.
    """

    def __init__(self, mode: BannerMode = BannerMode.TEXT, app_name: str = "", custom_location: str = "") -> None:
        self._mode = mode
        self._app_name = app_name
        self._custom_location = custom_location

    @classmethod
    def from_config(cls, config: Config, app_name: str = "") -> BannerPrinter:
        """Read ``flyconsole.banner.mode`` and ``flyconsole.banner.location``; unknown modes mean TEXT."""
        raw_mode = str(config.get("flyconsole.banner.mode", "TEXT")).upper()
        mode = BannerMode.__members__.get(raw_mode, BannerMode.TEXT)
        return cls(mode, app_name, str(config.get("flyconsole.banner.location", "") or ""))

    def render(self) -> str:
        if self._mode is BannerMode.OFF:
            return self._app_name
        if self._mode is BannerMode.MINIMAL:
            return f":: {self._app_name or 'flyconsole'} ::"
        text = self._read_custom() or _DEFAULT_BANNER
        return text.replace("${app.name}", self._app_name).rstrip("\n")

    def _read_custom(self) -> str | None:
        if not self._custom_location:
            return None
        try:
            return Path(self._custom_location).read_text()
        except (OSError, UnicodeDecodeError):
            return None
