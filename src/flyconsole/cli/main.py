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
"""``flyconsole`` entry point: config, logging and container wiring around :class:`Application`."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from flyconsole import __version__
from flyconsole.console.application import Application
from flyconsole.console.properties import ConsoleProperties
from flyconsole.container.container import Container
from flyconsole.core.banner import BannerPrinter
from flyconsole.core.config import Config
from flyconsole.logging.port import LoggingPort
from flyconsole.logging.structlog_adapter import StructlogAdapter


def active_profiles() -> list[str]:
    """Profiles from ``FLYCONSOLE_PROFILES_ACTIVE`` (comma-separated)."""
    raw = os.environ.get("FLYCONSOLE_PROFILES_ACTIVE", "")
    return [p.strip() for p in raw.split(",") if p.strip()]


def create_application(
    config: Config | None = None,
    *,
    console: Console | None = None,
    error_console: Console | None = None,
) -> Application:
    """Build a fully wired :class:`Application` from *config*.

    The container holds the :class:`Config` and the logging adapter, so
    commands can ask for either in ``handle``. Commands listed under
    ``flyconsole.console.commands`` are registered in order.
    """
    if config is None:
        config = Config.from_sources(Path.cwd(), active_profiles=active_profiles())

    logging_adapter = StructlogAdapter()
    logging_adapter.configure(config)

    container = Container()
    container.register_instance(Config, config)
    container.register_instance(StructlogAdapter, logging_adapter)
    container.bind(LoggingPort, StructlogAdapter)

    properties = config.bind(ConsoleProperties)
    container.register_instance(ConsoleProperties, properties)

    application = Application(
        container,
        __version__,
        name=properties.name,
        banner=BannerPrinter.from_config(config, app_name=properties.name).render(),
        console=console,
        error_console=error_console,
        catch_exceptions=properties.catch_exceptions,
        default_command=properties.default_command,
    )
    application.normalize_commands(properties.commands)
    return application


def main(argv: Sequence[str] | None = None) -> int:
    return create_application().run(argv)
