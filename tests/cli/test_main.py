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
"""Tests for the ``flyconsole`` entry point."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from flyconsole import __version__
from flyconsole.cli.main import active_profiles, create_application, main
from flyconsole.console.command import Command
from flyconsole.console.properties import ConsoleProperties
from flyconsole.core.config import Config
from flyconsole.logging.port import LoggingPort


class PingCommand(Command):
    name = "ping"
    description = "Reply with the configured answer"

    def handle(self, config: Config, logging_port: LoggingPort, properties: ConsoleProperties) -> int:
        logging_port.get_logger("tests.ping").debug("ping_received")
        self.line(f"{config.get('app.answer', 'pong')} from {properties.name}")
        return 0


def _config(**console: object) -> Config:
    return Config(
        {
            "app": {"answer": "PONG"},
            "flyconsole": {
                "banner": {"mode": "MINIMAL"},
                "console": {"name": "shop", "commands": [f"{__name__}:PingCommand"], **console},
            },
        }
    )


class TestActiveProfiles:
    def test_reads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLYCONSOLE_PROFILES_ACTIVE", "dev, local,")
        assert active_profiles() == ["dev", "local"]

    def test_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("FLYCONSOLE_PROFILES_ACTIVE", raising=False)
        assert active_profiles() == []


class TestCreateApplication:
    def test_wires_configured_commands(self) -> None:
        buffer = StringIO()
        application = create_application(_config(), console=Console(file=buffer, width=120))
        assert application.name == "shop"
        assert application.has("ping")
        assert application.run(["ping"]) == 0
        assert buffer.getvalue() == "PONG from shop\n"

    def test_banner_and_version(self) -> None:
        buffer = StringIO()
        application = create_application(_config(), console=Console(file=buffer, width=120))
        assert application.long_version == f":: shop ::\n  version {__version__}"

    def test_catch_exceptions_setting(self) -> None:
        application = create_application(_config(catch_exceptions=False))
        assert application.catch_exceptions is False

    def test_config_is_in_container(self) -> None:
        config = _config()
        application = create_application(config)
        assert application.get_container().resolve(Config) is config


class TestMain:
    def test_project_config_is_loaded(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "flyconsole.yaml").write_text(
            "flyconsole:\n  banner:\n    mode: \"OFF\"\n  console:\n    name: tooling\n"
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("FLYCONSOLE_PROFILES_ACTIVE", raising=False)
        application = create_application(error_console=Console(file=StringIO()))
        assert application.long_version == f"tooling\n  version {__version__}"

    def test_main_returns_exit_status(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert main(["--version"]) == 0
        assert main(["no-such-command"]) == 2
