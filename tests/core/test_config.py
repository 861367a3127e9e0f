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
"""Tests for Config loading, env overrides, placeholders and binding."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from flyconsole.core.config import Config, config_properties


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"database": {"pool": {"size": 10}}})
        assert config.get("database.pool.size") == 10

    def test_get_with_default(self):
        config = Config({})
        assert config.get("missing.key", "default") == "default"

    def test_false_values_are_returned(self):
        config = Config({"flyconsole": {"console": {"catch_exceptions": False}}})
        assert config.get("flyconsole.console.catch_exceptions", True) is False

    def test_env_var_override(self):
        os.environ["FLYCONSOLE_CONSOLE_NAME"] = "env-console"
        try:
            config = Config({"flyconsole": {"console": {"name": "file-console"}}})
            assert config.get("flyconsole.console.name") == "env-console"
        finally:
            del os.environ["FLYCONSOLE_CONSOLE_NAME"]

    def test_placeholder_from_config(self):
        config = Config({"app": {"name": "shop", "title": "${app.name} console"}})
        assert config.get("app.title") == "shop console"

    def test_placeholder_default(self):
        config = Config({"app": {"title": "${FLYCONSOLE_TEST_UNSET_VAR:fallback}"}})
        assert config.get("app.title") == "fallback"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"app": {"title": "${FLYCONSOLE_TEST_UNSET_VAR}"}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("app.title")

    def test_get_section(self):
        config = Config({"flyconsole": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("flyconsole.logging.level") == {"root": "DEBUG"}
        assert config.get_section("flyconsole.missing") == {}


class TestConfigSources:
    def test_from_file_yaml(self, tmp_path: Path):
        path = tmp_path / "settings.yaml"
        path.write_text("app:\n  name: my-console\n")
        config = Config.from_file(path)
        assert config.get("app.name") == "my-console"
        assert config.loaded_sources == [str(path)]

    def test_from_file_missing_is_empty(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []

    def test_from_sources_merges_root_over_config_dir(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "flyconsole.yaml").write_text("app:\n  name: base\n  port: 1\n")
        (tmp_path / "flyconsole.toml").write_text('[app]\nname = "root"\n')
        config = Config.from_sources(tmp_path)
        assert config.get("app.name") == "root"
        assert config.get("app.port") == 1
        assert len(config.loaded_sources) == 2

    def test_from_sources_applies_profiles(self, tmp_path: Path):
        (tmp_path / "flyconsole.yaml").write_text("server:\n  port: 8080\n  host: localhost\n")
        (tmp_path / "flyconsole-dev.yaml").write_text("server:\n  port: 9090\n")
        config = Config.from_sources(tmp_path, active_profiles=["dev"])
        assert config.get("server.port") == 9090
        assert config.get("server.host") == "localhost"
        assert config.loaded_sources[-1].endswith("(profile: dev)")


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_uses_defaults(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///default.db"
            pool_size: int = 5

        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.url == "sqlite:///default.db"
        assert db_config.pool_size == 5

    def test_bind_coerces_env_strings(self, monkeypatch: pytest.MonkeyPatch):
        @config_properties(prefix="flyconsole.console")
        @dataclass
        class Settings:
            catch_exceptions: bool = True
            commands: list[str] = field(default_factory=list)

        monkeypatch.setenv("FLYCONSOLE_CONSOLE_CATCH_EXCEPTIONS", "false")
        monkeypatch.setenv("FLYCONSOLE_CONSOLE_COMMANDS", "app.cmd:One, app.cmd:Two")
        settings = Config({}).bind(Settings)
        assert settings.catch_exceptions is False
        assert settings.commands == ["app.cmd:One", "app.cmd:Two"]

    def test_bind_undecorated_raises(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
