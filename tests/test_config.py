"""
Tests for the credential file and key/model resolution.

Run with:
    pytest tests/test_config.py -v
"""

import json
import os
import stat
import sys

import pytest

from gy.config import (
    Config, ConfigError, ConfigManager, DEFAULT_MODEL, resolve_api_key, resolve_model,
)


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.anthropic_api_key == ""
        assert config.model is None

    def test_to_dict_excludes_none(self):
        d = Config(anthropic_api_key="sk-ant-123").to_dict()
        assert d == {"anthropic_api_key": "sk-ant-123"}

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"anthropic_api_key": "sk-ant-123", "theme": "dark"})
        assert config.anthropic_api_key == "sk-ant-123"
        assert not hasattr(config, "theme")

    def test_validate_blank_model(self):
        config = Config(model="  ")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.model is None

    def test_validate_non_string_key(self):
        config = Config(anthropic_api_key=42)
        warnings = config.validate()
        assert any("anthropic_api_key" in w for w in warnings)
        assert config.anthropic_api_key == ""

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"model": 7})
        assert "Config warning" in capsys.readouterr().err


class TestConfigManager:

    def test_path_is_in_home(self, isolated_home):
        assert ConfigManager().get_config_path() == isolated_home / ".gy_config.json"

    def test_load_returns_defaults_when_no_file(self):
        config = ConfigManager().load()
        assert config == Config()

    def test_save_and_load_roundtrip(self, isolated_home):
        ConfigManager().save(Config(anthropic_api_key="sk-ant-xyz", model="claude-sonnet-4-5"))

        data = json.loads((isolated_home / ".gy_config.json").read_text())
        assert data == {"anthropic_api_key": "sk-ant-xyz", "model": "claude-sonnet-4-5"}

        loaded = ConfigManager().load()
        assert loaded.anthropic_api_key == "sk-ant-xyz"
        assert loaded.model == "claude-sonnet-4-5"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_save_restricts_permissions(self):
        path = ConfigManager().save(Config(anthropic_api_key="sk-ant-xyz"))
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_save_creates_file_owner_only(self, monkeypatch):
        modes = []
        real_open = os.open

        def spy_open(path, flags, mode=0o777, *args, **kwargs):
            modes.append(mode)
            return real_open(path, flags, mode, *args, **kwargs)
        monkeypatch.setattr("gy.config.os.open", spy_open)

        ConfigManager().save(Config(anthropic_api_key="sk-ant-xyz"))
        assert modes == [0o600]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_save_tightens_existing_file(self, isolated_home):
        path = isolated_home / ".gy_config.json"
        path.write_text("{}")
        os.chmod(path, 0o644)

        ConfigManager().save(Config(anthropic_api_key="sk-ant-xyz"))
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_save_updates_cached_config(self):
        manager = ConfigManager()
        assert manager.load().anthropic_api_key == ""
        manager.save(Config(anthropic_api_key="sk-ant-new"))
        assert manager.load().anthropic_api_key == "sk-ant-new"

    def test_malformed_json_returns_defaults(self, isolated_home, capsys):
        (isolated_home / ".gy_config.json").write_text("not valid json {{{")
        config = ConfigManager().load()
        assert config == Config()
        assert "Could not load" in capsys.readouterr().err

    def test_non_object_json_returns_defaults(self, isolated_home):
        (isolated_home / ".gy_config.json").write_text('["sk-ant-xyz"]')
        assert ConfigManager().load() == Config()

    def test_save_failure_raises_config_error(self, isolated_home, monkeypatch):
        monkeypatch.setattr("pathlib.Path.home", lambda: isolated_home / "missing")
        with pytest.raises(ConfigError, match="Failed to write config"):
            ConfigManager().save(Config(anthropic_api_key="sk-ant-xyz"))


class TestResolveApiKey:

    def test_env_wins_over_file(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        assert resolve_api_key(Config(anthropic_api_key="sk-file")) == "sk-env"

    def test_blank_env_falls_back_to_file(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "   ")
        assert resolve_api_key(Config(anthropic_api_key="sk-file")) == "sk-file"

    def test_none_when_nothing_set(self):
        assert resolve_api_key(Config()) is None


class TestResolveModel:

    def test_default(self):
        assert resolve_model(None, Config()) == DEFAULT_MODEL

    def test_stored_model(self):
        assert resolve_model(None, Config(model="claude-sonnet-4-5")) == "claude-sonnet-4-5"

    def test_env_beats_stored(self, monkeypatch):
        monkeypatch.setenv("GY_MODEL", "claude-opus-4-1")
        assert resolve_model(None, Config(model="claude-sonnet-4-5")) == "claude-opus-4-1"

    def test_cli_beats_everything(self, monkeypatch):
        monkeypatch.setenv("GY_MODEL", "claude-opus-4-1")
        assert resolve_model("claude-3-5-haiku-latest", Config(model="x")) == "claude-3-5-haiku-latest"
