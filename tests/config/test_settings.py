"""Tests for BanSettings loading and validation."""

import pytest
import yaml

from openban.config.settings import BUILTIN_TYPES, BanSettings, StaticBanConfig


def _write_config(tmp_path, data):
    config_path = tmp_path / "openban.yaml"
    with open(config_path, "w") as f:
        yaml.dump(data, f)
    return config_path


class TestDefaults:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("OPENBAN_CONFIG", raising=False)
        settings = BanSettings(_env_file=None)

        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.log_enabled is True
        assert settings.types == list(BUILTIN_TYPES)
        assert settings.namespaced is True
        assert settings.anonymous_user_id == 1
        assert settings.bans == []
        settings.validate()


class TestSources:

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("OPENBAN_LOG_ENABLED", "false")
        monkeypatch.setenv("OPENBAN_TYPES", '["ip"]')
        settings = BanSettings(_env_file=None)

        assert settings.log_enabled is False
        assert settings.types == ["ip"]

    def test_yaml_file(self, tmp_path):
        config_path = _write_config(tmp_path, {
            "log_level": "DEBUG",
            "types": ["ip", "email"],
            "bans": [
                {"type": "ip", "items": ["192.0.2.0/24"], "duration": 60, "reason": "spam"},
                {"type": "email", "items": ["*@spam.example"]},
            ],
        })
        settings = BanSettings(_config_path=str(config_path), _env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.types == ["ip", "email"]
        assert settings.bans[0] == StaticBanConfig(
            type="ip", items=["192.0.2.0/24"], duration=60, reason="spam"
        )
        assert settings.bans[1].duration == 0

    def test_yaml_beats_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENBAN_LOG_LEVEL", "ERROR")
        config_path = _write_config(tmp_path, {"log_level": "WARNING"})
        settings = BanSettings(_config_path=str(config_path), _env_file=None)
        assert settings.log_level == "WARNING"

    def test_init_beats_yaml(self, tmp_path):
        config_path = _write_config(tmp_path, {"anonymous_user_id": 7})
        settings = BanSettings(
            _config_path=str(config_path), _env_file=None, anonymous_user_id=9
        )
        assert settings.anonymous_user_id == 9

    def test_config_env_var_discovery(self, tmp_path, monkeypatch):
        config_path = _write_config(tmp_path, {"namespaced": False})
        monkeypatch.setenv("OPENBAN_CONFIG", str(config_path))
        settings = BanSettings(_env_file=None)
        assert settings.namespaced is False

    def test_unknown_yaml_keys_ignored(self, tmp_path):
        config_path = _write_config(tmp_path, {"debug": True, "surprise": 1})
        settings = BanSettings(_config_path=str(config_path), _env_file=None)
        assert settings.debug is True

    def test_invalid_yaml_raises(self, tmp_path):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("types:\n  - 'missing quote")
        with pytest.raises(Exception, match="while scanning a quoted scalar"):
            BanSettings(_config_path=str(config_path), _env_file=None)


class TestValidation:

    def test_unknown_type(self):
        settings = BanSettings(_env_file=None, types=["ip", "carrier-pigeon"])
        with pytest.raises(ValueError, match="Unknown ban type"):
            settings.validate()

    def test_static_ban_on_disabled_type(self):
        settings = BanSettings(
            _env_file=None,
            types=["ip"],
            bans=[{"type": "email", "items": ["a@b.example"]}],
        )
        with pytest.raises(ValueError, match="not enabled"):
            settings.validate()

    def test_static_ban_without_items(self):
        settings = BanSettings(_env_file=None, bans=[{"type": "ip"}])
        with pytest.raises(ValueError, match="has no items"):
            settings.validate()
