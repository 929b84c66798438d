"""Tests for building registries and managers from settings."""

from unittest.mock import MagicMock

import pytest

from openban.config.settings import BanSettings
from openban.factory import build_registry, create_manager
from openban.log import MemoryLogSink
from openban.types import CheckResult, IpBanType, MemoryBanStorage, UserBanType


def test_build_registry_namespaced(clock):
    registry = build_registry(BanSettings(_env_file=None), clock=clock)
    assert registry.names() == ["ban.type.user", "ban.type.ip", "ban.type.email"]


def test_build_registry_plain_keys(clock):
    settings = BanSettings(_env_file=None, types=["ip"], namespaced=False)
    registry = build_registry(settings, clock=clock)
    assert registry.names() == ["ip"]
    assert isinstance(registry["ip"], IpBanType)


def test_build_registry_shares_storage(clock):
    storage = MemoryBanStorage()
    registry = build_registry(BanSettings(_env_file=None), storage=storage, clock=clock)
    registry["ban.type.user"].set_items([5]).ban()
    assert len(storage) == 1


def test_anonymous_user_id_passed_to_user_type(clock):
    settings = BanSettings(_env_file=None, anonymous_user_id=99)
    user_type = build_registry(settings, clock=clock)["ban.type.user"]
    assert isinstance(user_type, UserBanType)
    assert user_type.set_items([1, 99]).items == ["1"]


def test_create_manager_applies_static_bans(clock):
    sink = MemoryLogSink()
    settings = BanSettings(
        _env_file=None,
        bans=[
            {"type": "ip", "items": ["192.0.2.0/24"], "duration": 3600, "reason": "spam"},
            {"type": "user", "items": [42], "exclude": True},
            {"type": "email", "items": ["*@spam.example"], "exclude": True},
        ],
    )
    manager = create_manager(settings, log=sink, clock=clock)

    assert manager.current_type is None
    assert manager.log_enabled is True
    assert manager.check_all({"user_ip": "192.0.2.1"}) == CheckResult.BANNED
    assert manager.check_all({"user_id": 42, "user_ip": "192.0.2.1"}) == CheckResult.EXCLUDED
    # Email exclusions are unsupported, the entry is skipped
    assert manager.check_all({"user_email": "a@spam.example"}) == CheckResult.NO_RESULT
    # Seeding is not logged
    assert sink.entries == []

    clock.advance(3600)
    assert manager.check_all({"user_ip": "192.0.2.1"}) == CheckResult.NO_RESULT


def test_create_manager_log_disabled(clock):
    settings = BanSettings(_env_file=None, log_enabled=False)
    manager = create_manager(settings, log=MemoryLogSink(), clock=clock)
    assert manager.log_enabled is False


def test_create_manager_validates(clock):
    settings = BanSettings(_env_file=None, types=["bogus"])
    with pytest.raises(ValueError, match="Unknown ban type"):
        create_manager(settings, log=MagicMock(), clock=clock)
