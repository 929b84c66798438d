"""Pytest fixtures for Open Ban tests."""

from datetime import datetime, timezone

import pytest

from openban.log import Actor, MemoryLogSink
from openban.manager import BanManager
from openban.timeutil import FixedClock
from openban.types import (
    TYPE_NAMESPACE,
    BanTypeRegistry,
    EmailBanType,
    IpBanType,
    MemoryBanStorage,
    UserBanType,
)

NOW = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def storage() -> MemoryBanStorage:
    return MemoryBanStorage()


@pytest.fixture
def actor() -> Actor:
    return Actor(user_id=2, ip="198.51.100.7")


@pytest.fixture
def sink() -> MemoryLogSink:
    return MemoryLogSink()


@pytest.fixture
def registry(storage, clock) -> BanTypeRegistry:
    """Registry with the built-in types under their namespaced keys."""
    registry = BanTypeRegistry()
    registry.register(TYPE_NAMESPACE + "user", UserBanType(storage, clock))
    registry.register(TYPE_NAMESPACE + "ip", IpBanType(storage, clock))
    registry.register(TYPE_NAMESPACE + "email", EmailBanType(storage, clock))
    return registry


@pytest.fixture
def manager(registry, sink, actor, clock) -> BanManager:
    return BanManager(registry, log=sink, actor=actor, clock=clock)
