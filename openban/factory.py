"""
Wiring of registries and managers from configuration.

Usage:
    ```python
    from openban.factory import create_manager

    manager = create_manager(BanSettings(), actor=Actor(2, "10.0.0.9"))
    manager.check_all({"user_id": 42, "user_ip": "192.0.2.1"})
    ```
"""

import logging
from typing import Optional

from openban.config.settings import BanSettings
from openban.hooks import HookDispatcher
from openban.log import ANONYMOUS_ACTOR, ActorSource, LoggingLogSink, LogSink
from openban.manager import BanManager
from openban.timeutil import Clock
from openban.types.registry import TYPE_NAMESPACE, BanTypeRegistry, get_type_class
from openban.types.storage import BanStorage, MemoryBanStorage

logger = logging.getLogger(__name__)


def build_registry(
    settings: BanSettings,
    storage: Optional[BanStorage] = None,
    clock: Optional[Clock] = None,
) -> BanTypeRegistry:
    """
    Create a registry holding the ban types enabled in settings.

    Raises:
        ValueError: If a configured type is not catalogued
    """
    storage = storage if storage is not None else MemoryBanStorage()
    registry = BanTypeRegistry()

    for name in settings.types:
        type_class = get_type_class(name)
        if type_class is None:
            raise ValueError(f"Unknown ban type: '{name}'")

        key = TYPE_NAMESPACE + name if settings.namespaced else name
        registry.register(key, type_class.from_settings(settings, storage, clock))

    logger.info(f"Ban type registry built with types: {registry.names()}")
    return registry


def create_manager(
    settings: Optional[BanSettings] = None,
    log: Optional[LogSink] = None,
    actor: ActorSource = ANONYMOUS_ACTOR,
    dispatcher: Optional[HookDispatcher] = None,
    storage: Optional[BanStorage] = None,
    clock: Optional[Clock] = None,
) -> BanManager:
    """
    Create a manager from settings and apply the configured static bans.

    Static bans are applied with logging disabled; afterwards logging is
    set according to ``settings.log_enabled``.
    """
    settings = settings or BanSettings()
    settings.validate()

    registry = build_registry(settings, storage=storage, clock=clock)
    log = log or LoggingLogSink()

    # Seeding runs on its own manager so the returned one starts unselected
    seeder = BanManager(registry, log=log, actor=actor, dispatcher=dispatcher, clock=clock)
    seeder.disable_log()
    for ban in settings.bans:
        seeder.set_type(ban.type)
        (seeder.set_items(ban.items)
            .set_duration(ban.duration)
            .set_message(ban.reason)
            .set_displayed_message(ban.displayed_reason))

        if ban.exclude:
            if seeder.exclude() is None:
                logger.warning(f"Ban type '{ban.type}' does not support exclusions, skipping")
        else:
            seeder.ban()

    if settings.bans:
        logger.info(f"Applied {len(settings.bans)} static ban(s)")

    manager = BanManager(registry, log=log, actor=actor, dispatcher=dispatcher, clock=clock)
    if not settings.log_enabled:
        manager.disable_log()

    return manager
