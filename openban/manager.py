"""
Ban manager.

Orchestrates ban types: holds the currently selected type, dispatches
operations to it, aggregates checks across every registered type and
forwards the types' log data to the log sink.

Usage:
    ```python
    manager = BanManager(registry, log=LoggingLogSink(), actor=Actor(2, "10.0.0.9"))

    (manager.set_type("ip")
        .set_items(["192.0.2.0/24"])
        .set_duration(3600)
        .set_message("Spam wave")
        .ban())

    if manager.check_all({"user_ip": "192.0.2.17"}) & CheckResult.BANNED:
        ...
    ```
"""

import functools
import logging
from typing import Any, Mapping, Optional

from openban.exceptions import InvalidBanType, NoBanTypeSelected
from openban.hooks import (
    SET_ITEMS_EVENT,
    SET_TYPE_EVENT,
    HookDispatcher,
    SetItemsEvent,
    SetTypeEvent,
)
from openban.log import ActorSource, LogSink, resolve_actor
from openban.timeutil import BanEndValue, Clock, end_from_duration, to_ban_end
from openban.types.protocols import BanType, CheckResult
from openban.types.registry import BanTypeRegistry

logger = logging.getLogger(__name__)


def require_type(method):
    """
    Decorator to ensure a ban type is selected before method call.
    Raises NoBanTypeSelected if self._current_type is None.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._current_type is None:
            raise NoBanTypeSelected()
        return method(self, *args, **kwargs)

    return wrapper


class BanManager:
    """
    Entry point for banning, excluding and checking subjects.

    Every operation except check_all() and tidy_all() acts on the type
    chosen with set_type() and raises NoBanTypeSelected without one.
    Not thread-safe; use one manager per request.
    """

    def __init__(
        self,
        registry: BanTypeRegistry,
        log: LogSink,
        actor: ActorSource,
        dispatcher: Optional[HookDispatcher] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            registry: Ban type instances available for selection
            log: Sink receiving log entries of mutating operations
            actor: The acting user (exposing user_id and ip), or a
                zero-argument callable returning it at log time
            dispatcher: Interception hooks (optional)
            clock: Time source for durations (optional)
        """
        self._current_type: Optional[BanType] = None
        self._dispatcher = dispatcher or HookDispatcher()
        self._log = log
        self._log_enabled = True
        self._registry = registry
        self._actor = actor
        self._clock = clock or Clock()
        logger.info(f"Ban manager created with {len(registry)} ban type(s)")

    @property
    def current_type(self) -> Optional[BanType]:
        return self._current_type

    @property
    def registry(self) -> BanTypeRegistry:
        return self._registry

    @property
    def log_enabled(self) -> bool:
        return self._log_enabled

    @require_type
    def ban(self) -> Any:
        result = self._current_type.ban()
        self._flush_log()
        return result

    @require_type
    def exclude(self) -> Any:
        result = self._current_type.exclude()
        self._flush_log()
        return result

    @require_type
    def check(self, user_row: Mapping[str, Any]) -> CheckResult:
        return self._current_type.check(user_row)

    def check_all(self, user_row: Mapping[str, Any]) -> int:
        """
        Check a subject against every registered ban type.

        Returns:
            CheckResult.EXCLUDED as soon as any type excludes the subject,
            otherwise the bitwise OR of all type results
        """
        overall_result = int(CheckResult.NO_RESULT)

        for ban_type in self._registry:
            result = ban_type.check(user_row)

            if result == CheckResult.EXCLUDED:
                return int(CheckResult.EXCLUDED)

            overall_result |= int(result)

        return overall_result

    @require_type
    def remove(self) -> Any:
        result = self._current_type.remove()
        self._flush_log()
        return result

    @require_type
    def tidy(self) -> bool:
        return self._current_type.tidy()

    def tidy_all(self) -> bool:
        """Tidy every registered ban type; True if any did work."""
        result = False

        for ban_type in self._registry:
            # Evaluate tidy() first so every type runs
            result = bool(ban_type.tidy()) or result

        return result

    def disable_log(self) -> "BanManager":
        self._log_enabled = False
        return self

    def enable_log(self) -> "BanManager":
        self._log_enabled = True
        return self

    @require_type
    def set_ban_end(self, ban_end: BanEndValue) -> "BanManager":
        """
        Set the moment the ban/exclusion ends.

        Accepts epoch seconds (0 or negative for a permanent ban), an
        ISO-8601 string, a datetime, or None for a permanent ban.

        Raises:
            NoBanTypeSelected: If no ban type is set
            InvalidBanEnd: If the value is not a moment in the future
        """
        self._current_type.set_ban_end(to_ban_end(ban_end))
        return self

    @require_type
    def set_displayed_message(self, displayed_message: str) -> "BanManager":
        """Set the message that is displayed to the affected user."""
        self._current_type.set_displayed_message(displayed_message)
        return self

    @require_type
    def set_duration(self, duration: int) -> "BanManager":
        """
        Set the duration of the ban/exclusion in seconds from now.
        A duration of 0 or less makes it permanent.
        """
        self._current_type.set_ban_end(end_from_duration(duration, self._clock))
        return self

    @require_type
    def set_message(self, message: str) -> "BanManager":
        """Set the reason shown to other administrators and moderators."""
        self._current_type.set_message(message)
        return self

    @require_type
    def set_items(self, items: Any) -> "BanManager":
        current_type = self._current_type

        event = self._dispatcher.trigger(
            SET_ITEMS_EVENT,
            SetItemsEvent(current_type=current_type, items=items),
        )

        if not event.override:
            # current_type from the event is ignored, it is read-only
            current_type.set_items(event.items)
        else:
            logger.debug("set_items() skipped by hook override")

        return self

    def set_type(self, ban_type: str) -> "BanManager":
        """
        Set the current ban type.

        The name is looked up in the registry as-is, then under
        TYPE_NAMESPACE. A set_type hook may substitute the type or
        force it with override.

        Raises:
            InvalidBanType: If the name cannot be resolved
        """
        event = self._dispatcher.trigger(
            SET_TYPE_EVENT,
            SetTypeEvent(current_type=self._current_type, type=ban_type),
        )

        if event.override:
            if isinstance(event.type, BanType):
                self._current_type = event.type
            else:
                self._current_type = self._registry[event.type]
            logger.debug(f"Ban type forced by hook override: {event.type!r}")
            return self

        key = self._registry.resolve(event.type)
        if key is None:
            raise InvalidBanType(event.type)

        self._current_type = self._registry[key]
        logger.debug(f"Selected ban type '{key}'")
        return self

    @require_type
    def is_exclude_possible(self) -> bool:
        """Return whether the current ban type supports exclusions."""
        return self._current_type.is_exclude_possible()

    def _flush_log(self) -> None:
        """Drain the current type's log data, forwarding it if enabled."""
        log_data = self._current_type.get_log_data()
        if not self._log_enabled:
            return

        for log_mode, log_entries in log_data.items():
            for log_entry in log_entries:
                actor = resolve_actor(self._actor)
                self._log.add(
                    log_mode,
                    actor.user_id,
                    actor.ip,
                    log_entry.operation,
                    False,
                    log_entry.data,
                )
