"""
Log sinks and actor identity.

The manager translates ban type log data into calls on a LogSink,
adding the acting user's id and IP address. Sinks are fire-and-forget.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Protocol, Union, runtime_checkable

audit_logger = logging.getLogger("openban.audit")


@dataclass(frozen=True)
class Actor:
    """The user performing ban operations."""

    user_id: int
    ip: str


ANONYMOUS_ACTOR = Actor(user_id=1, ip="")

ActorSource = Union[Actor, Callable[[], Actor]]


def resolve_actor(source: Any) -> Any:
    """Return the current actor from an actor or a zero-argument provider."""
    if callable(source) and not hasattr(source, "user_id"):
        return source()
    return source


@runtime_checkable
class LogSink(Protocol):
    """Destination of ban log entries."""

    def add(
        self,
        mode: str,
        user_id: int,
        ip: str,
        operation: str,
        admin_only: bool,
        data: List[Any],
    ) -> None:
        ...


@dataclass
class LogRecordEntry:
    """One entry received by a MemoryLogSink."""

    mode: str
    user_id: int
    ip: str
    operation: str
    admin_only: bool
    data: List[Any] = field(default_factory=list)


class MemoryLogSink:
    """Collects log entries in a list."""

    def __init__(self):
        self.entries: List[LogRecordEntry] = []

    def add(
        self,
        mode: str,
        user_id: int,
        ip: str,
        operation: str,
        admin_only: bool,
        data: List[Any],
    ) -> None:
        self.entries.append(
            LogRecordEntry(mode, user_id, ip, operation, admin_only, list(data))
        )

    def clear(self) -> None:
        self.entries.clear()


class LoggingLogSink:
    """Writes each entry as a record on the ``openban.audit`` logger."""

    def __init__(self, target: logging.Logger = audit_logger, level: int = logging.INFO):
        self._logger = target
        self._level = level

    def add(
        self,
        mode: str,
        user_id: int,
        ip: str,
        operation: str,
        admin_only: bool,
        data: List[Any],
    ) -> None:
        self._logger.log(
            self._level,
            f"[{mode}] {operation} by user {user_id} ({ip or 'unknown'}): {data}",
            extra={
                "ban_log_mode": mode,
                "ban_operation": operation,
                "actor_user_id": user_id,
                "actor_ip": ip,
                "admin_only": admin_only,
            },
        )
