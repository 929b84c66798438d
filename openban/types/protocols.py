"""
Core protocol definitions for ban types.

These protocols define the contract that all ban types must implement,
enabling pluggable ban strategies while maintaining a consistent API.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional


class CheckResult(IntEnum):
    """Result of checking a subject against a ban type."""

    EXCLUDED = -1    # Subject is exempt, bypass bans entirely
    NO_RESULT = 0    # Nothing applies
    BANNED = 1       # Subject is banned


@dataclass
class LogEntry:
    """A single log entry produced by a ban type action."""

    operation: str                                     # Log operation identifier
    data: List[Any] = field(default_factory=list)      # Passed as-is to the log sink


LogData = Dict[str, List[LogEntry]]


class BanType(ABC):
    """
    Base class for all ban types.

    A ban type restricts or exempts one kind of subject (users, IP
    addresses, email addresses...). Instances are long-lived and keep
    their configuration in mutable fields which the manager sets before
    each action.
    """

    @abstractmethod
    def ban(self) -> Any:
        """
        Ban the configured items.

        Returns:
            A type-defined success indicator
        """
        ...

    @abstractmethod
    def exclude(self) -> Any:
        """
        Exclude the configured items from bans.

        Returns:
            A type-defined success indicator, or None if unsupported
        """
        ...

    @abstractmethod
    def check(self, user_row: Mapping[str, Any]) -> CheckResult:
        """
        Check whether a subject is banned or excluded by this type.

        Args:
            user_row: Subject record (user id, ip, email...)

        Returns:
            CheckResult for the subject
        """
        ...

    @abstractmethod
    def remove(self) -> Any:
        """Lift bans and exclusions for the configured items."""
        ...

    @abstractmethod
    def tidy(self) -> bool:
        """
        Purge expired bans and exclusions.

        Returns:
            True if any cleanup work was done
        """
        ...

    @abstractmethod
    def get_log_data(self) -> LogData:
        """
        Drain log entries produced by the last action.

        Returns:
            Mapping of log mode (e.g. "admin") to the entries for that mode.
            The operation and data of each entry are given as-is to the
            log sink.
        """
        ...

    @abstractmethod
    def set_ban_end(self, ban_end: Optional[datetime]) -> "BanType":
        """
        Set the moment the ban/exclusion ends. None means permanent.

        Raises:
            InvalidBanEnd: If ban_end is not None and not strictly in the future
        """
        ...

    @abstractmethod
    def set_displayed_message(self, displayed_message: str) -> "BanType":
        """Set the message displayed to the affected user."""
        ...

    @abstractmethod
    def set_message(self, message: str) -> "BanType":
        """Set the reason displayed to administrators and moderators."""
        ...

    @abstractmethod
    def set_items(self, items: Any) -> "BanType":
        """Set the items the next action applies to."""
        ...

    @abstractmethod
    def is_exclude_possible(self) -> bool:
        """Return whether this type supports exclusions."""
        ...
