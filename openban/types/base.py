"""
Shared behavior for ban types.

BaseBanType holds configuration fields and the default policies
(no exclusions, nothing to tidy). StoredBanType builds the ban/exclude/
remove/check/tidy actions on top of a BanStorage so concrete types only
describe how their items are normalized and matched.
"""

import logging
from abc import abstractmethod
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from openban.exceptions import InvalidBanEnd
from openban.timeutil import Clock, ensure_utc
from openban.types.protocols import BanType, CheckResult, LogData, LogEntry
from openban.types.storage import BanRecord, BanStorage

logger = logging.getLogger(__name__)


class BaseBanType(BanType):
    """Default field storage and policies for ban types."""

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or Clock()
        self.ban_end: Optional[datetime] = None
        self.displayed_message = ""
        self.items: Any = None
        self.message = ""

    def exclude(self) -> Any:
        return None

    def tidy(self) -> bool:
        return False

    def set_ban_end(self, ban_end: Optional[datetime]) -> "BaseBanType":
        if ban_end is not None:
            if not isinstance(ban_end, datetime):
                raise InvalidBanEnd(ban_end)
            try:
                ban_end = ensure_utc(ban_end)
            except OverflowError as e:
                raise InvalidBanEnd(ban_end, previous=e)
            if ban_end <= self._clock.now():
                raise InvalidBanEnd(ban_end)

        self.ban_end = ban_end
        return self

    def set_displayed_message(self, displayed_message: str) -> "BaseBanType":
        self.displayed_message = displayed_message
        return self

    def set_message(self, message: str) -> "BaseBanType":
        self.message = message
        return self

    def is_exclude_possible(self) -> bool:
        return False


class StoredBanType(BaseBanType):
    """
    Ban type persisting one record per item in a BanStorage.

    Subclasses set ``type_name`` and implement item normalization,
    subject extraction and matching.
    """

    type_name: str = ""

    def __init__(self, storage: BanStorage, clock: Optional[Clock] = None):
        super().__init__(clock)
        self._storage = storage
        self._log_data: LogData = {}
        self.items: List[str] = []

    @abstractmethod
    def prepare_items(self, items: Iterable[Any]) -> List[str]:
        """
        Normalize raw items into stored form.

        Raises:
            ValueError: If an item is malformed
        """
        ...

    @abstractmethod
    def get_subject(self, user_row: Mapping[str, Any]) -> Optional[Any]:
        """Extract the value compared against stored items, or None."""
        ...

    @abstractmethod
    def matches(self, item: str, subject: Any) -> bool:
        """Return whether a stored item applies to the subject."""
        ...

    @classmethod
    def from_settings(
        cls,
        settings: Any,
        storage: BanStorage,
        clock: Optional[Clock] = None,
    ) -> "StoredBanType":
        """Build an instance from BanSettings. Override to read extra options."""
        return cls(storage, clock)

    def set_items(self, items: Any) -> "StoredBanType":
        if items is None:
            items = []
        elif isinstance(items, (str, int)):
            items = [items]
        self.items = self.prepare_items(items)
        return self

    def ban(self) -> int:
        return self._store(exclude=False)

    def exclude(self) -> Any:
        if not self.is_exclude_possible():
            return super().exclude()
        return self._store(exclude=True)

    def remove(self) -> int:
        if not self.items:
            return 0

        deleted = self._storage.delete(self.type_name, self.items)
        self._log_action(f"LOG_UNBAN_{self.type_name.upper()}")
        logger.debug(f"Removed {deleted} {self.type_name} records")
        return deleted

    def check(self, user_row: Mapping[str, Any]) -> CheckResult:
        subject = self.get_subject(user_row)
        if subject is None:
            return CheckResult.NO_RESULT

        now = self._clock.now()
        result = CheckResult.NO_RESULT
        for record in self._storage.find(self.type_name):
            if not record.is_active(now) or not self.matches(record.item, subject):
                continue
            if record.exclude:
                return CheckResult.EXCLUDED
            result = CheckResult.BANNED

        return result

    def tidy(self) -> bool:
        purged = self._storage.purge_expired(self.type_name, self._clock.now())
        return purged > 0

    def get_log_data(self) -> LogData:
        log_data = self._log_data
        self._log_data = {}
        return log_data

    def _store(self, exclude: bool) -> int:
        if not self.items:
            return 0

        start = self._clock.now()
        for item in self.items:
            self._storage.save(
                BanRecord(
                    ban_type=self.type_name,
                    item=item,
                    start=start,
                    end=self.ban_end,
                    reason=self.message,
                    reason_display=self.displayed_message,
                    exclude=exclude,
                )
            )

        if exclude:
            self._log_action(f"LOG_BAN_EXCLUDE_{self.type_name.upper()}")
        else:
            self._log_action(f"LOG_BAN_{self.type_name.upper()}")
        return len(self.items)

    def _log_action(self, operation: str) -> None:
        """Record an admin log entry for the current items."""
        self._add_log_entry("admin", operation, [self.message, ", ".join(self.items)])

    def _add_log_entry(self, mode: str, operation: str, data: List[Any]) -> None:
        self._log_data.setdefault(mode, []).append(LogEntry(operation, data))
