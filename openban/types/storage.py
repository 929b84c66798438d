"""
Storage backends for persisted ban records.

Ban types that keep state do so through a BanStorage. The in-memory
backend is the reference implementation; hosts plug in their own
database-backed storage by implementing the same interface.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class BanRecord:
    """A stored ban or exclusion of one item."""

    ban_type: str                       # Mode of the owning ban type, e.g. "ip"
    item: str                           # Normalized subject
    start: datetime
    end: Optional[datetime] = None      # None = permanent
    reason: str = ""                    # Shown to staff
    reason_display: str = ""            # Shown to the affected user
    exclude: bool = False
    id: Optional[int] = None            # Assigned by the storage

    def is_active(self, now: datetime) -> bool:
        """Return whether this record applies at the given instant."""
        return self.end is None or self.end > now


class BanStorage(ABC):
    """Persistence interface used by stored ban types."""

    @abstractmethod
    def save(self, record: BanRecord) -> BanRecord:
        """
        Store a record, replacing any record with the same
        (ban_type, item, exclude) key.

        Returns:
            The stored record with its id assigned
        """
        ...

    @abstractmethod
    def find(
        self,
        ban_type: str,
        items: Optional[Iterable[str]] = None,
    ) -> List[BanRecord]:
        """
        Find records of a ban type, optionally restricted to items.

        Records are returned in insertion order.
        """
        ...

    @abstractmethod
    def delete(self, ban_type: str, items: Iterable[str]) -> int:
        """
        Delete all records (bans and exclusions) for the given items.

        Returns:
            Number of records deleted
        """
        ...

    @abstractmethod
    def purge_expired(self, ban_type: str, now: datetime) -> int:
        """
        Delete records whose end is at or before now.

        Returns:
            Number of records purged
        """
        ...


class MemoryBanStorage(BanStorage):
    """
    Dictionary-backed storage.

    Suitable for embedding, static bans loaded from configuration,
    and tests. Not shared across processes.
    """

    def __init__(self):
        self._records: Dict[tuple, BanRecord] = {}
        self._ids = itertools.count(1)

    def save(self, record: BanRecord) -> BanRecord:
        key = (record.ban_type, record.item, record.exclude)
        existing = self._records.get(key)
        record_id = existing.id if existing else next(self._ids)
        stored = replace(record, id=record_id)
        self._records[key] = stored
        logger.debug(
            f"Stored {'exclusion' if record.exclude else 'ban'} "
            f"{record.ban_type}:{record.item} (id={record_id})"
        )
        return stored

    def find(
        self,
        ban_type: str,
        items: Optional[Iterable[str]] = None,
    ) -> List[BanRecord]:
        wanted = set(items) if items is not None else None
        return [
            record
            for record in self._records.values()
            if record.ban_type == ban_type
            and (wanted is None or record.item in wanted)
        ]

    def delete(self, ban_type: str, items: Iterable[str]) -> int:
        wanted = set(items)
        keys = [
            key
            for key, record in self._records.items()
            if record.ban_type == ban_type and record.item in wanted
        ]
        for key in keys:
            del self._records[key]
        return len(keys)

    def purge_expired(self, ban_type: str, now: datetime) -> int:
        keys = [
            key
            for key, record in self._records.items()
            if record.ban_type == ban_type and not record.is_active(now)
        ]
        for key in keys:
            del self._records[key]
        if keys:
            logger.debug(f"Purged {len(keys)} expired {ban_type} records")
        return len(keys)

    def __len__(self) -> int:
        return len(self._records)
