"""
Time source and ban end normalization.

All moments handled by the ban subsystem are timezone-aware UTC datetimes.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from openban.exceptions import InvalidBanEnd

BanEndValue = Union[int, str, datetime, None]


class Clock:
    """Supplies the current instant. Subclass or replace for tests."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock frozen at a given instant, advanced manually."""

    def __init__(self, instant: datetime):
        self._instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, seconds: float) -> None:
        self._instant = self._instant + timedelta(seconds=seconds)


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_ban_end(value: BanEndValue) -> Optional[datetime]:
    """
    Normalize a ban end into a UTC datetime.

    Integers are epoch seconds; zero or negative means a permanent ban
    and yields None. Strings are parsed as ISO-8601.

    Raises:
        InvalidBanEnd: If the value cannot be interpreted as a moment
    """
    if value is None:
        return None

    # bool is an int subclass but never a meaningful timestamp
    if isinstance(value, bool):
        raise InvalidBanEnd(value)

    if isinstance(value, int):
        if value <= 0:
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise InvalidBanEnd(value, previous=e)

    if isinstance(value, datetime):
        return _checked_utc(value, value)

    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidBanEnd(value, previous=e)
        return _checked_utc(parsed, value)

    raise InvalidBanEnd(value)


def end_from_duration(seconds: int, clock: Clock) -> Optional[datetime]:
    """Convert a relative duration into an absolute ban end (None if <= 0).

    Raises:
        InvalidBanEnd: If the resulting moment is out of range
    """
    if seconds <= 0:
        return None
    try:
        return clock.now() + timedelta(seconds=seconds)
    except OverflowError as e:
        raise InvalidBanEnd(seconds, previous=e)


def _checked_utc(value: datetime, original: BanEndValue) -> datetime:
    # Aware values near datetime.max/min can fall outside the range in UTC
    try:
        return ensure_utc(value)
    except OverflowError as e:
        raise InvalidBanEnd(original, previous=e)
