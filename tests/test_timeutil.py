"""Tests for the clock and ban end normalization."""

from datetime import datetime, timedelta, timezone

import pytest

from openban.exceptions import InvalidBanEnd
from openban.timeutil import Clock, FixedClock, end_from_duration, ensure_utc, to_ban_end

from conftest import NOW


def test_clock_is_utc_aware():
    now = Clock().now()
    assert now.tzinfo == timezone.utc


def test_fixed_clock_advance():
    clock = FixedClock(NOW)
    clock.advance(90)
    assert clock.now() == NOW + timedelta(seconds=90)


def test_ensure_utc_converts_offsets():
    paris = timezone(timedelta(hours=1))
    value = datetime(2030, 1, 1, 13, 0, tzinfo=paris)
    assert ensure_utc(value) == NOW
    assert ensure_utc(value).tzinfo == timezone.utc


class TestToBanEnd:

    def test_none(self):
        assert to_ban_end(None) is None

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_int_is_permanent(self, value):
        assert to_ban_end(value) is None

    def test_epoch_seconds(self):
        assert to_ban_end(int(NOW.timestamp())) == NOW

    def test_datetime(self):
        assert to_ban_end(datetime(2030, 1, 1, 12, 0)) == NOW

    def test_iso_string(self):
        assert to_ban_end("2030-01-01T12:00:00+00:00") == NOW

    @pytest.mark.parametrize("value", ["tomorrow", True, 1.5, object()])
    def test_invalid(self, value):
        with pytest.raises(InvalidBanEnd):
            to_ban_end(value)

    def test_invalid_string_chains_cause(self):
        with pytest.raises(InvalidBanEnd) as exc_info:
            to_ban_end("tomorrow")
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize("value", [10**12, 10**20])
    def test_out_of_range_epoch(self, value):
        with pytest.raises(InvalidBanEnd) as exc_info:
            to_ban_end(value)
        assert exc_info.value.ban_end == value
        assert exc_info.value.__cause__ is not None

    def test_out_of_range_aware_datetime(self):
        edge = datetime(9999, 12, 31, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
        with pytest.raises(InvalidBanEnd) as exc_info:
            to_ban_end(edge)
        assert isinstance(exc_info.value.__cause__, OverflowError)

    def test_out_of_range_iso_string(self):
        with pytest.raises(InvalidBanEnd) as exc_info:
            to_ban_end("9999-12-31T23:00:00-05:00")
        assert exc_info.value.ban_end == "9999-12-31T23:00:00-05:00"


def test_end_from_duration():
    clock = FixedClock(NOW)
    assert end_from_duration(3600, clock) == NOW + timedelta(hours=1)
    assert end_from_duration(0, clock) is None
    assert end_from_duration(-1, clock) is None


@pytest.mark.parametrize("seconds", [10**12, 10**20])
def test_end_from_duration_out_of_range(seconds):
    with pytest.raises(InvalidBanEnd) as exc_info:
        end_from_duration(seconds, FixedClock(NOW))
    assert exc_info.value.ban_end == seconds
    assert isinstance(exc_info.value.__cause__, OverflowError)
