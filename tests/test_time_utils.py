from datetime import datetime, timedelta, timezone

from monsterinc.models.time_utils import format_time_optional, unix_milli_to_time_optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_none_milliseconds_gives_none():
    assert unix_milli_to_time_optional(None) is None


def test_zero_milliseconds_is_epoch():
    assert unix_milli_to_time_optional(0) == EPOCH


def test_milliseconds_round_trip():
    ms = 1_700_000_000_123
    result = unix_milli_to_time_optional(ms)
    assert (result - EPOCH) // timedelta(milliseconds=1) == ms
    assert result.tzinfo is not None


def test_negative_milliseconds_before_epoch():
    result = unix_milli_to_time_optional(-1000)
    assert result < EPOCH
    assert EPOCH - result == timedelta(seconds=1)


def test_format_none_is_empty():
    assert format_time_optional(None, "%Y-%m-%d") == ""


def test_format_uses_layout():
    t = datetime(2024, 5, 6, 7, 8, 9)
    assert format_time_optional(t, "%Y-%m-%d") == "2024-05-06"