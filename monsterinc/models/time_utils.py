"""Helpers for optional timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def unix_milli_to_time_optional(ms: int | None) -> datetime | None:
    """Convert Unix milliseconds to an aware UTC datetime, or None when absent."""
    if ms is None:
        return None
    return _EPOCH + timedelta(milliseconds=ms)


def format_time_optional(t: datetime | None, layout: str) -> str:
    """Format ``t`` with the strftime ``layout``; an absent time gives ''."""
    if t is None:
        return ""
    return t.strftime(layout)