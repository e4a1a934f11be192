"""
Time and rounding helpers shared by both schedulers.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive values are interpreted as UTC; aware values are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def resolve_now(now: datetime | None) -> datetime:
    """Use the caller's clock if given, else the system clock."""
    if now is None:
        return utc_now()
    return ensure_utc(now)


def parse_instant(value: str | datetime | None) -> datetime | None:
    """
    Parse an ISO-8601 string (a trailing 'Z' is accepted) into aware UTC.

    Args:
        value: ISO string, datetime, or None

    Returns:
        Aware UTC datetime, or None when value is None/empty
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(value))


def format_instant(value: datetime | None) -> str | None:
    """ISO-8601 representation in UTC, or None."""
    if value is None:
        return None
    return ensure_utc(value).isoformat()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return math.floor(value + 0.5)
