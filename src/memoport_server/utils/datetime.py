"""Datetime utilities for consistent timestamp handling."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime_utc(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse datetime string and ensure it's timezone-aware (UTC).

    Args:
        dt_str: ISO format datetime string, or None

    Returns:
        Timezone-aware datetime in UTC, or None if input is empty
    """
    if not dt_str:
        return None
    return ensure_utc(datetime.fromisoformat(dt_str))


def to_unix_seconds(dt: datetime) -> int:
    """Whole seconds since the epoch, as used by ``created_ts``-style filters."""
    return int(ensure_utc(dt).timestamp())


def format_compact(dt: datetime) -> str:
    """Format as ``YYYYMMDD_HHMMSS`` in UTC (used for export filenames)."""
    return ensure_utc(dt).strftime("%Y%m%d_%H%M%S")
