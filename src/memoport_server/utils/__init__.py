"""Shared utilities for memoport services."""

from .id_generation import generate_uid
from .datetime import utc_now, ensure_utc, parse_datetime_utc, to_unix_seconds, format_compact
from .memo_payload import extract_tags, rebuild_payload

__all__ = [
    "generate_uid",
    "utc_now",
    "ensure_utc",
    "parse_datetime_utc",
    "to_unix_seconds",
    "format_compact",
    "extract_tags",
    "rebuild_payload",
]
