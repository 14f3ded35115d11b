"""Timestamp formatting utilities."""

from datetime import datetime


def now_exact() -> str:
    """Current local time as an ISO 8601 string with microseconds."""
    return datetime.now().isoformat()


def today() -> str:
    """Current local date as YYYYMMDD, used for log directory names."""
    return datetime.now().strftime("%Y%m%d")
