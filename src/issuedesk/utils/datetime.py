"""Utilities for datetime handling."""

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def format_age(value: datetime, now: datetime | None = None) -> str:
    """Abbreviated age of a timestamp, e.g. "3d ago".

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    now = now or now_utc()
    seconds = max(0, int((now - value).total_seconds()))

    if seconds < 60:
        return "just now"
    for unit_seconds, suffix in ((86400 * 365, "y"), (86400 * 30, "mo"), (86400, "d"), (3600, "h")):
        if seconds >= unit_seconds:
            return f"{seconds // unit_seconds}{suffix} ago"
    return f"{seconds // 60}m ago"
