"""Datetime utilities for timezone-aware UTC timestamps.

SQLite hands back naive datetimes even when an aware value was stored, so
values read from the store go through ensure_utc() before they are compared
or serialized.

Usage:
    from src.utils.datetime_utils import utc_now, to_iso

    created_at = Column(DateTime(timezone=True), default=utc_now)
    payload["created_at"] = to_iso(row["created_at"])
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime; convert aware ones to UTC.

    Args:
        value: Datetime read from the store, or None

    Returns:
        Timezone-aware UTC datetime, or None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a stored datetime as an ISO-8601 UTC string (None passes through)."""
    value = ensure_utc(value)
    return value.isoformat() if value is not None else None
