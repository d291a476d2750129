"""Timestamp normalization helpers.

The store keeps naive UTC timestamps. Naive values arriving from callers are
wall-clock times in the configured ``TIMEZONE``.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from outage_journal.core.config import get_settings


def get_timezone(name: Optional[str] = None) -> ZoneInfo:
    """Return the zone used for calendar-day arithmetic."""
    return ZoneInfo(name or get_settings().TIMEZONE)


def utcnow() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_storage(value: Optional[datetime], tz: Optional[ZoneInfo] = None) -> Optional[datetime]:
    """Convert an incoming datetime to naive UTC for storage."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz or get_timezone())
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_storage(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive stored datetime."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def storage_now() -> datetime:
    """Current instant in the stored form (naive UTC)."""
    return to_storage(utcnow())
