"""Timestamp helpers shared by models, cursors and outbound records."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Backends without native timezone support (SQLite) hand back naive values
    that were written as UTC, so naive input is tagged rather than converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in RFC 3339 form, always in UTC."""
    return as_utc(value).isoformat()
