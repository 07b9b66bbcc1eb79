"""Timestamp utilities."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_iso(dt: datetime) -> str:
    """
    Format a datetime as ISO 8601 with millisecond precision and a Z suffix.

    Naive datetimes are assumed to already be in UTC.

    Examples:
        format_iso(datetime(2025, 11, 13, 18, 45, 40, 572549, tzinfo=timezone.utc))
        # "2025-11-13T18:45:40.572Z"
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current UTC time formatted by format_iso()."""
    return format_iso(now_utc())
