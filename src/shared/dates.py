"""Date helpers. All stored timestamps are naive UTC ISO 8601 strings."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage_date(value: datetime) -> str:
    """
    Format an expense date for storage, truncated to whole seconds.

    Fixed-width strings compare lexicographically in date order, which the
    date-range key conditions rely on.
    """
    return value.replace(microsecond=0).isoformat()


def to_timestamp(value: datetime) -> str:
    """Format a created/updated timestamp, keeping microseconds for ordering."""
    return value.isoformat(timespec='microseconds')
