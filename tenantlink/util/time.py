"""Time helpers."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime.

    All persisted timestamps are TIMESTAMPTZ, so comparisons must never mix
    naive and aware values.
    """
    return datetime.now(UTC)
