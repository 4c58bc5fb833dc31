"""Utility functions for timestamp handling."""

from datetime import datetime, timezone


def utc_now():
    """Current wall-clock time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(timestamp):
    """Make a timestamp timezone-aware.

    Naive timestamps are assumed to already be in UTC.

    Args:
        timestamp: datetime to normalise

    Returns:
        datetime: Timezone-aware datetime in UTC
    """
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def timestamp_in_range(timestamp, start, end):
    """Check if a timestamp falls within an inclusive time range.

    Args:
        timestamp: Timestamp to check
        start: Start of the range
        end: End of the range

    Returns:
        bool: True if start <= timestamp <= end
    """
    return start <= timestamp <= end


def format_local_time(timestamp):
    """Format a timestamp in local time for display, e.g. 2024-05-01 13:45:00."""
    return timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
