# tradedesk/utils/time_helpers.py
"""
Time-related utility functions.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple, Union

import pandas as pd


# Supported bar intervals and their length in minutes
TIMEFRAME_MINUTES = {
    '1m': 1,
    '5m': 5,
    '15m': 15,
    '30m': 30,
    '1h': 60,
    '4h': 240,
    '1D': 1440,
    '1W': 10080,
}

_UNIT_MINUTES = {
    'm': 1,
    'h': 60,
    'd': 1440,
    'w': 10080,
}


def parse_timeframe(timeframe: str) -> Tuple[int, str]:
    """
    Parse timeframe string into number and unit.

    Minutes keep a lower-case ``m``; hours, days and weeks are accepted in
    either case (``1H``, ``1d``).

    Args:
        timeframe: Timeframe string (e.g., '1h', '5m', '1D')

    Returns:
        Tuple of (number, unit) with the unit lower-cased

    Raises:
        ValueError: If timeframe format is invalid
    """
    match = re.match(r'^(\d+)([mhHdDwW])$', timeframe.strip())

    if not match:
        raise ValueError(f"Invalid timeframe format: {timeframe}")

    return int(match.group(1)), match.group(2).lower()


def normalize_timeframe(timeframe: str) -> Optional[str]:
    """Return the canonical spelling of a supported timeframe, or None."""
    try:
        number, unit = parse_timeframe(timeframe)
    except ValueError:
        return None

    for name, minutes in TIMEFRAME_MINUTES.items():
        if minutes == number * _UNIT_MINUTES[unit]:
            return name
    return None


def timeframe_to_minutes(timeframe: str) -> int:
    """
    Convert a supported timeframe to minutes.

    Raises:
        ValueError: If the timeframe is not one of TIMEFRAME_MINUTES
    """
    normalized = normalize_timeframe(timeframe)
    if normalized is None:
        raise ValueError(
            f"Unsupported timeframe: {timeframe}. Allowed: {', '.join(TIMEFRAME_MINUTES)}"
        )
    return TIMEFRAME_MINUTES[normalized]


def timeframe_to_timedelta(timeframe: str) -> timedelta:
    """Convert timeframe string to timedelta object."""
    return timedelta(minutes=timeframe_to_minutes(timeframe))


def to_utc_datetime(value: Union[date, datetime]) -> datetime:
    """
    Interpret a date or datetime as UTC.

    Plain dates become midnight UTC and naive datetimes are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def count_bars(start: Union[date, datetime], end: Union[date, datetime], timeframe: str) -> int:
    """
    Number of bars from start to end inclusive.

    Returns 0 when end precedes start.
    """
    start_dt = to_utc_datetime(start)
    end_dt = to_utc_datetime(end)
    if end_dt < start_dt:
        return 0
    step = timeframe_to_timedelta(timeframe)
    return (end_dt - start_dt) // step + 1


def generate_time_range(
    start: Union[date, datetime],
    end: Union[date, datetime],
    timeframe: str
) -> pd.DatetimeIndex:
    """
    Generate a UTC datetime range for given timeframe, both ends inclusive.

    Args:
        start: Start date or datetime
        end: End date or datetime
        timeframe: Timeframe string

    Returns:
        Pandas DatetimeIndex
    """
    return pd.date_range(
        start=to_utc_datetime(start),
        end=to_utc_datetime(end),
        freq=timeframe_to_timedelta(timeframe),
    )


def to_epoch_millis(value: Union[datetime, pd.Timestamp]) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return int(value.timestamp() * 1000)


def format_duration(hours: float) -> str:
    """
    Format duration in hours to human readable string.

    Args:
        hours: Duration in hours

    Returns:
        Formatted duration string
    """
    if hours < 1:
        return f"{hours * 60:.1f}m"
    elif hours < 24:
        return f"{hours:.1f}h"
    else:
        return f"{hours / 24:.1f}d"
