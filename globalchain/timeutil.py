"""Timestamp helpers."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_timestamp_to_gmt_string(timestamp: int) -> str:
    """Format a Unix timestamp as an RFC 2822 date in UTC."""
    try:
        moment = _EPOCH + timedelta(seconds=timestamp)
    except OverflowError as exc:
        raise ValueError(f"timestamp {timestamp} is out of range") from exc
    return (
        f"{_WEEKDAYS[moment.weekday()]}, {moment.day} {_MONTHS[moment.month - 1]} "
        f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} +0000"
    )


def timestamp_now() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())