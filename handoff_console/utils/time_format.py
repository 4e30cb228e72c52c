"""Relative time formatting for conversation and message timestamps."""

import math
from datetime import datetime
from typing import Optional


def to_local(ts: datetime) -> datetime:
    """Convert a timestamp to naive local time. Naive input is assumed local already."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone().replace(tzinfo=None)


def format_time(ts: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Format a timestamp relative to now.

    Args:
        ts: Timestamp to format
        now: Reference time (defaults to the current local time)

    Returns:
        "Just now", "Nm ago", "Nh ago", "Nd ago" or the locale date for
        anything a week or older. Future timestamps read as "Just now".
    """
    if ts is None:
        return ""

    local_ts = to_local(ts)
    current = to_local(now) if now is not None else datetime.now()

    diff_mins = math.floor((current - local_ts).total_seconds() / 60)
    if diff_mins < 1:
        return "Just now"
    if diff_mins < 60:
        return f"{diff_mins}m ago"

    diff_hours = diff_mins // 60
    if diff_hours < 24:
        return f"{diff_hours}h ago"

    diff_days = diff_hours // 24
    if diff_days < 7:
        return f"{diff_days}d ago"

    return local_ts.strftime("%x")
