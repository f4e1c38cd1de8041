"""Relative timestamps ("just now", "3 hours ago", "Jan 1, 2021") in US English."""

import math
from datetime import datetime, timezone
from typing import Optional

from .errors import InvalidTimestamp

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def parse_timestamp(value) -> datetime:
    """Parse an ISO 8601 / RFC 3339 timestamp into an aware datetime.

    Naive values are taken as UTC. Anything else raises InvalidTimestamp.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidTimestamp(value) from None
    else:
        raise InvalidTimestamp(value)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _local_now() -> datetime:
    return datetime.now().astimezone()


def format_date(dt: datetime) -> str:
    """Format as "Mon D, YYYY"."""
    return f"{MONTHS[dt.month - 1]} {dt.day}, {dt.year}"


def format_relative(timestamp, now: Optional[datetime] = None) -> str:
    """Describe how long ago `timestamp` was, relative to `now`.

    `now` defaults to the current local time on every call, so "today" and
    "yesterday" follow the local calendar.
    """
    date = parse_timestamp(timestamp)
    now = parse_timestamp(now) if now is not None else _local_now()
    date = date.astimezone(now.tzinfo)

    seconds = math.floor((now - date).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    weeks = days // 7

    if seconds < 600:
        return "just now"
    if minutes < 60:
        if minutes == 1:
            return "a minute ago"
        return f"{minutes} minutes ago"
    if hours < 12:
        if hours == 1:
            return "an hour ago"
        return f"{hours} hours ago"
    if hours < 24:
        # Less than a day apart, so the full date and day-of-month agree.
        if date.date() == now.date():
            return "today"
        return "yesterday"
    if days <= 30:
        if weeks <= 1:
            if days == 1:
                return "yesterday"
            return f"{days} days ago"
        return f"{weeks} weeks ago"
    return format_date(date)
