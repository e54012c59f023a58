"""Date separator and timestamp labels shown in the conversation list."""
from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo

_FALLBACK_TIME = "Now"


def format_message_date(ts: datetime, today: date | None = None, tz: tzinfo | None = None) -> str:
    day = ts.astimezone(tz).date()
    today = today or datetime.now().astimezone(tz).date()
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def format_message_time(ts: datetime | None, tz: tzinfo | None = None) -> str:
    if ts is None:
        return _FALLBACK_TIME
    try:
        return ts.astimezone(tz).strftime("%H:%M")
    except (OverflowError, ValueError):
        return _FALLBACK_TIME
