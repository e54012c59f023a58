from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from chat_client.application.policies.formatting import format_message_date, format_message_time
from chat_client.application.policies.media import resolve_media_url

TODAY = date(2026, 1, 5)


def _at(day: date, hour: int = 12) -> datetime:
    return datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)


def test_today_and_yesterday_labels():
    assert format_message_date(_at(TODAY), TODAY, timezone.utc) == "Today"
    assert format_message_date(_at(TODAY - timedelta(days=1)), TODAY, timezone.utc) == "Yesterday"


def test_older_dates_are_spelled_out():
    label = format_message_date(_at(date(2025, 12, 24)), TODAY, timezone.utc)

    assert label == "Wednesday, December 24, 2025"


def test_time_label_is_24_hour():
    ts = datetime(2026, 1, 5, 21, 7, tzinfo=timezone.utc)

    assert format_message_time(ts, timezone.utc) == "21:07"
    assert format_message_time(ts, timezone(timedelta(hours=5))) == "02:07"


def test_missing_time_falls_back():
    assert format_message_time(None) == "Now"


def test_media_url_resolution():
    assert resolve_media_url("/storage/a.jpg", "http://host") == "http://host/storage/a.jpg"
    assert resolve_media_url("storage/a.jpg", "http://host/") == "http://host/storage/a.jpg"
    assert resolve_media_url("https://cdn/a.jpg", "http://host") == "https://cdn/a.jpg"
    assert resolve_media_url(None, "http://host") is None
