from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from chat_client.application.policies.ordering import (
    is_sorted,
    merge,
    needs_date_separator,
    remove_by_id,
)
from chat_client.domain.value_objects.enums import MergeMode
from tests.conftest import make_message


def _ids(messages):
    return [m.id for m in messages]


def test_prepend_puts_sorted_incoming_before_existing():
    existing = [make_message(10, minutes=10), make_message(11, minutes=11)]
    incoming = [make_message(3, minutes=3), make_message(1, minutes=1), make_message(2, minutes=2)]

    result = merge(existing, incoming, MergeMode.PREPEND)

    assert _ids(result) == [1, 2, 3, 10, 11]


def test_ties_broken_by_id():
    incoming = [make_message(9, minutes=5), make_message(4, minutes=5), make_message(6, minutes=5)]

    result = merge([], incoming, MergeMode.APPEND)

    assert _ids(result) == [4, 6, 9]


def test_append_skips_known_ids_and_is_idempotent():
    existing = [make_message(1, minutes=1), make_message(2, minutes=2)]
    incoming = [make_message(2, minutes=2), make_message(3, minutes=3)]

    once = merge(existing, incoming, MergeMode.APPEND)
    twice = merge(once, incoming, MergeMode.APPEND)

    assert _ids(once) == [1, 2, 3]
    assert _ids(twice) == _ids(once)


def test_prepend_overlapping_page_stays_unique_and_sorted():
    existing = [make_message(i, minutes=i) for i in range(5, 10)]
    overlapping = [make_message(i, minutes=i) for i in range(3, 7)]

    result = merge(existing, overlapping, MergeMode.PREPEND)

    assert _ids(result) == [3, 4, 5, 6, 7, 8, 9]
    assert is_sorted(result)


def test_append_with_skewed_timestamp_is_resorted():
    existing = [make_message(1, minutes=1), make_message(5, minutes=5)]
    late_echo = make_message(6, minutes=3)

    result = merge(existing, [late_echo], MergeMode.APPEND)

    assert _ids(result) == [1, 6, 5]
    assert is_sorted(result)


def test_duplicates_inside_incoming_are_collapsed():
    incoming = [make_message(1, minutes=1), make_message(1, minutes=1)]

    assert _ids(merge([], incoming, MergeMode.APPEND)) == [1]


def test_messages_without_id_are_never_deduplicated():
    incoming = [make_message(None, minutes=1), make_message(None, minutes=1)]

    assert len(merge([], incoming, MergeMode.APPEND)) == 2


def test_merge_does_not_mutate_inputs():
    existing = [make_message(2, minutes=2)]
    merge(existing, [make_message(1, minutes=1)], MergeMode.PREPEND)

    assert _ids(existing) == [2]


def test_remove_by_id_keeps_order_of_the_rest():
    existing = [make_message(i, minutes=i) for i in (40, 41, 42, 43)]

    assert _ids(remove_by_id(existing, 42)) == [40, 41, 43]


def test_separator_for_first_message():
    assert needs_date_separator(make_message(1), None) is True


def test_separator_only_between_calendar_days():
    morning = make_message(1, minutes=0)
    evening = make_message(2, minutes=600)
    next_day = make_message(3, minutes=24 * 60)

    assert needs_date_separator(evening, morning, timezone.utc) is False
    assert needs_date_separator(next_day, evening, timezone.utc) is True


def test_separator_uses_given_local_timezone():
    a = replace(make_message(1), created_at=datetime(2026, 1, 5, 22, 30, tzinfo=timezone.utc))
    b = replace(make_message(2), created_at=datetime(2026, 1, 5, 23, 30, tzinfo=timezone.utc))
    plus_one = timezone(timedelta(hours=1))

    assert needs_date_separator(b, a, timezone.utc) is False
    assert needs_date_separator(b, a, plus_one) is True
