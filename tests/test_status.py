from datetime import datetime, timedelta
from itertools import permutations

import pytest

from eventboard.models import PAST, CURRENT, UPCOMING
from eventboard.seed import seed_events
from eventboard.status import (
    classify, filter_events, is_unfiltered,
    time_predicate, category_predicate, search_predicate,
)

START = datetime(2025, 11, 16, 13, 0)
END = datetime(2025, 11, 16, 16, 0)


@pytest.mark.parametrize("now, expected", [
    (START - timedelta(seconds=1), UPCOMING),
    (START, CURRENT),
    (START + timedelta(hours=1), CURRENT),
    (END, CURRENT),
    (END + timedelta(seconds=1), PAST),
])
def test_classify_window_is_inclusive(now, expected):
    assert classify(START, END, now) == expected


def test_classify_end_before_start_is_not_rejected():
    # past wins because now > end is checked first
    assert classify(END, START, START + timedelta(minutes=30)) == PAST
    assert classify(END, START, START - timedelta(minutes=30)) == UPCOMING


def test_seed_statuses(now):
    statuses = {e.event_id: classify(e.start, e.end, now) for e in seed_events()}
    assert statuses == {1: UPCOMING, 2: UPCOMING, 3: PAST, 4: CURRENT}


def test_no_filters_returns_full_catalog_in_order(now):
    events = seed_events()
    out = filter_events(events, "all", "All", "", now)
    assert [e.event_id for e in out] == [1, 2, 3, 4]
    assert is_unfiltered("all", "All", "")


def test_time_filter(now):
    events = seed_events()
    assert [e.event_id for e in filter_events(events, "upcoming", "All", "", now)] == [1, 2]
    assert [e.event_id for e in filter_events(events, "current", "All", "", now)] == [4]
    assert [e.event_id for e in filter_events(events, "past", "All", "", now)] == [3]


def test_category_is_exact_match(now):
    events = seed_events()
    assert [e.event_id for e in filter_events(events, "all", "Seminar", "", now)] == [3]
    assert filter_events(events, "all", "seminar", "", now) == []


def test_search_title_or_description_case_insensitive(now):
    events = seed_events()
    assert [e.event_id for e in filter_events(events, "all", "All", "TECH", now)] == [1]
    # "sculpting" only appears in a description
    assert [e.event_id for e in filter_events(events, "all", "All", "Sculpting", now)] == [4]


def test_filters_compose_with_and(now):
    events = seed_events()
    assert filter_events(events, "upcoming", "Workshop", "", now) == []
    assert [e.event_id for e in filter_events(events, "current", "Workshop", "art", now)] == [4]


def test_filter_dimensions_commute(now):
    events = seed_events()
    preds = [time_predicate("upcoming", now), category_predicate("Tech"), search_predicate("fest")]
    results = set()
    for order in permutations(preds):
        out = events
        for p in order:
            out = [e for e in out if p(e)]
        results.add(tuple(e.event_id for e in out))
    assert results == {(1,)}


def test_filter_is_idempotent(now):
    events = seed_events()
    first = filter_events(events, "all", "All", "a", now)
    second = filter_events(events, "all", "All", "a", now)
    assert first == second
