"""
Status classifier and view filter
=================================

Both functions here are pure: they take "now" as an explicit argument and
never read the clock themselves. A caller captures "now" once per pass so a
whole listing is classified against the same instant.

Filter order (each step narrows the previous one):
1) time status, unless the time filter is "all"
2) category, unless the category is "All" (exact match)
3) search term, if non-empty (case-insensitive, title OR description)

The three steps are independent predicates joined with AND, so their order
does not change the result. Catalog order is always preserved.
"""

from __future__ import annotations
from datetime import datetime
from typing import Callable, List, Sequence
from .models import Event, PAST, CURRENT, UPCOMING, ALL_TIMES, ALL_CATEGORIES

Predicate = Callable[[Event], bool]


def classify(start: datetime, end: datetime, now: datetime) -> str:
    """Return past / current / upcoming for a [start, end] window.

    The window is inclusive at both ends. `end < start` is not rejected.
    """
    if now > end:
        return PAST
    if start <= now <= end:
        return CURRENT
    return UPCOMING


def event_status(event: Event, now: datetime) -> str:
    return classify(event.start, event.end, now)


def time_predicate(time_filter: str, now: datetime) -> Predicate:
    if time_filter == ALL_TIMES:
        return lambda e: True
    return lambda e: event_status(e, now) == time_filter


def category_predicate(category: str) -> Predicate:
    if category == ALL_CATEGORIES:
        return lambda e: True
    return lambda e: e.category == category


def search_predicate(term: str) -> Predicate:
    if not term:
        return lambda e: True
    t = term.lower()
    return lambda e: t in e.title.lower() or t in e.description.lower()


def filter_events(
    events: Sequence[Event],
    time_filter: str,
    category: str,
    search: str,
    now: datetime,
) -> List[Event]:
    """Return the events matching all three filters, in catalog order."""
    preds = [
        time_predicate(time_filter, now),
        category_predicate(category),
        search_predicate(search),
    ]
    return [e for e in events if all(p(e) for p in preds)]


def is_unfiltered(time_filter: str, category: str, search: str) -> bool:
    """True when no filter narrows the catalog."""
    return time_filter == ALL_TIMES and category == ALL_CATEGORIES and not search
