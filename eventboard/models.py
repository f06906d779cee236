"""
Data model (Event, User)
========================

An `Event` is one scheduled activity on the board. Unlike a loaded dataset
row it is *mutable*: reminder toggles and rating appends change it in place.
Its `event_id` never changes once assigned.

A `User` is an account. Passwords are opaque strings compared by exact match;
there is no hashing here because there is no real authentication.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

# Category enumeration. "All" is the filter wildcard, never an event category.
ALL_CATEGORIES = "All"
CATEGORIES = ["All", "Tech", "Cultural", "Seminar", "Club", "Sports", "Workshop"]
EVENT_CATEGORIES = [c for c in CATEGORIES if c != ALL_CATEGORIES]
DEFAULT_CATEGORY = EVENT_CATEGORIES[0]

PAST = "past"
CURRENT = "current"
UPCOMING = "upcoming"
STATUSES = (PAST, CURRENT, UPCOMING)

ALL_TIMES = "all"
TIME_FILTERS = (UPCOMING, CURRENT, PAST, ALL_TIMES)

STUDENT = "student"
ORGANIZER = "organizer"
ROLES = (STUDENT, ORGANIZER)

VIEW_MODES = ("grid", "list")

DEFAULT_IMAGE = "https://images.unsplash.com/photo-1505373877841-8d25f7d46678?w=800"


@dataclass
class Event:
    """One event on the board.

    `end` is expected to be >= `start`, but that is not enforced.
    `winners` is only meaningful once the event is past.
    """
    event_id: int
    title: str
    category: str
    start: datetime
    end: datetime
    location: str
    description: str
    organizer: str
    registration_link: str
    prizes: Optional[str] = None
    winners: Optional[str] = None
    image: str = DEFAULT_IMAGE
    attendees: int = 0
    ratings: List[int] = field(default_factory=list)
    reminded: bool = False

    @property
    def average_rating(self) -> float:
        return average_rating(self.ratings)

    @property
    def rating_count(self) -> int:
        return len(self.ratings)


@dataclass(frozen=True)
class User:
    """An account. Never edited or deleted once created."""
    user_id: int
    email: str
    password: str
    role: str


def naive_local(dt: datetime) -> datetime:
    """Board times are naive local time; convert offset-aware values to that."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def average_rating(ratings: List[int]) -> float:
    """Mean of the ratings rounded to one decimal place (0 when empty)."""
    if not ratings:
        return 0
    return round(sum(ratings) / len(ratings), 1)
