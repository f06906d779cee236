"""
Core state container (EventBoard)
=================================

This is the heart of the project. EventBoard is one explicit state object
that every handler and query works on:

1) Catalog -> list of Event records and list of User records
2) Session -> the current user, or nobody
3) Filter state -> category, time filter, search term, view mode
4) Check-in record -> event id -> bool (per board, not per user)

Queries (`view`, `capabilities`) are pure reads. Handlers validate first and
mutate only once validation has passed, so a rejected action leaves the
board untouched. Every public handler returns an `ActionResult` instead of
raising; the renderer shows `result.message` either way.

Subscribers registered with `subscribe()` are called synchronously after any
handler that changed state, which is the renderer's cue to redraw.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

from .errors import EventBoardError, AuthenticationFailed, DuplicateEmail, ValidationFailed, NotFound
from .models import (
    Event, User, CATEGORIES, EVENT_CATEGORIES, DEFAULT_CATEGORY, ALL_CATEGORIES,
    TIME_FILTERS, UPCOMING, ROLES, VIEW_MODES, DEFAULT_IMAGE, naive_local,
)
from .seed import seed_events, seed_users
from .session import Session, Capabilities, capabilities_for
from .status import filter_events, is_unfiltered

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Listener = Callable[["EventBoard"], None]

REQUIRED_EVENT_FIELDS = ("title", "date", "end_date", "location", "description", "organizer", "registration_link")

# camelCase form field names accepted as aliases
FIELD_ALIASES = {
    "endDate": "end_date",
    "registrationLink": "registration_link",
    "start": "date",
    "end": "end_date",
}


@dataclass
class FilterState:
    """What the visitor asked to see. `view_mode` has no filtering effect."""
    category: str = ALL_CATEGORIES
    time_filter: str = UPCOMING
    search: str = ""
    view_mode: str = "grid"


@dataclass(frozen=True)
class DerivedView:
    """The visible subset of the catalog for one "now".

    `unfiltered` tells a renderer whether an empty list means "no results
    for these filters" or simply an empty catalog.
    """
    events: List[Event]
    now: datetime
    unfiltered: bool

    @property
    def is_empty(self) -> bool:
        return not self.events

    @property
    def no_results(self) -> bool:
        return self.is_empty and not self.unfiltered


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str
    error: Optional[EventBoardError] = None
    value: Any = None


def _action(func):
    """Turn EventBoardError into a failed ActionResult; notify on success."""
    @wraps(func)
    def wrapper(self: "EventBoard", *args, **kwargs) -> ActionResult:
        try:
            result = func(self, *args, **kwargs)
        except EventBoardError as e:
            logger.info("%s rejected: %s", func.__name__, e.reason)
            return ActionResult(ok=False, message=e.reason, error=e)
        self._notify()
        return result
    return wrapper


@dataclass
class EventBoard:
    """In-memory event board.

    The board stores:
    - events / users: the catalog
    - session: who is logged in
    - filters: current filter state
    - checkins: check-in flags keyed by event id

    `clock` is read once per derivation pass; inject a fixed clock in tests.
    """
    events: List[Event]
    users: List[User]
    clock: Clock = datetime.now
    session: Session = field(default_factory=Session)
    filters: FilterState = field(default_factory=FilterState)
    checkins: Dict[int, bool] = field(default_factory=dict)
    selected_id: Optional[int] = None
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def seeded(cls, clock: Clock = datetime.now, events: Optional[List[Event]] = None) -> "EventBoard":
        """Board with the built-in accounts and, unless given, the built-in events."""
        return cls(events=events if events is not None else seed_events(), users=seed_users(), clock=clock)

    # ---------------- Subscriptions ----------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a redraw callback. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ---------------- Queries ----------------
    def now(self) -> datetime:
        return self.clock()

    def view(self, now: Optional[datetime] = None) -> DerivedView:
        """Derive the visible events for the current filters."""
        now = now or self.clock()
        f = self.filters
        return DerivedView(
            events=filter_events(self.events, f.time_filter, f.category, f.search, now),
            now=now,
            unfiltered=is_unfiltered(f.time_filter, f.category, f.search),
        )

    def find_event(self, event_id: Any) -> Event:
        eid = _parse_id(event_id)
        for e in self.events:
            if e.event_id == eid:
                return e
        raise NotFound("event", eid)

    def capabilities(self, event_id: Any, now: Optional[datetime] = None) -> Capabilities:
        event = self.find_event(event_id)
        return capabilities_for(self.session, event, now or self.clock(), self.checkins)

    @property
    def selected_event(self) -> Optional[Event]:
        if self.selected_id is None:
            return None
        return next((e for e in self.events if e.event_id == self.selected_id), None)

    # ---------------- Session ----------------
    @_action
    def login(self, email: str, password: str) -> ActionResult:
        user = next((u for u in self.users if u.email == email and u.password == password), None)
        if user is None:
            raise AuthenticationFailed()
        self.session.start(user)
        logger.info("Logged in %s (%s)", user.email, user.role)
        return ActionResult(ok=True, message=f"Welcome, {user.role} {user.email}!", value=user)

    @_action
    def signup(self, email: str, password: str, role: str) -> ActionResult:
        # emails are stored and compared exactly as typed, same as login
        email = email or ""
        missing = [name for name, v in (("email", email.strip()), ("password", password)) if not v]
        if missing:
            raise ValidationFailed.missing(missing)
        if any(u.email == email for u in self.users):
            raise DuplicateEmail(email)
        if role not in ROLES:
            raise ValidationFailed(f"Invalid role. Must be one of: {', '.join(ROLES)}", ["role"])
        user = User(user_id=_next_id(u.user_id for u in self.users), email=email, password=password, role=role)
        self.users.append(user)
        self.session.start(user)
        logger.info("Created account %s (%s)", user.email, user.role)
        return ActionResult(ok=True, message="Account created successfully!", value=user)

    @_action
    def logout(self) -> ActionResult:
        if self.session.user is not None:
            logger.info("Logged out %s", self.session.user.email)
        self.session.clear()
        self.selected_id = None
        return ActionResult(ok=True, message="Logged out.")

    # ---------------- Filters ----------------
    @_action
    def set_category(self, category: str) -> ActionResult:
        if category not in CATEGORIES:
            raise ValidationFailed(f"Unknown category: {category}", ["category"])
        self.filters.category = category
        return ActionResult(ok=True, message=f"Category: {category}")

    @_action
    def set_time_filter(self, time_filter: str) -> ActionResult:
        tf = (time_filter or "").lower()
        if tf not in TIME_FILTERS:
            raise ValidationFailed(f"Time filter must be one of: {', '.join(TIME_FILTERS)}", ["time_filter"])
        self.filters.time_filter = tf
        return ActionResult(ok=True, message=f"Showing: {tf}")

    @_action
    def set_search(self, term: Optional[str]) -> ActionResult:
        self.filters.search = term or ""
        return ActionResult(ok=True, message=f"Search: {self.filters.search!r}")

    @_action
    def set_view_mode(self, mode: str) -> ActionResult:
        if mode not in VIEW_MODES:
            raise ValidationFailed(f"View mode must be one of: {', '.join(VIEW_MODES)}", ["view_mode"])
        self.filters.view_mode = mode
        return ActionResult(ok=True, message=f"View: {mode}")

    # ---------------- Detail selection ----------------
    @_action
    def open_event(self, event_id: Any) -> ActionResult:
        event = self.find_event(event_id)
        self.selected_id = event.event_id
        return ActionResult(ok=True, message=event.title, value=event)

    @_action
    def close_event(self) -> ActionResult:
        self.selected_id = None
        return ActionResult(ok=True, message="Closed.")

    # ---------------- Event mutations ----------------
    @_action
    def toggle_reminder(self, event_id: Any) -> ActionResult:
        event = self.find_event(event_id)
        event.reminded = not event.reminded
        logger.debug("Reminder for event %s is now %s", event.event_id, event.reminded)
        msg = "You'll be reminded about this event!" if event.reminded else "Reminder removed!"
        return ActionResult(ok=True, message=msg, value=event.reminded)

    @_action
    def record_check_in(self, event_id: Any) -> ActionResult:
        event = self.find_event(event_id)
        self.checkins[event.event_id] = True
        logger.info("Checked in to event %s", event.event_id)
        return ActionResult(ok=True, message="Checked in successfully! Certificate will be emailed to you.", value=True)

    @_action
    def add_rating(self, event_id: Any, rating: Any) -> ActionResult:
        event = self.find_event(event_id)
        value = _parse_rating(rating)
        event.ratings.append(value)
        logger.debug("Event %s rated %s (avg %s)", event.event_id, value, event.average_rating)
        return ActionResult(ok=True, message="Thank you for your feedback!", value=event.average_rating)

    @_action
    def add_event(self, fields: Mapping[str, Any]) -> ActionResult:
        event = _build_event(fields, _next_id(e.event_id for e in self.events))
        self.events.append(event)
        logger.info("Added event %s: %s", event.event_id, event.title)
        return ActionResult(ok=True, message="Event added successfully!", value=event)


# ---------------- Parsing helpers ----------------
def _next_id(ids) -> int:
    return max(ids, default=0) + 1


def _parse_id(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValidationFailed(f"Invalid event id: {raw!r}", ["event_id"])
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValidationFailed(f"Invalid event id: {raw!r}", ["event_id"]) from None


def _parse_rating(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValidationFailed("Rating must be a whole number from 1 to 5.", ["rating"])
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValidationFailed("Rating must be a whole number from 1 to 5.", ["rating"]) from None
    if not 1 <= value <= 5:
        raise ValidationFailed("Rating must be a whole number from 1 to 5.", ["rating"])
    return value


def parse_timestamp(raw: Any, name: str) -> datetime:
    """Parse an ISO-8601 form value (e.g. from a datetime-local input).

    Values with a UTC offset are converted to naive local time.
    """
    if isinstance(raw, datetime):
        return naive_local(raw)
    try:
        return naive_local(datetime.fromisoformat(str(raw).strip()))
    except ValueError:
        raise ValidationFailed(f"Invalid date for {name}: {raw!r}", [name]) from None


def _normalize_fields(fields: Mapping[str, Any]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, value in fields.items():
        name = FIELD_ALIASES.get(key, key)
        out[name] = "" if value is None else str(value).strip()
    return out


def _build_event(fields: Mapping[str, Any], event_id: int) -> Event:
    data = _normalize_fields(fields)
    missing = [name for name in REQUIRED_EVENT_FIELDS if not data.get(name)]
    if missing:
        raise ValidationFailed.missing(missing)

    category = data.get("category") or DEFAULT_CATEGORY
    if category not in EVENT_CATEGORIES:
        raise ValidationFailed(f"Unknown category: {category}", ["category"])

    start = parse_timestamp(data["date"], "date")
    end = parse_timestamp(data["end_date"], "end_date")

    return Event(
        event_id=event_id,
        title=data["title"],
        category=category,
        start=start,
        end=end,
        location=data["location"],
        description=data["description"],
        organizer=data["organizer"],
        registration_link=data["registration_link"],
        prizes=data.get("prizes") or None,
        winners=None,
        image=DEFAULT_IMAGE,
        attendees=0,
        ratings=[],
        reminded=False,
    )
