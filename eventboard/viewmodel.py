"""
View-models handed to renderers
===============================

Renderers (the CLI, the DOCX report, anything else) never look at the board
directly when drawing. They get plain frozen records built here: one card per
visible event, one detail record for the open event, and a board-level record
with header and filter state. No markup is produced here, only data.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import List, Mapping, Optional, Tuple
from .engine import EventBoard
from .models import Event, CATEGORIES, TIME_FILTERS, PAST, CURRENT, UPCOMING
from .session import Capabilities, Session, capabilities_for, can_add_event
from .status import event_status

STATUS_LABELS = {
    UPCOMING: "Upcoming",
    CURRENT: "Live Now",
    PAST: "Past",
}


def format_date(dt: datetime) -> str:
    """Short human date, e.g. 'Nov 20, 2025, 10:00 AM'."""
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


@dataclass(frozen=True)
class EventCard:
    event_id: int
    title: str
    category: str
    description: str
    image: str
    date_label: str
    location: str
    attendees: int
    average_rating: float
    rating_count: int
    status: str
    reminded: bool


@dataclass(frozen=True)
class EventDetail:
    card: EventCard
    end_label: str
    organizer: str
    registration_link: str
    status_label: str
    # ("Winners", text) once past and known, else ("Prizes", text), else None
    prize_block: Optional[Tuple[str, str]]
    capabilities: Capabilities


@dataclass(frozen=True)
class BoardView:
    authenticated: bool
    header: Optional[str]
    can_add_event: bool
    category: str
    time_filter: str
    search: str
    view_mode: str
    categories: List[str]
    time_filters: List[str]
    cards: List[EventCard]
    no_results: bool
    detail: Optional[EventDetail]


def build_event_card(event: Event, now: datetime) -> EventCard:
    return EventCard(
        event_id=event.event_id,
        title=event.title,
        category=event.category,
        description=event.description,
        image=event.image,
        date_label=format_date(event.start),
        location=event.location,
        attendees=event.attendees,
        average_rating=event.average_rating,
        rating_count=event.rating_count,
        status=event_status(event, now),
        reminded=event.reminded,
    )


def _prize_block(event: Event, status: str) -> Optional[Tuple[str, str]]:
    if status == PAST and event.winners:
        return ("Winners", event.winners)
    if event.prizes:
        return ("Prizes", event.prizes)
    return None


def build_event_detail(
    event: Event,
    session: Session,
    now: datetime,
    checkins: Mapping[int, bool],
) -> EventDetail:
    card = build_event_card(event, now)
    caps = capabilities_for(session, event, now, checkins)
    return EventDetail(
        card=card,
        end_label=format_date(event.end),
        organizer=event.organizer,
        registration_link=event.registration_link,
        status_label=STATUS_LABELS[caps.status],
        prize_block=_prize_block(event, caps.status),
        capabilities=caps,
    )


def header_text(session: Session) -> Optional[str]:
    if session.user is None:
        return None
    return f"Welcome, {session.user.email} ({session.user.role})"


def build_board_view(board: EventBoard, now: Optional[datetime] = None) -> BoardView:
    """Snapshot everything a renderer needs, against a single "now"."""
    now = now or board.now()
    view = board.view(now)
    selected = board.selected_event
    f = board.filters
    return BoardView(
        authenticated=board.session.is_authenticated,
        header=header_text(board.session),
        can_add_event=can_add_event(board.session),
        category=f.category,
        time_filter=f.time_filter,
        search=f.search,
        view_mode=f.view_mode,
        categories=list(CATEGORIES),
        time_filters=list(TIME_FILTERS),
        cards=[build_event_card(e, now) for e in view.events],
        no_results=view.no_results,
        detail=build_event_detail(selected, board.session, now, board.checkins) if selected else None,
    )
