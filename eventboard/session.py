"""
Session and role gate
=====================

The session is a single slot: one current user, or nobody. The capability
functions below are pure predicates that a renderer calls while drawing, to
decide which affordances to show. They never mutate anything.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional
from .models import Event, User, ORGANIZER, STUDENT, PAST, CURRENT, UPCOMING
from .status import event_status


@dataclass
class Session:
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[str]:
        return self.user.role if self.user else None

    def start(self, user: User) -> None:
        self.user = user

    def clear(self) -> None:
        self.user = None


def can_add_event(session: Session) -> bool:
    return session.role == ORGANIZER


def can_see_checkin_tool(session: Session, status: str) -> bool:
    """Organizer's QR check-in tool, shown until the event is over."""
    return session.role == ORGANIZER and status != PAST


def can_check_in(session: Session, status: str, checked_in: bool) -> bool:
    return session.role == STUDENT and status == CURRENT and not checked_in


def can_rate(status: str) -> bool:
    return status != UPCOMING


def can_register(status: str) -> bool:
    return status != PAST


@dataclass(frozen=True)
class Capabilities:
    """All gates for one event, evaluated against one status."""
    status: str
    add_event: bool
    checkin_tool: bool
    check_in: bool
    checked_in: bool
    rate: bool
    register: bool


def capabilities_for(
    session: Session,
    event: Event,
    now: datetime,
    checkins: Mapping[int, bool],
) -> Capabilities:
    status = event_status(event, now)
    checked_in = bool(checkins.get(event.event_id, False))
    return Capabilities(
        status=status,
        add_event=can_add_event(session),
        checkin_tool=can_see_checkin_tool(session, status),
        check_in=can_check_in(session, status, checked_in),
        checked_in=checked_in,
        rate=can_rate(status),
        register=can_register(status),
    )
