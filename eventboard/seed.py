"""
Built-in seed data
==================

The board starts with two accounts and four events. The event times were
written around 2025-11-16 14:25 local time, so pinning the clock to that
instant (see `EVENTBOARD_NOW`) shows one past, one current and two upcoming
events.
"""

from __future__ import annotations
from datetime import datetime
from typing import List
from .models import Event, User, STUDENT, ORGANIZER

SEED_NOW = datetime(2025, 11, 16, 14, 25)


def seed_users() -> List[User]:
    return [
        User(user_id=1, email="student@mail.com", password="123", role=STUDENT),
        User(user_id=2, email="organizer@mail.com", password="123", role=ORGANIZER),
    ]


def seed_events() -> List[Event]:
    """Return fresh copies, so each board owns its own mutable events."""
    return [
        Event(
            event_id=1,
            title="TechFest 2025",
            category="Tech",
            start=datetime(2025, 11, 20, 10, 0),
            end=datetime(2025, 11, 20, 18, 0),
            location="Auditorium A",
            description="Annual technology festival featuring hackathons, tech talks, and exhibitions.",
            organizer="Tech Club",
            registration_link="https://register.example.com/techfest",
            prizes="1st Prize: $500, 2nd Prize: $300, 3rd Prize: $100",
            image="https://images.unsplash.com/photo-1540575467063-178a50c2df87?w=800",
            attendees=245,
            ratings=[5, 4, 5, 5, 4],
        ),
        Event(
            event_id=2,
            title="Cultural Night",
            category="Cultural",
            start=datetime(2025, 11, 18, 18, 0),
            end=datetime(2025, 11, 18, 22, 0),
            location="Main Stage",
            description="Celebrate diversity with dance, music, and performances from various cultures.",
            organizer="Cultural Committee",
            registration_link="https://register.example.com/cultural",
            prizes="Best Performance: Trophy + $200",
            image="https://images.unsplash.com/photo-1533174072545-7a4b6ad7a6c3?w=800",
            attendees=180,
            ratings=[5, 5, 4, 5],
        ),
        Event(
            event_id=3,
            title="Startup Summit (PAST)",
            category="Seminar",
            start=datetime(2025, 11, 10, 14, 0),
            end=datetime(2025, 11, 10, 17, 0),
            location="Conference Hall",
            description="Learn from successful entrepreneurs about building startups and innovation.",
            organizer="Entrepreneurship Cell",
            registration_link="https://register.example.com/startup",
            prizes="Best Pitch: Seed Funding Opportunity",
            winners="1st: 'EcoSort', 2nd: 'QuickHealth', 3rd: 'Learnify'",
            image="https://images.unsplash.com/photo-1559223607-a43c990e6e1e?w=800",
            attendees=120,
            ratings=[4, 5, 5],
        ),
        Event(
            event_id=4,
            title="Live Art Workshop (CURRENT)",
            category="Workshop",
            start=datetime(2025, 11, 16, 13, 0),
            end=datetime(2025, 11, 16, 16, 0),
            location="Art Studio 1",
            description="Join us for a live painting and sculpting workshop.",
            organizer="Art Club",
            registration_link="https://register.example.com/art",
            prizes="Best Artwork: $150 Art Supplies",
            image="https://images.unsplash.com/photo-1547891654-e66ed7ebb968?w=800",
            attendees=45,
            ratings=[5, 5],
            reminded=True,
        ),
    ]
