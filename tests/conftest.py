import pytest

from eventboard.engine import EventBoard
from eventboard.seed import SEED_NOW


@pytest.fixture
def now():
    return SEED_NOW


@pytest.fixture
def board(now):
    """Seeded board with the clock pinned: events 1, 2 upcoming, 3 past, 4 current."""
    return EventBoard.seeded(clock=lambda: now)


@pytest.fixture
def student_board(board):
    assert board.login("student@mail.com", "123").ok
    return board


@pytest.fixture
def organizer_board(board):
    assert board.login("organizer@mail.com", "123").ok
    return board


@pytest.fixture
def event_form():
    return {
        "title": "Hack Night",
        "category": "Club",
        "date": "2025-12-01T18:00",
        "end_date": "2025-12-01T23:00",
        "location": "Lab 2",
        "description": "Bring a laptop and build something.",
        "organizer": "Coding Club",
        "registration_link": "https://register.example.com/hack",
        "prizes": "Pizza",
    }
