from datetime import datetime

import pytest

from eventboard.engine import EventBoard, FilterState
from eventboard.errors import NotFound, ValidationFailed
from eventboard.models import average_rating, DEFAULT_CATEGORY, DEFAULT_IMAGE


def test_default_filters():
    assert FilterState() == FilterState(category="All", time_filter="upcoming", search="", view_mode="grid")


def test_default_view_is_upcoming(board):
    view = board.view()
    assert [e.event_id for e in view.events] == [1, 2]
    assert not view.unfiltered


def test_view_is_idempotent(board):
    assert board.view() == board.view()


def test_view_all_returns_catalog(board):
    board.set_time_filter("all")
    view = board.view()
    assert view.events == board.events
    assert view.unfiltered


def test_empty_result_is_distinct_from_empty_catalog(board, now):
    board.set_search("no such event anywhere")
    assert board.view().no_results

    empty = EventBoard.seeded(clock=lambda: now, events=[])
    empty.set_time_filter("all")
    view = empty.view()
    assert view.is_empty
    assert not view.no_results


def test_now_is_read_once_per_view(now):
    calls = []

    def clock():
        calls.append(1)
        return now

    board = EventBoard.seeded(clock=clock)
    board.view()
    assert len(calls) == 1


def test_filter_setters_validate(board):
    assert isinstance(board.set_category("Parties").error, ValidationFailed)
    assert isinstance(board.set_time_filter("tomorrow").error, ValidationFailed)
    assert isinstance(board.set_view_mode("table").error, ValidationFailed)
    assert board.filters == FilterState()
    assert board.set_time_filter("PAST").ok
    assert board.filters.time_filter == "past"


def test_view_mode_does_not_filter(board):
    before = board.view().events
    board.set_view_mode("list")
    assert board.view().events == before


@pytest.mark.parametrize("ratings, avg", [([5, 4, 5, 5, 4], 4.6), ([4, 5, 5], 4.7), ([], 0)])
def test_average_rating(ratings, avg):
    assert average_rating(ratings) == avg


def test_add_rating_appends_and_recomputes(board):
    result = board.add_rating(4, "3")
    assert result.ok
    assert board.find_event(4).ratings == [5, 5, 3]
    assert result.value == 4.3


@pytest.mark.parametrize("bad", ["0", "6", "4.5", "five", True, None])
def test_add_rating_rejects_bad_values(board, bad):
    result = board.add_rating(1, bad)
    assert isinstance(result.error, ValidationFailed)
    assert board.find_event(1).ratings == [5, 4, 5, 5, 4]


def test_add_rating_unknown_event(board):
    assert isinstance(board.add_rating(99, 5).error, NotFound)


def test_new_event_has_zero_ratings(organizer_board, event_form):
    event = organizer_board.add_event(event_form).value
    assert event.average_rating == 0
    assert event.rating_count == 0


def test_toggle_reminder(board):
    assert board.toggle_reminder(1).message == "You'll be reminded about this event!"
    assert board.find_event(1).reminded
    assert board.toggle_reminder("1").message == "Reminder removed!"
    assert not board.find_event(1).reminded


def test_toggle_reminder_unknown_event(board):
    result = board.toggle_reminder(42)
    assert isinstance(result.error, NotFound)
    assert result.message == "Event not found: 42"


def test_record_check_in_is_idempotent(board):
    assert board.record_check_in(4).ok
    once = dict(board.checkins)
    assert board.record_check_in(4).ok
    assert board.checkins == once == {4: True}


def test_check_in_is_shared_across_students(student_board):
    student_board.record_check_in(4)
    student_board.logout()
    student_board.signup("other@x.com", "pw", "student")
    assert student_board.capabilities(4).checked_in


def test_add_event(organizer_board, event_form):
    result = organizer_board.add_event(event_form)
    assert result.ok
    event = result.value
    assert event.event_id == 5
    assert organizer_board.events[-1] is event
    assert event.start == datetime(2025, 12, 1, 18, 0)
    assert event.attendees == 0
    assert event.ratings == []
    assert event.reminded is False
    assert event.winners is None
    assert event.image == DEFAULT_IMAGE
    assert event.prizes == "Pizza"


def test_add_event_missing_location(organizer_board, event_form):
    del event_form["location"]
    result = organizer_board.add_event(event_form)
    assert isinstance(result.error, ValidationFailed)
    assert result.error.fields == ["location"]
    assert "location" in result.message
    assert len(organizer_board.events) == 4


def test_add_event_blank_fields_count_as_missing(organizer_board, event_form):
    event_form["title"] = "   "
    event_form["organizer"] = ""
    result = organizer_board.add_event(event_form)
    assert result.error.fields == ["title", "organizer"]


def test_add_event_defaults_category(organizer_board, event_form):
    del event_form["category"]
    assert organizer_board.add_event(event_form).value.category == DEFAULT_CATEGORY == "Tech"


def test_add_event_accepts_form_aliases(organizer_board, event_form):
    event_form["endDate"] = event_form.pop("end_date")
    event_form["registrationLink"] = event_form.pop("registration_link")
    assert organizer_board.add_event(event_form).ok


def test_add_event_rejects_bad_date_and_category(organizer_board, event_form):
    bad_date = dict(event_form, date="next tuesday")
    assert organizer_board.add_event(bad_date).error.fields == ["date"]
    bad_cat = dict(event_form, category="All")
    assert organizer_board.add_event(bad_cat).error.fields == ["category"]
    assert len(organizer_board.events) == 4


def test_add_event_allows_end_before_start(organizer_board, event_form):
    event_form["end_date"] = "2025-11-30T10:00"
    assert organizer_board.add_event(event_form).ok


def test_add_event_converts_offset_times_to_local(organizer_board, event_form):
    event_form["date"] = "2025-12-01T18:00+05:30"
    event_form["end_date"] = "2025-12-01T23:00+05:30"
    event = organizer_board.add_event(event_form).value
    assert event.start.tzinfo is None and event.end.tzinfo is None
    assert event.start == datetime.fromisoformat("2025-12-01T18:00+05:30").astimezone().replace(tzinfo=None)
    assert event in organizer_board.view().events
    organizer_board.set_time_filter("all")
    assert event in organizer_board.view().events


def test_open_and_close_event(board):
    assert board.open_event(3).ok
    assert board.selected_event.event_id == 3
    assert board.close_event().ok
    assert board.selected_event is None
    assert isinstance(board.open_event(77).error, NotFound)
    assert isinstance(board.open_event("abc").error, ValidationFailed)


def test_subscribers_notified_after_successful_actions(board):
    seen = []
    unsubscribe = board.subscribe(lambda b: seen.append(b.filters.category))
    board.set_category("Tech")
    board.set_category("Nope")
    assert seen == ["Tech"]
    unsubscribe()
    board.set_category("All")
    assert seen == ["Tech"]


def test_capabilities_for_current_event(student_board):
    caps = student_board.capabilities(4)
    assert caps.status == "current"
    assert caps.check_in and caps.rate and caps.register
    assert not caps.add_event and not caps.checkin_tool
    student_board.record_check_in(4)
    assert not student_board.capabilities(4).check_in


def test_capabilities_for_past_and_upcoming(organizer_board):
    past = organizer_board.capabilities(3)
    assert not past.register and past.rate and not past.checkin_tool
    upcoming = organizer_board.capabilities(1)
    assert not upcoming.rate and upcoming.register and upcoming.checkin_tool
    assert upcoming.add_event
