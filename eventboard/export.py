"""
Export the current view
=======================

CSV is great for spreadsheets; JSON is great for programs and preserves
field names. Both include the derived status and average rating as of the
"now" passed in, so an export matches what was on screen.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Sequence
import csv
import json
from .models import Event
from .status import event_status

COLUMNS = [
    "event_id", "title", "category", "start", "end", "status", "location",
    "organizer", "registration_link", "prizes", "winners", "attendees",
    "average_rating", "rating_count", "reminded",
]


def _row(e: Event, now: datetime) -> Dict[str, Any]:
    return {
        "event_id": e.event_id,
        "title": e.title,
        "category": e.category,
        "start": e.start.isoformat(),
        "end": e.end.isoformat(),
        "status": event_status(e, now),
        "location": e.location,
        "organizer": e.organizer,
        "registration_link": e.registration_link,
        "prizes": e.prizes,
        "winners": e.winners,
        "attendees": e.attendees,
        "average_rating": e.average_rating,
        "rating_count": e.rating_count,
        "reminded": e.reminded,
    }


def export_csv(events: Sequence[Event], path: str, now: datetime) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=COLUMNS)
        w.writeheader()
        for e in events:
            w.writerow(_row(e, now))


def export_json(events: Sequence[Event], path: str, now: datetime) -> None:
    payload: List[Dict[str, Any]] = [dict(_row(e, now), description=e.description) for e in events]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
