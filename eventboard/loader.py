"""
Catalog loader (CSV / Excel -> Event list)
==========================================

This module reads an event catalog from a spreadsheet and converts each row
into an `Event` object. The board can start from this instead of the
built-in seed events.

Key ideas:
- We try multiple possible column names because hand-made sheets vary
  ("date", "Start Date", "start"...).
- Conversion helpers (_to_int/_to_str/...) turn blank cells into defaults.
- A row with an unknown category, an unreadable date or a bad rating is an
  error, reported with its row number. Offset-aware dates become naive
  local time.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import re
import pandas as pd
from .models import Event, EVENT_CATEGORIES, DEFAULT_CATEGORY, DEFAULT_IMAGE, naive_local

logger = logging.getLogger(__name__)

_TRUE = {"true", "yes", "y", "1"}
_FALSE = {"false", "no", "n", "0", ""}


def _to_int(x) -> Optional[int]:
    """Convert a cell to int, returning None if missing/invalid."""
    if pd.isna(x): return None
    try: return int(float(x))
    except (TypeError, ValueError): return None


def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()


def _to_opt_str(x) -> Optional[str]:
    s = _to_str(x)
    return s or None


def _to_bool(x) -> bool:
    if pd.isna(x): return False
    if isinstance(x, bool): return x
    s = str(x).strip().lower()
    if s in _TRUE: return True
    if s in _FALSE: return False
    raise ValueError(f"Not a boolean: {x!r}")


def _to_ratings(x, line: int) -> List[int]:
    """Ratings are stored as '5;4;5' (or with ','). Each must be a whole number 1-5."""
    if pd.isna(x): return []
    # a lone rating in a numeric column arrives as 5 or 5.0
    if isinstance(x, float) and x.is_integer():
        x = int(x)
    out: List[int] = []
    for part in re.split(r"[;,\s]+", str(x).strip()):
        if not part:
            continue
        try:
            v = int(part)
        except ValueError:
            raise ValueError(f"Row {line}: invalid rating {part!r}") from None
        if not 1 <= v <= 5:
            raise ValueError(f"Row {line}: rating {v} is outside 1-5")
        out.append(v)
    return out


def _to_datetime(x, line: int):
    """Parse a date cell; offset-aware values become naive local time."""
    try:
        return naive_local(pd.to_datetime(x).to_pydatetime())
    except (TypeError, ValueError) as e:
        raise ValueError(f"Row {line}: unreadable date ({e})") from e


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(df: pd.DataFrame, *names: str, required: bool = True) -> Optional[str]:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    if required:
        raise KeyError(f"Missing required column. Tried={names}. Available={cols}")
    return None


def _read_frame(path: str) -> pd.DataFrame:
    lower = path.lower()
    if lower.endswith((".xlsx", ".xlsm")):
        return pd.read_excel(path, engine="openpyxl")
    if lower.endswith(".csv"):
        return pd.read_csv(path)
    raise ValueError(f"Unsupported catalog format: {path} (expected .csv or .xlsx)")


def load_catalog(path: str) -> List[Event]:
    """Load events from a .csv or .xlsx file.

    Events without an id get sequential ids after the largest id present.
    """
    df = _read_frame(path)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)

    id_col = _col(df, "id", "event_id", "Event ID", required=False)
    title_col = _col(df, "title", "Title", "Name")
    cat_col = _col(df, "category", "Category", "Type", required=False)
    start_col = _col(df, "date", "start", "Start Date", "start_time")
    end_col = _col(df, "endDate", "end_date", "end", "End Date", "end_time")
    loc_col = _col(df, "location", "Location", "Venue")
    desc_col = _col(df, "description", "Description")
    org_col = _col(df, "organizer", "Organizer", "Organiser", "Host")
    link_col = _col(df, "registrationLink", "registration_link", "Registration URL", "link")
    prizes_col = _col(df, "prizes", "Prizes", "prize", required=False)
    winners_col = _col(df, "winners", "Winners", required=False)
    image_col = _col(df, "image", "Image", "image_url", required=False)
    att_col = _col(df, "attendees", "Attendees", "attending", required=False)
    ratings_col = _col(df, "ratings", "Ratings", required=False)
    reminded_col = _col(df, "reminded", "Reminded", "reminder", required=False)

    ids = [_to_int(v) for v in df[id_col]] if id_col else [None] * len(df)
    next_id = max((i for i in ids if i is not None), default=0) + 1

    events: List[Event] = []
    for pos, (i, row) in enumerate(df.iterrows()):
        line = pos + 2  # header is line 1
        category = _to_str(row[cat_col]) if cat_col else ""
        category = category or DEFAULT_CATEGORY
        if category not in EVENT_CATEGORIES:
            raise ValueError(f"Row {line}: unknown category {category!r}")
        if pd.isna(row[start_col]) or pd.isna(row[end_col]):
            raise ValueError(f"Row {line}: missing start or end date")
        start = _to_datetime(row[start_col], line)
        end = _to_datetime(row[end_col], line)

        event_id = ids[pos]
        if event_id is None:
            event_id = next_id
            next_id += 1

        events.append(Event(
            event_id=event_id,
            title=_to_str(row[title_col]),
            category=category,
            start=start,
            end=end,
            location=_to_str(row[loc_col]),
            description=_to_str(row[desc_col]),
            organizer=_to_str(row[org_col]),
            registration_link=_to_str(row[link_col]),
            prizes=_to_opt_str(row[prizes_col]) if prizes_col else None,
            winners=_to_opt_str(row[winners_col]) if winners_col else None,
            image=(_to_str(row[image_col]) if image_col else "") or DEFAULT_IMAGE,
            attendees=max(_to_int(row[att_col]) or 0, 0) if att_col else 0,
            ratings=_to_ratings(row[ratings_col], line) if ratings_col else [],
            reminded=_to_bool(row[reminded_col]) if reminded_col else False,
        ))

    seen = set()
    for e in events:
        if e.event_id in seen:
            raise ValueError(f"Duplicate event id: {e.event_id}")
        seen.add(e.event_id)

    logger.info("Loaded %d events from %s", len(events), path)
    return events
