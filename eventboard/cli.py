"""
EventBoard Command Line Interface (CLI)
=======================================

This file provides the interactive terminal program you run like:

    python -m eventboard.cli --now 2025-11-16T14:25

It is one possible renderer for the board:
- Argument parsing (argparse) and configuration (.env / environment)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to board handlers, and drawing view-models

Affordances are only offered when the matching capability is true, the same
way a page would simply not draw the button.
"""

from __future__ import annotations
import argparse, shlex
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional
from .config import Config
from .engine import EventBoard, ActionResult, parse_timestamp
from .errors import EventBoardError
from .export import export_csv, export_json
from .loader import load_catalog
from .logging_config import setup_logging
from .viewmodel import build_board_view, build_event_card, build_event_detail, EventCard, EventDetail

logger = logging.getLogger(__name__)

HELP = """
EventBoard commands
-------------------

1) Account
   login <email> <password>          (example: login student@mail.com 123)
   signup <email> <password> <role>  (role: student | organizer)
   logout
   whoami

2) Browse
   show
   category <name>                   (All, Tech, Cultural, Seminar, Club, Sports, Workshop)
   time <upcoming|current|past|all>
   search [term]                     (no term clears the search)
   view <grid|list>

3) Event
   open <id> | close
   remind <id>
   checkin <id>
   rate <id> <1-5>

4) Organizer
   add title="..." date=2025-12-01T10:00 end_date=2025-12-01T12:00 location="..."
       description="..." organizer="..." registration_link="..." [category=Tech] [prizes="..."]

5) Output (current view)
   report "<out.docx>" [current|full]
   export csv "<out.csv>" | export json "<out.json>"

6) Exit
   quit
"""


def build_board(catalog: Optional[str] = None, now: Optional[datetime] = None) -> EventBoard:
    """Create a board from a catalog file (or the seed) with an optional pinned clock."""
    events = load_catalog(catalog) if catalog else None
    clock = (lambda: now) if now else datetime.now
    return EventBoard.seeded(clock=clock, events=events)


def attach_renderer(board: EventBoard) -> Callable[[], None]:
    """Redraw the open event after every state change. Returns the unsubscribe function."""
    def redraw(b: EventBoard) -> None:
        event = b.selected_event
        if event is not None and b.session.is_authenticated:
            _print_detail(build_event_detail(event, b.session, b.now(), b.checkins))
    return board.subscribe(redraw)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the EventBoard CLI.

    1) Read configuration
    2) Load the catalog
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(prog="eventboard")
    ap.add_argument("--catalog", default=Config.CATALOG_PATH, help="Path to a .csv/.xlsx event catalog")
    ap.add_argument("--now", default=None, help="Pin the clock to an ISO timestamp")
    ap.add_argument("--log-level", default=Config.LOG_LEVEL, help="Logging level (default from EVENTBOARD_LOG_LEVEL)")
    args = ap.parse_args(argv)

    setup_logging(args.log_level)
    now = parse_timestamp(args.now, "now") if args.now else Config.now()

    board = build_board(args.catalog, now)
    attach_renderer(board)
    logger.info("Board ready with %d events", len(board.events))
    print(f"Loaded {len(board.events)} events. Log in to browse, or type 'help' for commands.")

    while True:
        try:
            line = input("events> ")
        except EOFError:
            break
        if not line.strip():
            continue
        if line.strip().lower() in ("quit", "exit"):
            break
        try:
            handle(board, line)
        except (ValueError, KeyError, OSError, EventBoardError) as e:
            print(f"Error: {e}")


def handle(board: EventBoard, line: str) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate board handler.
    """
    parts = shlex.split(line)
    cmd = parts[0].lower()
    args = parts[1:]

    if cmd == "help":
        print(HELP)
        return

    # ---------------- Account ----------------
    if cmd == "login":
        _need(args, 2, "login <email> <password>")
        _print_result(board.login(args[0], args[1]))
        return

    if cmd == "signup":
        _need(args, 3, "signup <email> <password> <student|organizer>")
        _print_result(board.signup(args[0], args[1], args[2].lower()))
        return

    if cmd == "logout":
        _print_result(board.logout())
        return

    if cmd == "whoami":
        view = build_board_view(board)
        print(view.header or "Not logged in.")
        return

    # Everything below is only shown to a logged-in visitor
    if not board.session.is_authenticated:
        print("Please log in first (login <email> <password>).")
        return

    # ---------------- Browse ----------------
    if cmd == "show":
        _render_board(board)
        return

    if cmd == "category":
        _need(args, 1, "category <name>")
        _print_result(board.set_category(args[0]))
        return

    if cmd == "time":
        _need(args, 1, "time <upcoming|current|past|all>")
        _print_result(board.set_time_filter(args[0]))
        return

    if cmd == "search":
        _print_result(board.set_search(" ".join(args)))
        return

    if cmd == "view":
        _need(args, 1, "view <grid|list>")
        _print_result(board.set_view_mode(args[0].lower()))
        return

    # ---------------- Event ----------------
    if cmd == "open":
        _need(args, 1, "open <id>")
        # the detail is drawn by the redraw listener
        result = board.open_event(args[0])
        if not result.ok:
            _print_result(result)
        return

    if cmd == "close":
        _print_result(board.close_event())
        return

    if cmd == "remind":
        _need(args, 1, "remind <id>")
        _print_result(board.toggle_reminder(args[0]))
        return

    if cmd == "checkin":
        _need(args, 1, "checkin <id>")
        caps = board.capabilities(args[0])
        if caps.checked_in:
            print("Already checked in.")
            return
        if not caps.check_in:
            print("Check-in is only open to students while the event is live.")
            return
        _print_result(board.record_check_in(args[0]))
        return

    if cmd == "rate":
        _need(args, 2, "rate <id> <1-5>")
        if not board.capabilities(args[0]).rate:
            print("Ratings open once the event has started.")
            return
        _print_result(board.add_rating(args[0], args[1]))
        return

    # ---------------- Organizer ----------------
    if cmd == "add":
        if not build_board_view(board).can_add_event:
            print("Only organizers can add events.")
            return
        _print_result(board.add_event(_parse_assignments(args)))
        return

    # ---------------- Output ----------------
    if cmd == "report":
        # report "<path.docx>" [current|full]
        from .report import generate_docx_report, ReportConfig
        _need(args, 1, 'report "<out.docx>" [current|full]')
        path = args[0]
        scope = args[1].lower() if len(args) >= 2 else "current"
        if scope not in ("current", "full"):
            raise ValueError("report scope must be: current | full")
        now = board.now()
        if scope == "full":
            events = board.events
            label = "Full Catalog"
        else:
            events = board.view(now).events
            label = "Current View"
        f = board.filters
        cfg = ReportConfig(filters=[
            f"Time: {f.time_filter}",
            f"Category: {f.category}",
            f"Search: {f.search or '(none)'}",
        ] if scope == "current" else [])
        generate_docx_report([build_event_card(e, now) for e in events], path, config=cfg, scope_label=label)
        print(f"Report written to {path}")
        return

    if cmd == "export":
        # export <csv|json> "<path>"
        if len(args) < 2:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt = args[0].lower()
        out_path = args[1]
        view = board.view()
        if view.is_empty:
            print("Nothing to export: current view is empty.")
            return
        if fmt == "csv":
            export_csv(view.events, out_path, view.now)
            print(f"Exported CSV to {out_path}")
            return
        if fmt == "json":
            export_json(view.events, out_path, view.now)
            print(f"Exported JSON to {out_path}")
            return
        print("Unknown export format. Use: csv or json")
        return

    print("Unknown command. Type 'help'.")


# ---------------- Helpers ----------------
def _need(args: List[str], n: int, usage: str) -> None:
    if len(args) < n:
        raise ValueError(f"Usage: {usage}")


def _parse_assignments(args: List[str]) -> Dict[str, str]:
    """Turn ['title=Hack Night', 'location=Lab 2'] into a field mapping."""
    fields: Dict[str, str] = {}
    for a in args:
        if "=" not in a:
            raise ValueError(f"Expected key=value, got {a!r}")
        key, value = a.split("=", 1)
        fields[key.strip()] = value
    return fields


def _print_result(result: ActionResult) -> None:
    print(result.message if result.ok else f"Error: {result.message}")


def _render_board(board: EventBoard) -> None:
    view = build_board_view(board)
    print(view.header)
    print(f"[{view.time_filter}] category={view.category} search={view.search!r} ({view.view_mode})")
    if view.no_results:
        print("No events found. Try adjusting your filters or search term.")
        return
    if not view.cards:
        print("No events yet.")
        return
    for card in view.cards:
        _print_card(card, compact=(view.view_mode == "list"))


def _print_card(c: EventCard, compact: bool = False) -> None:
    bell = " (reminder)" if c.reminded else ""
    if compact:
        print(f"[{c.event_id}] {c.title} | {c.date_label} | {c.status}{bell}")
        return
    print(f"[{c.event_id}] {c.title} ({c.category}) - {c.status}{bell}")
    print(f"    {c.date_label} @ {c.location} | {c.attendees} attending | rating {c.average_rating} ({c.rating_count})")


def _print_detail(d: EventDetail) -> None:
    c = d.card
    caps = d.capabilities
    print(f"{c.title}  [{d.status_label}]  ({c.category})")
    print(f"  When:      {c.date_label} - {d.end_label}")
    print(f"  Where:     {c.location}")
    print(f"  Organizer: {d.organizer}")
    print(f"  Attending: {c.attendees}")
    print(f"  Rating:    {c.average_rating} ({c.rating_count} ratings)")
    print(f"  {c.description}")
    if d.prize_block:
        label, text = d.prize_block
        print(f"  {label}: {text}")
    if caps.register:
        print(f"  Register:  {d.registration_link}")
    else:
        print("  Register:  (closed)")
    actions = ["remind"]
    if caps.checkin_tool:
        actions.append("show QR check-in code")
    if caps.check_in:
        actions.append("checkin")
    if caps.rate:
        actions.append("rate")
    print(f"  Actions:   {', '.join(actions)}")
    if caps.checked_in:
        print("  You're checked in.")


if __name__ == "__main__":
    main()
