from __future__ import annotations

"""
EventBoard report generator
---------------------------
This module writes a DOCX report from a list of EventCard view-models.

Design goals:
- Keep EventBoard usable even if report dependencies are missing (lazy imports).
- Report on exactly what the renderer sees: the cards carry the status and
  average rating computed against one "now".
- Skip charts that carry no information (e.g. a category chart when the
  scope holds a single category).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import os
import tempfile
from collections import Counter

from .models import STATUSES
from .viewmodel import EventCard, STATUS_LABELS


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "EventBoard Report"
    subtitle: str = "Campus events overview"
    catalog_name: str = "Built-in catalog"

    # How many events to show in the "top rated" table
    top_n: int = 10

    # Filters that produced the scope, as "name: value" lines
    filters: List[str] = field(default_factory=list)


def generate_docx_report(
    cards: Sequence[EventCard],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    scope_label: str = "Current View",
) -> str:
    """Generate a DOCX report + charts for a list of event cards."""
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not cards:
        raise ValueError("No events to report on (view is empty).")

    # -----------------------------
    # 1) Counts
    # -----------------------------
    c_category = Counter(c.category for c in cards)
    c_status = Counter(c.status for c in cards)
    rated = [c for c in cards if c.rating_count]
    total_attendees = sum(c.attendees for c in cards)
    total_ratings = sum(c.rating_count for c in cards)

    # -----------------------------
    # 2) Charts
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="eventboard_report_")
    chart_paths: List[Tuple[str, str]] = []

    def _save(filename: str) -> str:
        path = os.path.join(tmpdir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        return path

    def _bar(title: str, labels: List[str], values: List[float], ylabel: str, filename: str) -> None:
        plt.figure()
        plt.bar(labels, values)
        plt.xticks(rotation=45, ha="right")
        plt.title(title)
        plt.ylabel(ylabel)
        chart_paths.append((title, _save(filename)))

    if len(c_category) > 1:
        cats = sorted(c_category)
        _bar(f"Events by Category ({scope_label})", cats, [c_category[k] for k in cats], "Count", "by_category.png")

    if len(c_status) > 1:
        present = [s for s in STATUSES if c_status[s]]
        _bar(f"Events by Status ({scope_label})", [STATUS_LABELS[s] for s in present],
             [c_status[s] for s in present], "Count", "by_status.png")

    if rated:
        labels = [c.title for c in rated]
        avgs = np.array([c.average_rating for c in rated], dtype=float)
        plt.figure()
        bars = plt.barh(labels, avgs)
        for i, p in enumerate(bars):
            p.set_facecolor("C0" if i % 2 == 0 else "C1")
        plt.xlim(0, 5)
        plt.title(f"Average Rating ({scope_label})")
        plt.xlabel("Average rating (1-5)")
        chart_paths.append((f"Average Rating ({scope_label})", _save("ratings.png")))

    # -----------------------------
    # 3) Build DOCX report
    # -----------------------------
    doc = Document()

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Catalog", config.catalog_name)
    _kv("Scope", scope_label)
    _kv("Events in scope", str(len(cards)))
    _kv("Total attendees", str(total_attendees))
    _kv("Ratings received", str(total_ratings))

    if config.filters:
        doc.add_heading("Filters", level=1)
        for line in config.filters:
            doc.add_paragraph(line, style="List Bullet")

    doc.add_heading("Status breakdown", level=1)
    t = doc.add_table(rows=1, cols=2)
    t.rows[0].cells[0].text = "Status"
    t.rows[0].cells[1].text = "Events"
    for s in STATUSES:
        row = t.add_row().cells
        row[0].text = STATUS_LABELS[s]
        row[1].text = str(c_status[s])

    if chart_paths:
        doc.add_heading("Charts", level=1)
        for title, path in chart_paths:
            doc.add_paragraph(title)
            doc.add_picture(path, width=Inches(6.0))

    if rated:
        doc.add_heading("Top rated", level=1)
        top = sorted(rated, key=lambda c: (c.average_rating, c.rating_count), reverse=True)[:config.top_n]
        t2 = doc.add_table(rows=1, cols=4)
        h = t2.rows[0].cells
        h[0].text = "Event"
        h[1].text = "Category"
        h[2].text = "Average"
        h[3].text = "Ratings"
        for c in top:
            r = t2.add_row().cells
            r[0].text = c.title
            r[1].text = c.category
            r[2].text = f"{c.average_rating:.1f}"
            r[3].text = str(c.rating_count)

    doc.add_heading("Events", level=1)
    t3 = doc.add_table(rows=1, cols=6)
    h = t3.rows[0].cells
    h[0].text = "ID"
    h[1].text = "Title"
    h[2].text = "Category"
    h[3].text = "Starts"
    h[4].text = "Location"
    h[5].text = "Status"
    for c in cards:
        r = t3.add_row().cells
        r[0].text = str(c.event_id)
        r[1].text = c.title
        r[2].text = c.category
        r[3].text = c.date_label
        r[4].text = c.location
        r[5].text = STATUS_LABELS[c.status]

    # Footer
    from . import __version__ as eventboard_version
    from datetime import datetime as _dt
    doc.add_paragraph("")
    doc.add_paragraph(f"EventBoard version: {eventboard_version}")
    doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
