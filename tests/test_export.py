import csv
import json

from eventboard.export import export_csv, export_json


def test_export_json(board, now, tmp_path):
    board.set_time_filter("all")
    path = tmp_path / "view.json"
    export_json(board.view().events, str(path), now)
    rows = json.loads(path.read_text(encoding="utf-8"))
    assert [r["event_id"] for r in rows] == [1, 2, 3, 4]
    assert [r["status"] for r in rows] == ["upcoming", "upcoming", "past", "current"]
    assert rows[0]["average_rating"] == 4.6
    assert rows[2]["winners"].startswith("1st")
    assert "description" in rows[0]


def test_export_csv(board, now, tmp_path):
    board.set_time_filter("past")
    path = tmp_path / "view.csv"
    export_csv(board.view().events, str(path), now)
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["title"] == "Startup Summit (PAST)"
    assert rows[0]["start"] == "2025-11-10T14:00:00"
