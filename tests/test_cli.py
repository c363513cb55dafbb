import json
from datetime import datetime
from pathlib import Path

import pytest

from pysignage.cli import main


def _write_snapshot(path: Path) -> Path:
    payload = {
        "players": [
            {"id": 1, "first_name": "Amy", "last_name": "Alpha"},
            {"id": 2, "first_name": "Ben", "last_name": "Bravo"},
            {"id": 3, "first_name": "Cal", "last_name": "Charlie"},
        ],
        "sessions": [
            {
                "id": 10,
                "is_recurring": True,
                "day_of_week": 1,
                "start_date": "2024-12-02",
                "start_time": "18:00",
                "duration": 30,
                "player_id": 2,
            }
        ],
        "content": [{"id": 4, "title": "Highlights", "content_type": "VIDEO", "order": 0}],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_cli_prints_resolved_signage(tmp_path: Path, capsys):
    snapshot = _write_snapshot(tmp_path / "snapshot.json")

    main([str(snapshot), "--at", "2025-01-06T18:15"])

    output = json.loads(capsys.readouterr().out)
    assert output["current_session"]["id"] == 10
    assert output["current_session"]["player"]["id"] == 2
    assert output["content"][0]["id"] == -1002
    assert output["content"][-1]["duration"] == -1
    assert len(output["fallback_content"]) == 4


def test_cli_fallback_to_file(tmp_path: Path):
    snapshot = _write_snapshot(tmp_path / "snapshot.json")
    out_path = tmp_path / "fallback.json"

    main([str(snapshot), "--fallback", "--output", str(out_path)])

    entries = json.loads(out_path.read_text(encoding="utf-8"))
    assert [entry["id"] for entry in entries] == [4, -1, -2, -3]


def test_cli_exits_on_bad_snapshot(tmp_path: Path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "nope.json")])


def test_cli_accepts_at_with_utc_offset(tmp_path: Path, capsys):
    snapshot = _write_snapshot(tmp_path / "snapshot.json")
    # Monday 18:15 local time, spelled with an explicit offset
    at = datetime(2025, 1, 6, 18, 15).astimezone().isoformat()

    main([str(snapshot), "--at", at])

    output = json.loads(capsys.readouterr().out)
    assert output["current_session"]["id"] == 10
    assert output["current_player"]["id"] == 2
