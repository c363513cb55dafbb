from pathlib import Path

import pytest

from pysignage.config import SignageSettings
from pysignage.config_loader import SignageSnapshot
from pysignage.errors import SnapshotError


def test_settings_defaults(monkeypatch):
    for name in (
        "SIGNAGE_DB_PATH",
        "SIGNAGE_MONITOR_INTERVAL",
        "SIGNAGE_NEARBY_WINDOW",
        "SIGNAGE_MIN_ROTATION_PLAYERS",
        "SIGNAGE_RANDOM_RESET_MINUTES",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = SignageSettings.from_env()

    assert settings.monitor_interval_seconds == 60.0
    assert settings.nearby_window_minutes == 30
    assert settings.min_rotation_players == 3
    assert settings.random_reset_minutes == 60


def test_settings_read_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("SIGNAGE_DB_PATH", str(tmp_path / "x.sqlite"))
    monkeypatch.setenv("SIGNAGE_MONITOR_INTERVAL", "15")
    monkeypatch.setenv("SIGNAGE_MIN_ROTATION_PLAYERS", "5")

    settings = SignageSettings.from_env()

    assert settings.db_path == tmp_path / "x.sqlite"
    assert settings.monitor_interval_seconds == 15.0
    assert settings.min_rotation_players == 5


def test_settings_keep_uri_db_path(monkeypatch):
    monkeypatch.setenv("SIGNAGE_DB_PATH", "file:signage?mode=memory&cache=shared")
    assert SignageSettings.from_env().db_path == "file:signage?mode=memory&cache=shared"


def test_invalid_values_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("SIGNAGE_NEARBY_WINDOW", "soon")
    monkeypatch.setenv("SIGNAGE_MONITOR_INTERVAL", "0")

    with caplog.at_level("WARNING"):
        settings = SignageSettings.from_env()

    assert settings.nearby_window_minutes == 30
    assert settings.monitor_interval_seconds == 1.0
    assert "SIGNAGE_NEARBY_WINDOW" in caplog.text


def test_snapshot_load_rejects_bad_files(tmp_path: Path):
    missing = tmp_path / "missing.json"
    with pytest.raises(SnapshotError):
        SignageSnapshot.load(missing)

    not_object = tmp_path / "list.json"
    not_object.write_text("[]", encoding="utf-8")
    with pytest.raises(SnapshotError):
        SignageSnapshot.load(not_object)

    invalid = tmp_path / "invalid.json"
    invalid.write_text('{"players": [{"id": "abc"}]}', encoding="utf-8")
    with pytest.raises(SnapshotError):
        SignageSnapshot.load(invalid)
