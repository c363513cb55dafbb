"""Runtime settings read from ``SIGNAGE_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger("uvicorn.error")

_DB_PATH_ENV = "SIGNAGE_DB_PATH"
_MONITOR_INTERVAL_ENV = "SIGNAGE_MONITOR_INTERVAL"
_NEARBY_WINDOW_ENV = "SIGNAGE_NEARBY_WINDOW"
_MIN_PLAYERS_ENV = "SIGNAGE_MIN_ROTATION_PLAYERS"
_RANDOM_RESET_ENV = "SIGNAGE_RANDOM_RESET_MINUTES"

_DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "pysignage.sqlite"
_MONITOR_INTERVAL_DEFAULT = 60.0
_NEARBY_WINDOW_DEFAULT = 30
_MIN_PLAYERS_DEFAULT = 3
_RANDOM_RESET_DEFAULT = 60


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class SignageSettings:
    db_path: Path | str = _DEFAULT_DB_PATH
    monitor_interval_seconds: float = _MONITOR_INTERVAL_DEFAULT
    nearby_window_minutes: int = _NEARBY_WINDOW_DEFAULT
    min_rotation_players: int = _MIN_PLAYERS_DEFAULT
    random_reset_minutes: int = _RANDOM_RESET_DEFAULT

    @classmethod
    def from_env(cls) -> "SignageSettings":
        db_raw = os.getenv(_DB_PATH_ENV)
        if db_raw:
            db_path: Path | str = db_raw if db_raw.startswith("file:") else Path(db_raw)
        else:
            db_path = _DEFAULT_DB_PATH
        return cls(
            db_path=db_path,
            monitor_interval_seconds=_env_float(
                _MONITOR_INTERVAL_ENV, _MONITOR_INTERVAL_DEFAULT, clamp_min=1.0
            ),
            nearby_window_minutes=_env_int(_NEARBY_WINDOW_ENV, _NEARBY_WINDOW_DEFAULT, min_value=0),
            min_rotation_players=_env_int(_MIN_PLAYERS_ENV, _MIN_PLAYERS_DEFAULT, min_value=0),
            random_reset_minutes=_env_int(_RANDOM_RESET_ENV, _RANDOM_RESET_DEFAULT, min_value=1),
        )
