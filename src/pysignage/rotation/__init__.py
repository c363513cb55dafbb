"""Rotation playlist assembly (player cards, filler selection, media)."""

from .export import serialize_entries, serialize_entry
from .playlist import (
    IMAGE_CONTENT_DURATION,
    MIN_ROTATION_PLAYERS,
    PLAYER_STATS_DURATION,
    VIDEO_CONTENT_DURATION,
    MediaEntry,
    PlayerCardEntry,
    RotationEntry,
    build_fallback_content,
    build_rotation,
    entry_duration,
)
from .selector import RandomPlayerSelector

__all__ = [
    "IMAGE_CONTENT_DURATION",
    "MIN_ROTATION_PLAYERS",
    "PLAYER_STATS_DURATION",
    "VIDEO_CONTENT_DURATION",
    "MediaEntry",
    "PlayerCardEntry",
    "RandomPlayerSelector",
    "RotationEntry",
    "build_fallback_content",
    "build_rotation",
    "entry_duration",
    "serialize_entries",
    "serialize_entry",
]
