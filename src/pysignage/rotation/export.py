"""Flatten rotation entries into the JSON shape the display client consumes."""

from __future__ import annotations

from typing import Any, Iterable, List

from pysignage.rotation.playlist import MediaEntry, PlayerCardEntry, RotationEntry


def serialize_entry(entry: RotationEntry) -> dict[str, Any]:
    if isinstance(entry, PlayerCardEntry):
        player = entry.player.model_dump(mode="json")
        is_active = True
    elif isinstance(entry, MediaEntry):
        player = None
        is_active = entry.item.is_active
    else:
        raise TypeError(f"Unsupported rotation entry {type(entry).__name__}")
    return {
        "id": entry.entry_id,
        "title": entry.title,
        "content_type": entry.content_type.value,
        "duration": entry.duration,
        "file_path": entry.file_path,
        "player_id": entry.player_id,
        "is_active": is_active,
        "order": entry.order,
        "player": player,
    }


def serialize_entries(entries: Iterable[RotationEntry]) -> List[dict[str, Any]]:
    return [serialize_entry(entry) for entry in entries]
