"""Load and save JSON snapshots of players, sessions and media content."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from pydantic import ValidationError

from pysignage.errors import SnapshotError
from pysignage.models import ContentItem, Player, SessionDefinition
from pysignage.persistence import (
    InMemoryContentRepository,
    InMemoryPlayerRepository,
    InMemorySessionRepository,
    SignageStore,
)


@dataclass
class SignageSnapshot:
    players: List[Player] = field(default_factory=list)
    sessions: List[SessionDefinition] = field(default_factory=list)
    content: List[ContentItem] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "SignageSnapshot":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SnapshotError(f"Unable to read snapshot {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot {path} must contain a JSON object")
        try:
            return cls(
                players=[Player.model_validate(item) for item in data.get("players", [])],
                sessions=[SessionDefinition.model_validate(item) for item in data.get("sessions", [])],
                content=[ContentItem.model_validate(item) for item in data.get("content", [])],
            )
        except ValidationError as exc:
            raise SnapshotError(f"Invalid snapshot {path}: {exc}") from exc

    def save(self, path: Path) -> None:
        payload = {
            "players": [player.model_dump(mode="json") for player in self.players],
            "sessions": [session.model_dump(mode="json", exclude={"player"}) for session in self.sessions],
            "content": [item.model_dump(mode="json") for item in self.content],
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def repositories(
        self,
    ) -> tuple[InMemorySessionRepository, InMemoryPlayerRepository, InMemoryContentRepository]:
        return (
            InMemorySessionRepository(self.sessions),
            InMemoryPlayerRepository(self.players),
            InMemoryContentRepository(self.content),
        )

    def seed(self, store: SignageStore) -> None:
        for player in self.players:
            store.save_player(player)
        for session in self.sessions:
            store.save_session(session)
        for item in self.content:
            store.save_content(item)
