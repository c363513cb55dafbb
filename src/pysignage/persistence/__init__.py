"""Repository interfaces consumed by the scheduler plus SQLite/in-memory backends."""

from __future__ import annotations

import json
import sqlite3
import tempfile
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence

from pysignage.models import ContentItem, ContentType, Player, SessionDefinition


class SessionRepository(Protocol):
    def list_active(self) -> Sequence[SessionDefinition]: ...


class PlayerRepository(Protocol):
    def list_all(self) -> Sequence[Player]: ...

    def get_by_id(self, player_id: int) -> Optional[Player]: ...


class ContentRepository(Protocol):
    def list_active(self) -> Sequence[ContentItem]: ...


class InMemorySessionRepository:
    def __init__(self, sessions: Iterable[SessionDefinition] = ()):
        self.sessions: List[SessionDefinition] = list(sessions)

    def list_active(self) -> List[SessionDefinition]:
        return [session for session in self.sessions if session.is_active]


class InMemoryPlayerRepository:
    def __init__(self, players: Iterable[Player] = ()):
        self.players: List[Player] = list(players)

    def list_all(self) -> List[Player]:
        return list(self.players)

    def get_by_id(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


class InMemoryContentRepository:
    def __init__(self, items: Iterable[ContentItem] = ()):
        self.items: List[ContentItem] = list(items)

    def list_active(self) -> List[ContentItem]:
        return [item for item in self.items if item.is_active]


class SignageStore:
    """SQLite-backed store for players, sessions and media content."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()
        self.sessions = _StoreSessions(self)
        self.players = _StorePlayers(self)
        self.content = _StoreContent(self)

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "pysignage-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "pysignage.sqlite"
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id INTEGER PRIMARY KEY,
                last_name TEXT NOT NULL,
                first_name TEXT NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1,
                is_weekend_warrior INTEGER NOT NULL DEFAULT 0,
                player_json TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS sessions (
                id INTEGER PRIMARY KEY,
                is_recurring INTEGER NOT NULL DEFAULT 0,
                day_of_week INTEGER,
                start_date TEXT NOT NULL,
                start_time TEXT NOT NULL,
                duration INTEGER NOT NULL,
                player_id INTEGER NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS content (
                id INTEGER PRIMARY KEY,
                title TEXT NOT NULL,
                content_type TEXT NOT NULL,
                file_path TEXT,
                player_id INTEGER,
                is_active INTEGER NOT NULL DEFAULT 1,
                sort_order INTEGER
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_sessions_active ON sessions(is_active)")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_content_active ON content(is_active)")

    def save_player(self, player: Player) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO players (id, last_name, first_name, is_active, is_weekend_warrior, player_json)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    player.id,
                    player.last_name,
                    player.first_name,
                    int(player.is_active),
                    int(player.is_weekend_warrior),
                    player.model_dump_json(),
                ),
            )

    def save_session(self, session: SessionDefinition) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO sessions (id, is_recurring, day_of_week, start_date, start_time, duration, player_id, is_active)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.id,
                    int(session.is_recurring),
                    session.day_of_week,
                    session.start_date.isoformat(),
                    session.start_time,
                    session.duration,
                    session.player_id,
                    int(session.is_active),
                ),
            )

    def save_content(self, item: ContentItem) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO content (id, title, content_type, file_path, player_id, is_active, sort_order)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.id,
                    item.title,
                    item.content_type.value,
                    item.file_path,
                    item.player_id,
                    int(item.is_active),
                    item.order,
                ),
            )

    def delete_player(self, player_id: int) -> bool:
        return self._delete("players", player_id)

    def delete_session(self, session_id: int) -> bool:
        return self._delete("sessions", session_id)

    def delete_content(self, content_id: int) -> bool:
        return self._delete("content", content_id)

    def _delete(self, table: str, row_id: int) -> bool:
        with self._connect() as conn:
            cur = conn.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
            return cur.rowcount > 0

    def list_players(self) -> List[Player]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT player_json FROM players ORDER BY last_name ASC, first_name ASC"
            ).fetchall()
        return [Player.model_validate(json.loads(row["player_json"])) for row in rows]

    def get_player(self, player_id: int) -> Optional[Player]:
        with self._connect() as conn:
            row = conn.execute("SELECT player_json FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            return None
        return Player.model_validate(json.loads(row["player_json"]))

    def list_sessions(self, *, active_only: bool = False) -> List[SessionDefinition]:
        query = "SELECT * FROM sessions"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY start_date DESC, start_time ASC"
        with self._connect() as conn:
            rows = conn.execute(query).fetchall()
        return [self._row_to_session(row) for row in rows]

    def list_content(self, *, active_only: bool = False) -> List[ContentItem]:
        query = "SELECT * FROM content"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY id ASC"
        with self._connect() as conn:
            rows = conn.execute(query).fetchall()
        return [self._row_to_content(row) for row in rows]

    def _row_to_session(self, row: sqlite3.Row) -> SessionDefinition:
        return SessionDefinition(
            id=row["id"],
            is_recurring=bool(row["is_recurring"]),
            day_of_week=row["day_of_week"],
            start_date=date.fromisoformat(row["start_date"]),
            start_time=row["start_time"],
            duration=row["duration"],
            player_id=row["player_id"],
            is_active=bool(row["is_active"]),
        )

    def _row_to_content(self, row: sqlite3.Row) -> ContentItem:
        return ContentItem(
            id=row["id"],
            title=row["title"],
            content_type=ContentType(row["content_type"]),
            file_path=row["file_path"],
            player_id=row["player_id"],
            is_active=bool(row["is_active"]),
            order=row["sort_order"],
        )


class _StoreSessions:
    def __init__(self, store: SignageStore):
        self._store = store

    def list_active(self) -> List[SessionDefinition]:
        return self._store.list_sessions(active_only=True)


class _StorePlayers:
    def __init__(self, store: SignageStore):
        self._store = store

    def list_all(self) -> List[Player]:
        return self._store.list_players()

    def get_by_id(self, player_id: int) -> Optional[Player]:
        return self._store.get_player(player_id)


class _StoreContent:
    def __init__(self, store: SignageStore):
        self._store = store

    def list_active(self) -> List[ContentItem]:
        return self._store.list_content(active_only=True)


__all__ = [
    "ContentRepository",
    "InMemoryContentRepository",
    "InMemoryPlayerRepository",
    "InMemorySessionRepository",
    "PlayerRepository",
    "SessionRepository",
    "SignageStore",
]
