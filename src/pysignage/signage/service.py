"""Primary read API for the display: resolved sessions plus rotation playlists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from pysignage.config import SignageSettings
from pysignage.errors import PlayerNotFoundError
from pysignage.models import Player, SessionDefinition
from pysignage.persistence import ContentRepository, PlayerRepository, SessionRepository, SignageStore
from pysignage.rotation import RandomPlayerSelector, RotationEntry, build_fallback_content, build_rotation
from pysignage.rotation.playlist import MIN_ROTATION_PLAYERS
from pysignage.schedule import DEFAULT_NEARBY_WINDOW_MINUTES, SessionResolver, local_moment


logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class ActiveSignageData:
    current_session: Optional[SessionDefinition] = None
    previous_session: Optional[SessionDefinition] = None
    next_session: Optional[SessionDefinition] = None
    current_player: Optional[Player] = None
    previous_player: Optional[Player] = None
    next_player: Optional[Player] = None
    content: List[RotationEntry] = field(default_factory=list)
    fallback_content: List[RotationEntry] = field(default_factory=list)


class SignageService:
    """Combines the session resolver, filler selector and playlist builder.

    The selector is the only state carried between calls; repositories are
    queried fresh on every request.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        players: PlayerRepository,
        content: ContentRepository,
        *,
        selector: Optional[RandomPlayerSelector] = None,
        nearby_window_minutes: int = DEFAULT_NEARBY_WINDOW_MINUTES,
        min_rotation_players: int = MIN_ROTATION_PLAYERS,
    ):
        self.resolver = SessionResolver(sessions)
        self.players = players
        self.content = content
        self.selector = selector or RandomPlayerSelector()
        self.nearby_window_minutes = nearby_window_minutes
        self.min_rotation_players = min_rotation_players

    @classmethod
    def from_store(cls, store: SignageStore, settings: Optional[SignageSettings] = None) -> "SignageService":
        settings = settings or SignageSettings()
        return cls(
            store.sessions,
            store.players,
            store.content,
            selector=RandomPlayerSelector(reset_interval=timedelta(minutes=settings.random_reset_minutes)),
            nearby_window_minutes=settings.nearby_window_minutes,
            min_rotation_players=settings.min_rotation_players,
        )

    def player_for(self, session: Optional[SessionDefinition]) -> Optional[Player]:
        if session is None:
            return None
        player = self.players.get_by_id(session.player_id)
        if player is None:
            raise PlayerNotFoundError(session.player_id)
        return player

    def get_active_signage_data(self, now: Optional[datetime] = None) -> ActiveSignageData:
        moment = local_moment(now)
        state = self.resolver.resolve(moment, self.nearby_window_minutes)

        current_player = self.player_for(state.current)
        previous_player = self.player_for(state.previous)
        next_player = self.player_for(state.next)

        active_players = [player for player in self.players.list_all() if player.is_active]
        media = list(self.content.list_active())

        content = build_rotation(
            current=current_player,
            next_up=next_player,
            previous=previous_player,
            active_players=active_players,
            media=media,
            selector=self.selector,
            now=moment,
            min_players=self.min_rotation_players,
        )
        logger.info(
            "Signage resolved at %s: current=%s previous=%s next=%s, %d rotation entries",
            moment.strftime("%Y-%m-%d %H:%M"),
            state.current.id if state.current else None,
            state.previous.id if state.previous else None,
            state.next.id if state.next else None,
            len(content),
        )

        return ActiveSignageData(
            current_session=_attach(state.current, current_player),
            previous_session=_attach(state.previous, previous_player),
            next_session=_attach(state.next, next_player),
            current_player=current_player,
            previous_player=previous_player,
            next_player=next_player,
            content=content,
            fallback_content=build_fallback_content(media, active_players),
        )

    def get_fallback_content(self) -> List[RotationEntry]:
        media = list(self.content.list_active())
        return build_fallback_content(media, self.players.list_all())


def _attach(session: Optional[SessionDefinition], player: Optional[Player]) -> Optional[SessionDefinition]:
    if session is None:
        return None
    return session.with_player(player)
