"""Periodic poller that turns resolved sessions into start/end events."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from pysignage.errors import PlayerNotFoundError
from pysignage.models import SessionChangeEvent
from pysignage.monitor.broadcaster import CONTENT_UPDATE, SESSION_CHANGE, EventBroadcaster
from pysignage.persistence import PlayerRepository
from pysignage.schedule import SessionResolver


logger = logging.getLogger("uvicorn.error")

DEFAULT_TICK_SECONDS = 60.0


class SessionTransitionMonitor:
    """Track the active session id across ticks and publish transitions.

    ``last_observed_session_id`` is the only state. A tick whose resolved id
    matches it publishes nothing.
    """

    def __init__(
        self,
        resolver: SessionResolver,
        players: PlayerRepository,
        broadcaster: EventBroadcaster,
        *,
        interval_seconds: float = DEFAULT_TICK_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.resolver = resolver
        self.players = players
        self.broadcaster = broadcaster
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.last_observed_session_id: Optional[int] = None
        self._task: Optional[asyncio.Task[None]] = None

    def tick(self, now: Optional[datetime] = None) -> Optional[SessionChangeEvent]:
        moment = now or self.clock()
        session = self.resolver.find_active_session(moment)
        session_id = session.id if session is not None else None
        if session_id == self.last_observed_session_id:
            return None

        if session is not None:
            player = self.players.get_by_id(session.player_id)
            if player is None:
                raise PlayerNotFoundError(session.player_id)
            event = SessionChangeEvent(
                type="SESSION_START",
                session=session.with_player(player),
                timestamp=moment,
            )
        else:
            event = SessionChangeEvent(type="SESSION_END", session=None, timestamp=moment)

        self.last_observed_session_id = session_id
        logger.info(
            "Session transition %s (session %s) at %s",
            event.type,
            session_id,
            moment.isoformat(timespec="seconds"),
        )
        self.broadcaster.publish(SESSION_CHANGE, event)
        return event

    def notify_content_update(self) -> int:
        return self.broadcaster.publish(CONTENT_UPDATE)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="session-transition-monitor")

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        logger.info("Session monitor started (every %.0fs)", self.interval_seconds)
        while True:
            try:
                self.tick()
            except Exception:
                logger.exception("Session monitor tick failed")
            await asyncio.sleep(self.interval_seconds)
