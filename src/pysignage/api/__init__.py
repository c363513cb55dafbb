"""REST and WebSocket API for signage displays."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from datetime import datetime
from typing import Any, AsyncIterator

from fastapi import FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect

from pysignage.api.schemas import (
    ActiveSignageResponse,
    ContentUpdateResponse,
    EventFrame,
    RotationEntryResponse,
)
from pysignage.config import SignageSettings
from pysignage.errors import NotFoundError
from pysignage.models import SessionChangeEvent, SessionDefinition
from pysignage.monitor import EventBroadcaster, SessionTransitionMonitor
from pysignage.persistence import SignageStore
from pysignage.rotation import RotationEntry, serialize_entries
from pysignage.schedule import local_moment
from pysignage.signage import ActiveSignageData, SignageService


logger = logging.getLogger("uvicorn.error")


def _entries_to_response(entries: list[RotationEntry]) -> list[RotationEntryResponse]:
    return [RotationEntryResponse.model_validate(item) for item in serialize_entries(entries)]


def signage_to_response(data: ActiveSignageData) -> ActiveSignageResponse:
    return ActiveSignageResponse(
        current_session=data.current_session,
        previous_session=data.previous_session,
        next_session=data.next_session,
        current_player=data.current_player,
        previous_player=data.previous_player,
        next_player=data.next_player,
        content=_entries_to_response(data.content),
        fallback_content=_entries_to_response(data.fallback_content),
    )


def event_frame(channel: str, payload: Any) -> dict[str, Any]:
    data = payload.model_dump(mode="json") if isinstance(payload, SessionChangeEvent) else None
    frame = EventFrame.model_validate({"event": channel, "data": data, "sent_at": datetime.now()})
    return frame.model_dump(mode="json")


def create_app(
    store: SignageStore | None = None,
    settings: SignageSettings | None = None,
    *,
    start_monitor: bool = True,
) -> FastAPI:
    settings = settings or SignageSettings.from_env()
    store = store or SignageStore(settings.db_path)
    service = SignageService.from_store(store, settings)
    broadcaster = EventBroadcaster()
    monitor = SessionTransitionMonitor(
        service.resolver,
        store.players,
        broadcaster,
        interval_seconds=settings.monitor_interval_seconds,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if start_monitor:
            await monitor.start()
        try:
            yield
        finally:
            await monitor.stop()

    app = FastAPI(title="pysignage", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings
    app.state.signage_service = service
    app.state.broadcaster = broadcaster
    app.state.session_monitor = monitor

    def _resolve_or_404(moment: datetime) -> ActiveSignageData:
        try:
            return service.get_active_signage_data(moment)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/signage/active", response_model=ActiveSignageResponse)
    async def active_signage(at: datetime | None = Query(None)) -> ActiveSignageResponse:
        return signage_to_response(_resolve_or_404(local_moment(at)))

    @app.get("/signage/fallback", response_model=list[RotationEntryResponse])
    async def fallback_content() -> list[RotationEntryResponse]:
        return _entries_to_response(service.get_fallback_content())

    @app.post("/signage/content-update", response_model=ContentUpdateResponse)
    async def content_update() -> ContentUpdateResponse:
        return ContentUpdateResponse(delivered=monitor.notify_content_update())

    @app.get("/sessions/active", response_model=SessionDefinition | None)
    async def active_session(at: datetime | None = Query(None)):
        return service.resolver.find_active_session(local_moment(at))

    @app.get("/sessions/previous", response_model=SessionDefinition | None)
    async def previous_session(at: datetime | None = Query(None)):
        return service.resolver.find_previous_session(local_moment(at))

    @app.get("/sessions/next", response_model=SessionDefinition | None)
    async def next_session(at: datetime | None = Query(None)):
        return service.resolver.find_next_session(local_moment(at))

    @app.get("/sessions/nearby", response_model=list[SessionDefinition])
    async def nearby_sessions(
        at: datetime | None = Query(None),
        window: int = Query(30, ge=0, le=24 * 60),
    ):
        return service.resolver.find_sessions_near_time(local_moment(at), window)

    @app.websocket("/ws")
    async def events(websocket: WebSocket) -> None:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

        def enqueue(channel: str, payload: Any) -> None:
            # publish() may be called from a thread outside this loop
            loop.call_soon_threadsafe(queue.put_nowait, event_frame(channel, payload))

        async def pump() -> None:
            while True:
                await websocket.send_json(await queue.get())

        unsubscribe = broadcaster.subscribe(enqueue)
        sender: asyncio.Task[None] | None = None
        try:
            await websocket.accept()
            logger.info("Client connected: %s", websocket.client)
            sender = asyncio.create_task(pump())
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.info("Client disconnected: %s", websocket.client)
        finally:
            unsubscribe()
            if sender is not None:
                sender.cancel()
                with suppress(asyncio.CancelledError, Exception):
                    await sender

    return app
