from datetime import date, datetime

import anyio
import pytest

from pysignage.errors import PlayerNotFoundError
from pysignage.models import Player, SessionDefinition
from pysignage.monitor import CONTENT_UPDATE, SESSION_CHANGE, EventBroadcaster, SessionTransitionMonitor
from pysignage.persistence import InMemoryPlayerRepository, InMemorySessionRepository
from pysignage.schedule import SessionResolver


@pytest.fixture
def anyio_backend():
    return "asyncio"


def _session(session_id: int, player_id: int, start: str) -> SessionDefinition:
    return SessionDefinition(
        id=session_id,
        is_recurring=True,
        day_of_week=1,
        start_date=date(2024, 12, 2),
        start_time=start,
        duration=30,
        player_id=player_id,
    )


def _monitor(sessions):
    players = [
        Player(id=1, first_name="Ada", last_name="One"),
        Player(id=2, first_name="Bo", last_name="Two"),
    ]
    broadcaster = EventBroadcaster()
    received = []
    broadcaster.subscribe(lambda channel, payload: received.append((channel, payload)))
    monitor = SessionTransitionMonitor(
        SessionResolver(InMemorySessionRepository(sessions)),
        InMemoryPlayerRepository(players),
        broadcaster,
    )
    return monitor, received


def test_start_event_carries_session_with_player():
    monitor, received = _monitor([_session(1, 1, "18:00")])

    event = monitor.tick(datetime(2025, 1, 6, 18, 0))

    assert event.type == "SESSION_START"
    assert event.session.id == 1
    assert event.session.player.first_name == "Ada"
    assert event.timestamp == datetime(2025, 1, 6, 18, 0)
    assert received == [(SESSION_CHANGE, event)]
    assert monitor.last_observed_session_id == 1


def test_unchanged_session_emits_nothing():
    monitor, received = _monitor([_session(1, 1, "18:00")])
    monitor.tick(datetime(2025, 1, 6, 18, 0))

    assert monitor.tick(datetime(2025, 1, 6, 18, 1)) is None
    assert monitor.tick(datetime(2025, 1, 6, 18, 30)) is None
    assert len(received) == 1


def test_end_event_after_session_finishes():
    monitor, received = _monitor([_session(1, 1, "18:00")])
    monitor.tick(datetime(2025, 1, 6, 18, 0))

    event = monitor.tick(datetime(2025, 1, 6, 18, 31))

    assert event.type == "SESSION_END"
    assert event.session is None
    assert monitor.last_observed_session_id is None
    assert [payload.type for _, payload in received] == ["SESSION_START", "SESSION_END"]


def test_idle_ticks_emit_nothing():
    monitor, received = _monitor([])
    assert monitor.tick(datetime(2025, 1, 6, 18, 0)) is None
    assert monitor.tick(datetime(2025, 1, 6, 18, 1)) is None
    assert received == []


def test_back_to_back_sessions_emit_start_only():
    monitor, received = _monitor([_session(1, 1, "18:00"), _session(2, 2, "18:31")])
    monitor.tick(datetime(2025, 1, 6, 18, 30))

    event = monitor.tick(datetime(2025, 1, 6, 18, 31))

    assert event.type == "SESSION_START"
    assert event.session.id == 2
    assert [payload.type for _, payload in received] == ["SESSION_START", "SESSION_START"]


def test_missing_player_raises_and_retries_next_tick():
    monitor, received = _monitor([_session(1, 42, "18:00")])

    with pytest.raises(PlayerNotFoundError):
        monitor.tick(datetime(2025, 1, 6, 18, 0))

    assert monitor.last_observed_session_id is None
    assert received == []


def test_failing_subscriber_does_not_block_others():
    broadcaster = EventBroadcaster()
    received = []

    def broken(channel, payload):
        raise RuntimeError("socket closed")

    broadcaster.subscribe(broken)
    broadcaster.subscribe(lambda channel, payload: received.append(channel))

    assert broadcaster.publish(CONTENT_UPDATE) == 1
    assert received == [CONTENT_UPDATE]


def test_unsubscribe_stops_delivery():
    broadcaster = EventBroadcaster()
    received = []
    unsubscribe = broadcaster.subscribe(lambda channel, payload: received.append(channel))
    unsubscribe()

    assert broadcaster.publish(SESSION_CHANGE) == 0
    assert broadcaster.subscriber_count == 0
    assert received == []


def test_notify_content_update_publishes_without_payload():
    monitor, received = _monitor([])
    assert monitor.notify_content_update() == 1
    assert received == [(CONTENT_UPDATE, None)]


@pytest.mark.anyio
async def test_start_runs_first_tick_and_stop_cancels():
    monitor, received = _monitor([_session(1, 1, "18:00")])
    monitor.clock = lambda: datetime(2025, 1, 6, 18, 5)
    monitor.interval_seconds = 3600

    await monitor.start()
    assert monitor.running
    for _ in range(50):
        if received:
            break
        await anyio.sleep(0.01)
    await monitor.stop()

    assert not monitor.running
    assert [payload.type for _, payload in received] == ["SESSION_START"]
