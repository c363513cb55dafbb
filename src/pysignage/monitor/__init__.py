"""Session transition detection and event fan-out."""

from .broadcaster import CONTENT_UPDATE, SESSION_CHANGE, EventBroadcaster
from .transitions import DEFAULT_TICK_SECONDS, SessionTransitionMonitor

__all__ = [
    "CONTENT_UPDATE",
    "DEFAULT_TICK_SECONDS",
    "SESSION_CHANGE",
    "EventBroadcaster",
    "SessionTransitionMonitor",
]
