"""Fire-and-forget fan-out of signage events to connected subscribers."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict


logger = logging.getLogger("uvicorn.error")

SESSION_CHANGE = "session-change"
CONTENT_UPDATE = "content-update"

Subscriber = Callable[[str, Any], None]


class EventBroadcaster:
    """Deliver events to every subscriber; nothing is queued or retried."""

    def __init__(self) -> None:
        self._subscribers: Dict[int, Subscriber] = {}
        self._next_token = 0
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._subscribers[token] = callback

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, channel: str, payload: Any = None) -> int:
        """Send ``payload`` on ``channel``; returns how many subscribers took it."""

        with self._lock:
            subscribers = list(self._subscribers.values())
        delivered = 0
        for callback in subscribers:
            try:
                callback(channel, payload)
            except Exception:  # a broken subscriber only misses this event
                logger.exception("Subscriber failed to receive %s event", channel)
                continue
            delivered += 1
        logger.info("Emitted %s to %d subscriber(s)", channel, delivered)
        return delivered
