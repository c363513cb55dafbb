"""Non-repeating random sampler for filler players."""

from __future__ import annotations

import random
import threading
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence, Set

from pysignage.models import Player


DEFAULT_RESET_INTERVAL = timedelta(hours=1)


class RandomPlayerSelector:
    """Pick players uniformly without repeats until the pool or the hour runs out.

    ``used_ids`` is cleared once every pool member has been picked or when more
    than ``reset_interval`` has passed since the last reset.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        reset_interval: timedelta = DEFAULT_RESET_INTERVAL,
        now: Optional[datetime] = None,
    ):
        self._rng = rng or random.Random()
        self.reset_interval = reset_interval
        self.used_ids: Set[int] = set()
        self.last_reset_at: datetime = now or datetime.now()
        self._lock = threading.Lock()

    def reset(self, now: Optional[datetime] = None) -> None:
        with self._lock:
            self._reset(now or datetime.now())

    def _reset(self, now: datetime) -> None:
        self.used_ids.clear()
        self.last_reset_at = now

    def select(
        self,
        pool: Sequence[Player],
        exclude: Iterable[Optional[Player]] = (),
        *,
        now: Optional[datetime] = None,
    ) -> Optional[Player]:
        moment = now or datetime.now()
        with self._lock:
            if len(self.used_ids) >= len(pool) or moment - self.last_reset_at > self.reset_interval:
                self._reset(moment)

            exclude_ids = {player.id for player in exclude if player is not None}
            available = [
                player
                for player in pool
                if player.id not in exclude_ids and player.id not in self.used_ids
            ]
            if available:
                return self._mark(self._rng.choice(available))

            unused = [player for player in pool if player.id not in self.used_ids]
            if unused:
                return self._mark(self._rng.choice(unused))

            # last resort: forget history and draw from everything
            self.used_ids.clear()
            if not pool:
                return None
            return self._rng.choice(list(pool))

    def _mark(self, player: Player) -> Player:
        self.used_ids.add(player.id)
        return player

