"""Session definitions and the transition events derived from them."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel
from pydantic.config import ConfigDict

from .player import Player


class SessionDefinition(BaseModel):
    """A scheduled window during which one player is featured.

    ``day_of_week`` uses 0=Sunday..6=Saturday. The model is deliberately
    lenient (a recurring session may arrive without a weekday); the resolver
    excludes such records instead of failing the whole schedule.
    """

    id: int
    is_recurring: bool = False
    day_of_week: int | None = None
    start_date: date
    start_time: str
    duration: int
    player_id: int
    is_active: bool = True
    player: Player | None = None

    model_config = ConfigDict(frozen=True)

    def with_player(self, player: Player | None) -> "SessionDefinition":
        return self.model_copy(update={"player": player})


SessionChangeType = Literal["SESSION_START", "SESSION_END"]


class SessionChangeEvent(BaseModel):
    type: SessionChangeType
    session: SessionDefinition | None
    timestamp: datetime

    model_config = ConfigDict(frozen=True)
