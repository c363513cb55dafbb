from __future__ import annotations

from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field

from pysignage.models import ContentType, Player, SessionDefinition


class RotationEntryResponse(BaseModel):
    id: int
    title: str
    content_type: ContentType
    duration: int
    file_path: str | None = None
    player_id: int | None = None
    is_active: bool = True
    order: int
    player: Player | None = None


class ActiveSignageResponse(BaseModel):
    current_session: SessionDefinition | None = None
    previous_session: SessionDefinition | None = None
    next_session: SessionDefinition | None = None
    current_player: Player | None = None
    previous_player: Player | None = None
    next_player: Player | None = None
    content: List[RotationEntryResponse] = Field(default_factory=list)
    fallback_content: List[RotationEntryResponse] = Field(default_factory=list)


class EventFrame(BaseModel):
    event: Literal["session-change", "content-update"]
    data: dict | None = None
    sent_at: datetime


class ContentUpdateResponse(BaseModel):
    delivered: int
