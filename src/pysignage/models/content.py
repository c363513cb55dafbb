"""Media content rows managed by the admin collaborator."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic.config import ConfigDict


class ContentType(str, Enum):
    PLAYER_STATS = "PLAYER_STATS"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class ContentItem(BaseModel):
    """Persisted media item. Duration is derived from ``content_type``."""

    id: int
    title: str
    content_type: ContentType = ContentType.IMAGE
    file_path: str | None = None
    player_id: int | None = None
    is_active: bool = True
    order: int | None = None

    model_config = ConfigDict(frozen=True)
