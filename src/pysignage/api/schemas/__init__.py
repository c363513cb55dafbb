"""Pydantic models for API I/O."""

from .signage import ActiveSignageResponse, ContentUpdateResponse, EventFrame, RotationEntryResponse

__all__ = [
    "ActiveSignageResponse",
    "ContentUpdateResponse",
    "EventFrame",
    "RotationEntryResponse",
]
