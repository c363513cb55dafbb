"""Canonical models shared by the resolver, rotation builder and API."""

from .content import ContentItem, ContentType
from .player import Player
from .session import SessionChangeEvent, SessionChangeType, SessionDefinition

__all__ = [
    "ContentItem",
    "ContentType",
    "Player",
    "SessionChangeEvent",
    "SessionChangeType",
    "SessionDefinition",
]
