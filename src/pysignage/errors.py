"""Error taxonomy shared by the scheduler, store and API layers."""

from __future__ import annotations


class SignageError(Exception):
    """Base class for scheduler errors."""


class NotFoundError(SignageError, LookupError):
    """A referenced entity is missing from its repository."""

    def __init__(self, kind: str, entity_id: int):
        super().__init__(f"{kind} with ID {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class PlayerNotFoundError(NotFoundError):
    def __init__(self, player_id: int):
        super().__init__("Player", player_id)


class ConfigurationInconsistency(SignageError, ValueError):
    """A session definition cannot be scheduled as stored.

    The resolver never lets this escape; offending sessions are logged and
    excluded from resolution.
    """

    def __init__(self, session_id: int, reason: str):
        super().__init__(f"Session {session_id} is misconfigured: {reason}")
        self.session_id = session_id
        self.reason = reason


class SnapshotError(SignageError, ValueError):
    """Raised when a snapshot file cannot be loaded."""
