"""Configuration helpers for the scheduler and server."""

from .settings import SignageSettings

__all__ = ["SignageSettings"]
