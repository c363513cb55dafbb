"""Signage read API combining session resolution and rotation building."""

from .service import ActiveSignageData, SignageService

__all__ = ["ActiveSignageData", "SignageService"]
