"""Session-aware rotation scheduler for unattended player signage displays."""

__version__ = "0.1.0"
