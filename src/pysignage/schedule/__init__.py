"""Session time-window matching and resolution."""

from .resolver import (
    DEFAULT_NEARBY_WINDOW_MINUTES,
    ResolvedSessionState,
    SessionResolver,
    check_session,
    session_bounds,
)
from .timewindow import combine, day_of_week, end_time, format_time, is_within, local_moment, same_calendar_day

__all__ = [
    "DEFAULT_NEARBY_WINDOW_MINUTES",
    "ResolvedSessionState",
    "SessionResolver",
    "check_session",
    "session_bounds",
    "combine",
    "day_of_week",
    "end_time",
    "format_time",
    "is_within",
    "local_moment",
    "same_calendar_day",
]
