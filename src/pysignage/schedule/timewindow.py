"""Pure helpers turning ``HH:MM`` start times and durations into windows."""

from __future__ import annotations

from datetime import date, datetime
from typing import Tuple

MINUTES_PER_DAY = 24 * 60


def parse_time(value: str) -> Tuple[int, int]:
    """Split ``HH:MM`` into (hour, minute), raising ValueError if malformed."""

    parts = value.strip().split(":")
    if len(parts) != 2 or not all(len(part) == 2 and part.isdigit() for part in parts):
        raise ValueError(f"Expected HH:MM time, got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        raise ValueError(f"Time out of range: {value!r}")
    return hour, minute


def format_time(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"


def day_of_week(moment: date) -> int:
    """Weekday index with Sunday as 0."""

    return moment.isoweekday() % 7


def end_time(start_time: str, duration_minutes: int) -> str:
    """Add ``duration_minutes`` to ``start_time``, wrapping past midnight."""

    hour, minute = parse_time(start_time)
    end_minutes = (hour * 60 + minute + duration_minutes) % MINUTES_PER_DAY
    return f"{end_minutes // 60:02d}:{end_minutes % 60:02d}"


def is_within(current_time: str, start: str, end: str) -> bool:
    """Inclusive ``start <= current <= end`` on zero-padded ``HH:MM`` strings.

    A window that wraps past midnight (``end < start``) never matches.
    """

    return start <= current_time <= end


def same_calendar_day(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def combine(day: date, time_str: str) -> datetime:
    """Date ``day`` at ``time_str`` with seconds zeroed."""

    hour, minute = parse_time(time_str)
    return datetime(day.year, day.month, day.day, hour, minute, 0)


def local_moment(at: datetime | None = None) -> datetime:
    """Naive local time for ``at`` (now when omitted); aware values are converted first."""

    if at is None:
        return datetime.now()
    if at.tzinfo is not None:
        return at.astimezone().replace(tzinfo=None)
    return at
