"""Resolve current, previous and upcoming sessions for a reference instant."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from pysignage.errors import ConfigurationInconsistency
from pysignage.models import SessionDefinition
from pysignage.persistence import SessionRepository
from pysignage.schedule.timewindow import (
    combine,
    day_of_week,
    end_time,
    format_time,
    is_within,
    parse_time,
    same_calendar_day,
)


logger = logging.getLogger(__name__)

DEFAULT_NEARBY_WINDOW_MINUTES = 30


@dataclass(frozen=True)
class ResolvedSessionState:
    current: Optional[SessionDefinition] = None
    previous: Optional[SessionDefinition] = None
    next: Optional[SessionDefinition] = None


def check_session(session: SessionDefinition) -> None:
    """Raise ConfigurationInconsistency if ``session`` cannot be scheduled."""

    if session.is_recurring:
        if session.day_of_week is None:
            raise ConfigurationInconsistency(session.id, "recurring session has no day_of_week")
        if not 0 <= session.day_of_week <= 6:
            raise ConfigurationInconsistency(
                session.id, f"day_of_week {session.day_of_week} outside 0-6"
            )
    try:
        parse_time(session.start_time)
    except ValueError as exc:
        raise ConfigurationInconsistency(session.id, str(exc)) from exc
    if session.duration <= 0:
        raise ConfigurationInconsistency(session.id, f"duration {session.duration} is not positive")


def has_begun(session: SessionDefinition, now: datetime) -> bool:
    """Recurring sessions only fire on or after their anchor date."""

    return session.start_date <= now.date()


def session_bounds(session: SessionDefinition, reference: datetime) -> Tuple[datetime, datetime]:
    """Concrete (start, end) for ``session``.

    Recurring sessions are anchored on the reference date, one-time sessions
    on their own date.
    """

    day = reference.date() if session.is_recurring else session.start_date
    start = combine(day, session.start_time)
    return start, start + timedelta(minutes=session.duration)


class SessionResolver:
    """Stateless view over the active session set.

    Every public call fetches a fresh session list from the repository.
    """

    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def load_sessions(self) -> List[SessionDefinition]:
        usable: List[SessionDefinition] = []
        for session in self._sessions.list_active():
            if not session.is_active:
                continue
            try:
                check_session(session)
            except ConfigurationInconsistency as exc:
                logger.warning("Skipping session %s: %s", session.id, exc.reason)
                continue
            usable.append(session)
        return usable

    def find_active_session(self, now: datetime) -> Optional[SessionDefinition]:
        return self._active_from(self.load_sessions(), now)

    def find_previous_session(self, now: datetime) -> Optional[SessionDefinition]:
        return self._previous_from(self.load_sessions(), now)

    def find_next_session(self, now: datetime) -> Optional[SessionDefinition]:
        return self._next_from(self.load_sessions(), now)

    def find_sessions_near_time(
        self,
        now: datetime,
        window_minutes: int = DEFAULT_NEARBY_WINDOW_MINUTES,
    ) -> List[SessionDefinition]:
        return self._near_from(self.load_sessions(), now, window_minutes)

    def resolve(
        self,
        now: datetime,
        window_minutes: int = DEFAULT_NEARBY_WINDOW_MINUTES,
    ) -> ResolvedSessionState:
        """Current session plus previous/next picked from the nearby window."""

        sessions = self.load_sessions()
        current = self._active_from(sessions, now)
        previous: Optional[SessionDefinition] = None
        previous_end: Optional[datetime] = None
        upcoming: Optional[SessionDefinition] = None
        upcoming_start: Optional[datetime] = None

        for session in self._near_from(sessions, now, window_minutes):
            if current is not None and session.id == current.id:
                continue
            start, end = session_bounds(session, now)
            if end < now:
                if previous_end is None or end > previous_end:
                    previous, previous_end = session, end
            elif start > now:
                if upcoming_start is None or start < upcoming_start:
                    upcoming, upcoming_start = session, start

        return ResolvedSessionState(current=current, previous=previous, next=upcoming)

    def _active_from(
        self,
        sessions: Sequence[SessionDefinition],
        now: datetime,
    ) -> Optional[SessionDefinition]:
        today = day_of_week(now)
        current_time = format_time(now)
        recurring_match: Optional[SessionDefinition] = None

        for session in sessions:
            finish = end_time(session.start_time, session.duration)
            if session.is_recurring:
                if (
                    has_begun(session, now)
                    and session.day_of_week == today
                    and is_within(current_time, session.start_time, finish)
                ):
                    # last recurring match in iteration order wins
                    recurring_match = session
            elif same_calendar_day(now, session.start_date) and is_within(
                current_time, session.start_time, finish
            ):
                return session

        return recurring_match

    def _previous_from(
        self,
        sessions: Sequence[SessionDefinition],
        now: datetime,
    ) -> Optional[SessionDefinition]:
        today = day_of_week(now)
        current_time = format_time(now)
        best: Optional[SessionDefinition] = None
        latest_end: Optional[datetime] = None

        for session in sessions:
            finish = end_time(session.start_time, session.duration)
            if session.is_recurring:
                # only sessions that ended earlier today count
                if not has_begun(session, now) or session.day_of_week != today:
                    continue
                if not finish < current_time:
                    continue
                ended_at = combine(now.date(), finish)
            else:
                ended_at = combine(session.start_date, finish)
                if not ended_at < now:
                    continue
            if latest_end is None or ended_at > latest_end:
                best, latest_end = session, ended_at

        return best

    def _next_from(
        self,
        sessions: Sequence[SessionDefinition],
        now: datetime,
    ) -> Optional[SessionDefinition]:
        today = day_of_week(now)
        current_time = format_time(now)
        best: Optional[SessionDefinition] = None
        earliest_start: Optional[datetime] = None

        for session in sessions:
            if session.is_recurring:
                if not has_begun(session, now):
                    continue
                starts_at = _next_recurring_start(session, today, current_time, now)
                if starts_at is None:
                    continue
            else:
                starts_at = combine(session.start_date, session.start_time)
                if not starts_at > now:
                    continue
            if earliest_start is None or starts_at < earliest_start:
                best, earliest_start = session, starts_at

        return best

    def _near_from(
        self,
        sessions: Sequence[SessionDefinition],
        now: datetime,
        window_minutes: int,
    ) -> List[SessionDefinition]:
        today = day_of_week(now)
        window = timedelta(minutes=window_minutes)
        window_start, window_end = now - window, now + window

        nearby: List[SessionDefinition] = []
        for session in sessions:
            if session.is_recurring and (session.day_of_week != today or not has_begun(session, now)):
                continue
            start, end = session_bounds(session, now)
            if start <= window_end and window_start <= end:
                nearby.append(session)
        return nearby


def _next_recurring_start(
    session: SessionDefinition,
    today: int,
    current_time: str,
    now: datetime,
) -> Optional[datetime]:
    """Later today, or a later weekday of the current week; no wrap to next week."""

    weekday = session.day_of_week
    if weekday is None:
        return None
    if weekday == today and session.start_time > current_time:
        return combine(now.date(), session.start_time)
    if weekday > today:
        return combine(now.date() + timedelta(days=weekday - today), session.start_time)
    return None
