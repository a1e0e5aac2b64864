"""
Schedule service: the sparse day -> hour -> therapist -> session index.

The schedule is the ground truth of what is on the books. It is a derived
index over the session collection and can always be rebuilt from sessions
alone, which is the recovery contract for persistence.

Every mutator is copy-on-write. Only the day dict and the hour dicts along the
modified path are copied; everything else is shared with the input. Inputs are
never written to, so read-only mappings (e.g. MappingProxyType trees shared
with a UI render) are accepted.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from core.config import MAX_SESSIONS_PER_DAY
from core.constants import SESSION_DURATIONS
from models import GameTime, Session, SessionStatus
from shared_types.availability import Schedule, ScheduleView

logger = logging.getLogger(__name__)


def validate_duration(duration_minutes: int) -> int:
    """
    Validate a session duration.

    Raises:
        ValueError: If the duration is not one of the supported grid durations
    """
    if duration_minutes not in SESSION_DURATIONS:
        raise ValueError(
            f"Invalid session duration {duration_minutes}. Must be one of {SESSION_DURATIONS}"
        )
    return duration_minutes


class ScheduleService:
    """
    Service class for schedule index operations.

    All methods are pure: they read their arguments and return new values.
    """

    @staticmethod
    def slots_needed(duration_minutes: int) -> int:
        """Number of whole hour slots a session of this duration blocks."""
        return math.ceil(validate_duration(duration_minutes) / 60)

    @staticmethod
    def covered_hours(hour: int, duration_minutes: int) -> List[int]:
        """Hours a session starting at `hour` covers on the grid."""
        return [hour + i for i in range(ScheduleService.slots_needed(duration_minutes))]

    @staticmethod
    def occupied_slots(session: Session) -> List[Tuple[int, int]]:
        """
        Get the (day, hour) slots a session occupies.

        Durations are approximated on a fixed hour grid: 50 minutes blocks one
        slot, 80 minutes two, 180 minutes three.
        """
        return [
            (session.scheduled_day, hour)
            for hour in ScheduleService.covered_hours(session.scheduled_hour, session.duration_minutes)
        ]

    @staticmethod
    def add_to_schedule(schedule: ScheduleView, session: Session) -> Schedule:
        """
        Add a session to the schedule.

        Args:
            schedule: Current schedule (never modified)
            session: Session to index under each of its occupied slots

        Returns:
            New schedule with schedule[day][hour][therapist_id] = session.id
        """
        hours = ScheduleService.covered_hours(session.scheduled_hour, session.duration_minutes)
        new_schedule: Schedule = dict(schedule)  # type: ignore[arg-type]

        existing_day = schedule.get(session.scheduled_day)
        day_schedule = dict(existing_day) if existing_day else {}
        new_schedule[session.scheduled_day] = day_schedule  # type: ignore[assignment]

        for hour in hours:
            existing_hour = day_schedule.get(hour)
            hour_schedule = dict(existing_hour) if existing_hour else {}
            hour_schedule[session.therapist_id] = session.id
            day_schedule[hour] = hour_schedule

        return new_schedule

    @staticmethod
    def remove_from_schedule(schedule: ScheduleView, session: Session) -> Schedule:
        """
        Remove a session from the schedule.

        Only entries that reference this session for its therapist are
        removed; entries for other therapists or other sessions are left
        untouched. Day and hour keys are kept (an empty hour means free).

        Args:
            schedule: Current schedule (never modified)
            session: Session to remove

        Returns:
            New schedule without the session's entries
        """
        hours = ScheduleService.covered_hours(session.scheduled_hour, session.duration_minutes)
        new_schedule: Schedule = dict(schedule)  # type: ignore[arg-type]

        existing_day = schedule.get(session.scheduled_day)
        if not existing_day:
            return new_schedule

        day_schedule = dict(existing_day)
        new_schedule[session.scheduled_day] = day_schedule  # type: ignore[assignment]

        for hour in hours:
            existing_hour = day_schedule.get(hour)
            if not existing_hour:
                continue
            if existing_hour.get(session.therapist_id) != session.id:
                continue

            hour_schedule = dict(existing_hour)
            del hour_schedule[session.therapist_id]
            day_schedule[hour] = hour_schedule

        return new_schedule

    @staticmethod
    def reschedule_in_schedule(
        schedule: ScheduleView,
        old_session: Session,
        new_session: Session
    ) -> Schedule:
        """Move a session's index entries from its old placement to its new one."""
        return ScheduleService.add_to_schedule(
            ScheduleService.remove_from_schedule(schedule, old_session),
            new_session
        )

    @staticmethod
    def build_schedule_from_sessions(sessions: Iterable[Session]) -> Schedule:
        """
        Rebuild a schedule from the session list.

        Every scheduled, in-progress or completed session has its occupied
        slots represented. Cancelled and conflict sessions occupy nothing.
        """
        schedule: Schedule = {}
        for session in sessions:
            if session.occupies_schedule:
                schedule = ScheduleService.add_to_schedule(schedule, session)
        return schedule

    @staticmethod
    def get_sessions_for_day(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        day: int
    ) -> List[Session]:
        """
        Get all sessions booked on a day.

        Resolution goes through the schedule's id references, so a session
        whose raw fields claim the day but which is not on the books is not
        returned.
        """
        session_ids = set()
        day_schedule = schedule.get(day)
        if day_schedule:
            for hour_slots in day_schedule.values():
                for session_id in hour_slots.values():
                    if session_id:
                        session_ids.add(session_id)

        return [s for s in sessions if s.id in session_ids]

    @staticmethod
    def get_therapist_sessions_for_day(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist_id: str,
        day: int
    ) -> List[Session]:
        """Get the sessions booked for one therapist on a day."""
        session_ids = set()
        day_schedule = schedule.get(day)
        if day_schedule:
            for hour_slots in day_schedule.values():
                session_id = hour_slots.get(therapist_id)
                if session_id:
                    session_ids.add(session_id)

        return [s for s in sessions if s.id in session_ids]

    @staticmethod
    def count_sessions_for_day(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist_id: str,
        day: int
    ) -> int:
        return len(ScheduleService.get_therapist_sessions_for_day(schedule, sessions, therapist_id, day))

    @staticmethod
    def can_schedule_more_today(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist_id: str,
        day: int,
        max_sessions: int = MAX_SESSIONS_PER_DAY
    ) -> bool:
        """Check the therapist is still under the daily session limit."""
        return ScheduleService.count_sessions_for_day(schedule, sessions, therapist_id, day) < max_sessions

    @staticmethod
    def get_next_session(
        sessions: Sequence[Session],
        therapist_id: str,
        current_time: GameTime
    ) -> Optional[Session]:
        """
        Get the therapist's next scheduled session strictly after the current hour.
        """
        upcoming = [
            s for s in sessions
            if s.therapist_id == therapist_id
            and s.status == SessionStatus.SCHEDULED
            and (
                s.scheduled_day > current_time.day
                or (s.scheduled_day == current_time.day and s.scheduled_hour > current_time.hour)
            )
        ]
        if not upcoming:
            return None
        return min(upcoming, key=lambda s: (s.scheduled_day, s.scheduled_hour))
