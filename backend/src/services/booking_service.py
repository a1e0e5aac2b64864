"""
Booking service: validate-then-commit operations over a schedule snapshot.

Every operation re-checks the full constraint set against the schedule and
session list it is handed, then returns the new values for the caller to swap
in. Inputs are never modified. Callers serialize booking operations; there is
no locking here.
"""

import logging
from typing import Any, List, Optional, Sequence

from core.sentinels import MISSING, resolve
from models import Building, Client, GameTime, Session, SessionStatus, Therapist
from services.availability_service import AvailabilityService
from services.booking_constraint_service import BookingConstraintService
from services.schedule_service import ScheduleService, validate_duration
from services.session_service import SessionService
from shared_types.availability import BookingCheck, ScheduleView
from shared_types.booking import BookingResult, CreateSessionParams
from utils.time_utils import format_hour, validate_not_in_past

logger = logging.getLogger(__name__)


def _find_session(sessions: Sequence[Session], session_id: str) -> Optional[Session]:
    return next((s for s in sessions if s.id == session_id), None)


def _replace_session(sessions: Sequence[Session], updated: Session) -> List[Session]:
    return [updated if s.id == updated.id else s for s in sessions]


class BookingService:
    """Service class for booking, cancelling and rescheduling sessions."""

    @staticmethod
    def validate_booking(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist: Therapist,
        client: Client,
        building: Building,
        telehealth_unlocked: bool,
        current_time: GameTime,
        day: int,
        hour: int,
        duration_minutes: int,
        is_virtual: bool,
        exclude_session_id: Optional[str] = None
    ) -> BookingCheck:
        """
        Check a proposed booking against every constraint.

        Checks run in order and the first failure is reported: not in the
        past, therapist slot availability (business hours, work hours,
        existing bookings), client overlap, daily session limit, then room
        capacity or telehealth eligibility.

        Args:
            exclude_session_id: Session being moved. Its client time and room
                are ignored; the caller must pass a schedule without it.

        Returns:
            BookingCheck with the first failing reason
        """
        time_check = validate_not_in_past(current_time, day, hour)
        if not time_check.valid:
            return BookingCheck.rejected(time_check.reason or "Cannot schedule in the past")

        if not AvailabilityService.is_slot_available(
            schedule, therapist.id, day, hour, duration_minutes, therapist
        ):
            return BookingCheck.rejected(
                f"{therapist.display_name or therapist.id} is not available on day {day} at {format_hour(hour)}"
            )

        other_sessions = [s for s in sessions if s.id != exclude_session_id]
        if AvailabilityService.client_has_conflicting_session(
            other_sessions, client.id, day, hour, duration_minutes
        ):
            return BookingCheck.rejected("Client already has a session at this time")

        if not ScheduleService.can_schedule_more_today(schedule, other_sessions, therapist.id, day):
            return BookingCheck.rejected("Therapist has reached the daily session limit")

        return BookingConstraintService.can_book_session_type(
            building, sessions, telehealth_unlocked, is_virtual,
            day, hour, duration_minutes, exclude_session_id
        )

    @staticmethod
    def book_session(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist: Therapist,
        client: Client,
        building: Building,
        telehealth_unlocked: bool,
        current_time: GameTime,
        params: CreateSessionParams,
        session_id: Optional[str] = None
    ) -> BookingResult:
        """
        Validate and book a new session.

        Returns:
            BookingResult with the new session, the new session list and the
            new schedule, or the rejection reason

        Raises:
            ValueError: If params.duration is not a supported duration
        """
        validate_duration(params.duration)

        if params.therapist_id != therapist.id or params.client_id != client.id:
            return BookingResult.failed("Booking does not match the given therapist and client")

        is_virtual = client.prefers_virtual if params.is_virtual is None else params.is_virtual

        check = BookingService.validate_booking(
            schedule, sessions, therapist, client, building, telehealth_unlocked,
            current_time, params.day, params.hour, params.duration, is_virtual
        )
        if not check.can_book:
            logger.debug(
                f"Booking rejected for client {client.id} with therapist {therapist.id} "
                f"on day {params.day} hour {params.hour}: {check.reason}"
            )
            return BookingResult.failed(check.reason or "Booking is not allowed")

        session = SessionService.create_session(params, therapist, client, session_id)
        new_sessions = list(sessions) + [session]
        new_schedule = ScheduleService.add_to_schedule(schedule, session)

        logger.info(
            f"Booked session {session.id}: client {client.id} with therapist {therapist.id} "
            f"on day {session.scheduled_day} at {SessionService.get_session_time_range(session)}"
            f"{' (telehealth)' if session.is_virtual else ''}"
        )
        return BookingResult(success=True, session=session, sessions=new_sessions, schedule=new_schedule)

    @staticmethod
    def cancel_session(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        session_id: str,
        current_time: GameTime
    ) -> BookingResult:
        """
        Cancel a scheduled session that has not started yet.

        The cancelled copy stays in the session list as history and its
        schedule entries are released.
        """
        session = _find_session(sessions, session_id)
        if session is None:
            return BookingResult.failed("Session not found")

        if session.status != SessionStatus.SCHEDULED:
            return BookingResult.failed(f"Cannot cancel a session that is {session.status.value}")

        time_check = validate_not_in_past(current_time, session.scheduled_day, session.scheduled_hour)
        if not time_check.valid:
            return BookingResult.failed("Cannot cancel a session that has already started")

        cancelled = session.model_copy(update={"status": SessionStatus.CANCELLED})
        new_schedule = ScheduleService.remove_from_schedule(schedule, session)

        logger.info(f"Cancelled session {session.id} on day {session.scheduled_day} hour {session.scheduled_hour}")
        return BookingResult(
            success=True,
            session=cancelled,
            sessions=_replace_session(sessions, cancelled),
            schedule=new_schedule,
        )

    @staticmethod
    def reschedule_session(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist: Therapist,
        client: Client,
        building: Building,
        telehealth_unlocked: bool,
        current_time: GameTime,
        session_id: str,
        day: Any = MISSING,
        hour: Any = MISSING,
        duration_minutes: Any = MISSING,
        is_virtual: Any = MISSING
    ) -> BookingResult:
        """
        Move a scheduled session and/or change its duration or session type.

        Fields left as MISSING keep their current value. The moved session is
        taken off the books before the new placement is validated, so it never
        conflicts with itself. Payment and energy cost follow a duration
        change; everything else about the session is kept.

        Args:
            therapist: The session's therapist
            client: The session's client
            session_id: Session to reschedule

        Returns:
            BookingResult with the updated session, or the rejection reason
        """
        session = _find_session(sessions, session_id)
        if session is None:
            return BookingResult.failed("Session not found")

        if session.status != SessionStatus.SCHEDULED:
            return BookingResult.failed(f"Cannot reschedule a session that is {session.status.value}")

        if session.therapist_id != therapist.id or session.client_id != client.id:
            return BookingResult.failed("Session does not match the given therapist and client")

        if not validate_not_in_past(current_time, session.scheduled_day, session.scheduled_hour).valid:
            return BookingResult.failed("Cannot reschedule a session that has already started")

        new_day = resolve(day, session.scheduled_day)
        new_hour = resolve(hour, session.scheduled_hour)
        new_duration = validate_duration(resolve(duration_minutes, session.duration_minutes))
        new_is_virtual = resolve(is_virtual, session.is_virtual)

        schedule_without = ScheduleService.remove_from_schedule(schedule, session)
        check = BookingService.validate_booking(
            schedule_without, sessions, therapist, client, building, telehealth_unlocked,
            current_time, new_day, new_hour, new_duration, new_is_virtual,
            exclude_session_id=session.id
        )
        if not check.can_book:
            logger.debug(f"Reschedule rejected for session {session.id}: {check.reason}")
            return BookingResult.failed(check.reason or "Reschedule is not allowed")

        update = {
            "scheduled_day": new_day,
            "scheduled_hour": new_hour,
            "duration_minutes": new_duration,
            "is_virtual": new_is_virtual,
        }
        if new_duration != session.duration_minutes:
            update["payment"] = SessionService.calculate_session_payment(client.session_rate, new_duration)
            update["energy_cost"] = AvailabilityService.calculate_energy_cost(new_duration, therapist.level)

        moved = session.model_copy(update=update)
        new_schedule = ScheduleService.add_to_schedule(schedule_without, moved)

        logger.info(
            f"Rescheduled session {session.id} from day {session.scheduled_day} hour "
            f"{session.scheduled_hour} to day {moved.scheduled_day} hour {moved.scheduled_hour}"
        )
        return BookingResult(
            success=True,
            session=moved,
            sessions=_replace_session(sessions, moved),
            schedule=new_schedule,
        )
