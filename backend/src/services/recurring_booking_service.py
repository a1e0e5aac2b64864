"""
Recurring booking planner.

Projects a fixed-interval series of sessions (e.g. weekly for four weeks) and
validates every occurrence against the full constraint set before anything is
committed. Each accepted occurrence is reserved in a working copy of the
schedule and session list, so later occurrences see earlier ones as booked.

The planner only reports. Whether a partially valid series may be booked is
the caller's decision.
"""

import logging
from typing import List, Optional, Sequence

from models import Building, Client, GameTime, Session, SessionStatus, Therapist
from services.availability_service import AvailabilityService
from services.booking_constraint_service import BookingConstraintService
from services.schedule_service import ScheduleService
from services.slot_matching_service import SlotMatchingService
from shared_types.availability import ScheduleView
from shared_types.booking import (
    PlannedRecurringSlot,
    RecurringBookingFailure,
    RecurringBookingPlan,
)
from utils.time_utils import validate_not_in_past

logger = logging.getLogger(__name__)


class RecurringBookingPlanner:
    """Planner for recurring session series."""

    @staticmethod
    def _planning_stub(
        therapist: Therapist,
        client: Client,
        day: int,
        hour: int,
        duration_minutes: int,
        is_virtual: bool,
        index: int
    ) -> Session:
        """Placeholder session that reserves an accepted occurrence in working state."""
        return Session(
            id=f"planned-{client.id}-{therapist.id}-{day}-{hour}-{index}",
            therapist_id=therapist.id,
            client_id=client.id,
            is_virtual=is_virtual,
            scheduled_day=day,
            scheduled_hour=hour,
            duration_minutes=duration_minutes,
            status=SessionStatus.SCHEDULED,
        )

    @staticmethod
    def _candidate_hours(
        schedule: ScheduleView,
        therapist: Therapist,
        client: Client,
        target_day: int,
        preferred_hour: int,
        duration_minutes: int,
        index: int,
        allow_nearest_hour: bool
    ) -> Optional[List[int]]:
        """
        Hours to try for one occurrence, closest to the preferred hour first
        with ties going to the earlier hour.

        Returns None when nearest-hour fallback is on and the therapist has no
        matching slot at all on the target day.
        """
        if not allow_nearest_hour or index == 0:
            return [preferred_hour]

        matching = SlotMatchingService.find_matching_slots(
            schedule, therapist, client, target_day, 1, duration_minutes
        )
        hours = {slot.hour for slot in matching if slot.day == target_day}
        if not hours:
            return None

        return sorted(hours, key=lambda h: (abs(h - preferred_hour), h))

    @staticmethod
    def plan_recurring_bookings(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapist: Therapist,
        client: Client,
        building: Building,
        telehealth_unlocked: bool,
        current_time: GameTime,
        start_day: int,
        start_hour: int,
        duration_minutes: int,
        is_virtual: bool,
        count: int,
        interval_days: int,
        allow_nearest_hour: bool = False
    ) -> RecurringBookingPlan:
        """
        Plan a series of recurring sessions starting at (start_day, start_hour).

        Occurrence i targets start_day + i * interval_days at start_hour and is
        checked in order:
        1. not in the past
        2. therapist slot availability, including work hours and the
           occurrences already planned in this series
        3. no overlapping session for the client
        4. therapist daily session limit
        5. room capacity or telehealth eligibility

        With allow_nearest_hour, occurrences after the first may fall back to
        the closest matching hour on the same target day. The first occurrence
        always uses start_hour exactly.

        Args:
            schedule: Current schedule (never modified)
            sessions: Current sessions (never modified)
            therapist: Therapist for the series
            client: Client for the series
            building: Practice building
            telehealth_unlocked: Whether telehealth is offered
            current_time: Current game time
            start_day: Day of the first occurrence
            start_hour: Hour of every occurrence
            duration_minutes: Session duration
            is_virtual: Whether the series is telehealth
            count: Number of occurrences, including the first
            interval_days: Days between occurrences (7 weekly, 14 biweekly)
            allow_nearest_hour: Enable same-day nearest-hour fallback

        Returns:
            RecurringBookingPlan with planned occurrences and per-index failures
        """
        if count < 1:
            return RecurringBookingPlan(failures=[RecurringBookingFailure(
                index=0, target_day=start_day, preferred_hour=start_hour,
                reason="Count must be at least 1",
            )])

        if interval_days < 0:
            return RecurringBookingPlan(failures=[RecurringBookingFailure(
                index=0, target_day=start_day, preferred_hour=start_hour,
                reason="Interval must be 0 or greater",
            )])

        working_schedule: ScheduleView = schedule
        working_sessions: List[Session] = list(sessions)
        plan = RecurringBookingPlan()

        for i in range(count):
            target_day = start_day + i * interval_days

            candidate_hours = RecurringBookingPlanner._candidate_hours(
                working_schedule, therapist, client, target_day, start_hour,
                duration_minutes, i, allow_nearest_hour
            )
            if candidate_hours is None:
                plan.failures.append(RecurringBookingFailure(
                    index=i, target_day=target_day, preferred_hour=start_hour,
                    reason="No therapist-available slots on this day",
                ))
                continue

            booked_hour: Optional[int] = None
            last_reason = "No valid slot found"

            for hour in candidate_hours:
                time_check = validate_not_in_past(current_time, target_day, hour)
                if not time_check.valid:
                    last_reason = time_check.reason or "Cannot schedule in the past"
                    continue

                if not AvailabilityService.is_slot_available(
                    working_schedule, therapist.id, target_day, hour, duration_minutes, therapist
                ):
                    last_reason = "Therapist slot is not available"
                    continue

                if AvailabilityService.client_has_conflicting_session(
                    working_sessions, client.id, target_day, hour, duration_minutes
                ):
                    last_reason = "Client has a conflicting session"
                    continue

                if not ScheduleService.can_schedule_more_today(
                    working_schedule, working_sessions, therapist.id, target_day
                ):
                    last_reason = "Therapist has reached daily session limit"
                    continue

                type_check = BookingConstraintService.can_book_session_type(
                    building, working_sessions, telehealth_unlocked, is_virtual,
                    target_day, hour, duration_minutes
                )
                if not type_check.can_book:
                    last_reason = type_check.reason or last_reason
                    continue

                booked_hour = hour
                break

            if booked_hour is None:
                plan.failures.append(RecurringBookingFailure(
                    index=i, target_day=target_day, preferred_hour=start_hour,
                    reason=last_reason,
                ))
                continue

            stub = RecurringBookingPlanner._planning_stub(
                therapist, client, target_day, booked_hour, duration_minutes, is_virtual, i
            )
            working_sessions = working_sessions + [stub]
            working_schedule = ScheduleService.add_to_schedule(working_schedule, stub)
            plan.planned.append(PlannedRecurringSlot(index=i, day=target_day, hour=booked_hour))

        if plan.failures:
            logger.warning(
                f"Recurring plan for client {client.id} with therapist {therapist.id}: "
                f"{len(plan.planned)}/{count} planned, failed indices {plan.failed_indices}"
            )

        return plan
