"""
Slot matching service for finding candidate booking slots.

Produces the candidate (day, hour) list for a therapist and client across a
multi-day horizon. Results are strictly chronological; whether a slot matches
the client's time-of-day preference is reported as a flag for the caller to
highlight, never used to reorder the list.

Room and telehealth constraints are not applied here. The same candidate list
serves both in-person and virtual flows, which apply
BookingConstraintService.can_book_session_type on their own.
"""

import logging
from typing import List, Optional, Sequence

from core.config import DEFAULT_DAYS_TO_SHOW
from core.constants import DEFAULT_SESSION_DURATION
from models import Building, Client, GameTime, Session, Therapist, ANY_TIME_CLIENT
from services.availability_service import AvailabilityService
from services.booking_constraint_service import BookingConstraintService
from services.schedule_service import ScheduleService
from services.work_schedule_service import WorkScheduleService
from shared_types.availability import AvailableSlot, ScheduleView
from shared_types.booking import BookingSuggestion
from utils.time_utils import matches_time_preference, validate_not_in_past, weekday_of

logger = logging.getLogger(__name__)


class SlotMatchingService:
    """Service class for candidate slot discovery."""

    @staticmethod
    def get_client_availability_for_day(client: Client, day: int) -> List[int]:
        """Hours the client declared for the weekday that `day` falls on."""
        return client.availability.hours_for(weekday_of(day))

    @staticmethod
    def find_matching_slots(
        schedule: ScheduleView,
        therapist: Therapist,
        client: Optional[Client] = None,
        start_day: int = 1,
        days_to_show: int = DEFAULT_DAYS_TO_SHOW,
        duration_minutes: int = DEFAULT_SESSION_DURATION
    ) -> List[AvailableSlot]:
        """
        Find bookable slots for a therapist and client pair.

        Candidate hours for each day in start_day .. start_day + days_to_show - 1
        are the therapist's working hours (minus breaks) that the client
        declared for that weekday and where the therapist slot is available.

        Args:
            schedule: Current schedule
            therapist: Therapist to book
            client: Client to book. None uses ANY_TIME_CLIENT, which is
                available for every business hour with no time preference.
            start_day: First day of the horizon
            days_to_show: Number of days in the horizon
            duration_minutes: Session duration

        Returns:
            Slots ordered by day, then hour
        """
        client = client if client is not None else ANY_TIME_CLIENT
        working_hours = WorkScheduleService.get_working_hours(therapist)
        slots: List[AvailableSlot] = []

        for day in range(start_day, start_day + days_to_show):
            client_hours = set(SlotMatchingService.get_client_availability_for_day(client, day))

            for hour in working_hours:
                if hour not in client_hours:
                    continue
                if not AvailabilityService.is_slot_available(
                    schedule, therapist.id, day, hour, duration_minutes, therapist
                ):
                    continue

                slots.append(AvailableSlot(
                    day=day,
                    hour=hour,
                    therapist_id=therapist.id,
                    is_preferred=matches_time_preference(hour, client.preferred_time),
                ))

        return slots

    @staticmethod
    def suggest_slot_for_client(
        schedule: ScheduleView,
        sessions: Sequence[Session],
        therapists: Sequence[Therapist],
        client: Client,
        building: Building,
        telehealth_unlocked: bool,
        current_time: GameTime,
        days_ahead: int = DEFAULT_DAYS_TO_SHOW,
        duration_minutes: int = DEFAULT_SESSION_DURATION
    ) -> Optional[BookingSuggestion]:
        """
        Suggest the best fully bookable slot for a client.

        Therapists are tried with the client's assigned therapist first, then
        in the order given. For each therapist the matching slots are filtered
        through the full constraint set (not in the past, no client overlap,
        daily session limit, room/telehealth). The first preferred slot wins,
        otherwise the soonest valid one.

        Returns:
            BookingSuggestion, or None if no therapist has a valid slot
        """
        ordered = sorted(
            therapists,
            key=lambda t: 0 if t.id == client.assigned_therapist_id else 1
        )
        is_virtual = client.prefers_virtual and telehealth_unlocked

        for therapist in ordered:
            candidates = SlotMatchingService.find_matching_slots(
                schedule, therapist, client, current_time.day, days_ahead, duration_minutes
            )

            valid_slots: List[AvailableSlot] = []
            for slot in candidates:
                if not validate_not_in_past(current_time, slot.day, slot.hour).valid:
                    continue
                if AvailabilityService.client_has_conflicting_session(
                    sessions, client.id, slot.day, slot.hour, duration_minutes
                ):
                    continue
                if not ScheduleService.can_schedule_more_today(schedule, sessions, therapist.id, slot.day):
                    continue
                type_check = BookingConstraintService.can_book_session_type(
                    building, sessions, telehealth_unlocked, is_virtual,
                    slot.day, slot.hour, duration_minutes
                )
                if not type_check.can_book:
                    continue
                valid_slots.append(slot)

            if not valid_slots:
                continue

            best = next((s for s in valid_slots if s.is_preferred), valid_slots[0])
            return BookingSuggestion(
                client_id=client.id,
                therapist_id=therapist.id,
                day=best.day,
                hour=best.hour,
                duration=duration_minutes,
                is_virtual=is_virtual,
                is_preferred=best.is_preferred,
            )

        logger.debug(f"No bookable slot found for client {client.id} within {days_ahead} days")
        return None
