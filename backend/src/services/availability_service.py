"""
Availability service for slot availability and conflict detection.

This module decides whether a therapist can take a session at a given day,
hour and duration, lists the free hours of a day, and reports the bookings
that stand in the way of a proposed slot. All checks run on the whole-hour
grid: a session blocks every hour from its start hour up to
ceil(duration / 60) hours later.
"""

import logging
import math
from typing import List, Optional, Sequence

from core.config import BUSINESS_START_HOUR, BUSINESS_END_HOUR
from core.constants import (
    DEFAULT_SESSION_DURATION,
    BASE_ENERGY_COST,
    MAX_THERAPIST_LEVEL,
    ENERGY_REDUCTION_PER_LEVEL,
    MIN_ENERGY_MODIFIER,
)
from models import Session, Therapist
from services.schedule_service import ScheduleService, validate_duration
from services.work_schedule_service import WorkScheduleService
from shared_types.availability import ScheduleConflict, ScheduleView

logger = logging.getLogger(__name__)


class AvailabilityService:
    """
    Service class for availability operations.

    Gating a booking is is_slot_available's job; get_conflicts is for
    diagnostics and display.
    """

    @staticmethod
    def _is_within_business_hours(hour: int) -> bool:
        return BUSINESS_START_HOUR <= hour < BUSINESS_END_HOUR

    @staticmethod
    def is_slot_available(
        schedule: ScheduleView,
        therapist_id: str,
        day: int,
        hour: int,
        duration_minutes: int = DEFAULT_SESSION_DURATION,
        therapist: Optional[Therapist] = None
    ) -> bool:
        """
        Check if a time slot is available for a therapist.

        A slot is available only when every hour the session would cover:
        - lies inside business hours (so a session may not run past close),
        - lies inside the therapist's work window and is not a break hour,
          when a therapist profile is supplied,
        - has no existing booking for this therapist.

        Args:
            schedule: Current schedule
            therapist_id: Therapist to check
            day: Proposed day
            hour: Proposed start hour
            duration_minutes: Session duration (50, 80 or 180)
            therapist: Optional therapist profile for custom work hours

        Returns:
            True if the therapist can take the session, False otherwise

        Raises:
            ValueError: If duration_minutes is not a supported duration
        """
        hours = ScheduleService.covered_hours(hour, duration_minutes)

        for check_hour in hours:
            if not AvailabilityService._is_within_business_hours(check_hour):
                return False

            if therapist is not None and not WorkScheduleService.is_within_work_hours(therapist, check_hour):
                return False  # Outside the therapist's hours or on a break

        day_schedule = schedule.get(day)
        if day_schedule:
            for check_hour in hours:
                hour_schedule = day_schedule.get(check_hour)
                if hour_schedule and hour_schedule.get(therapist_id):
                    return False  # Slot is occupied

        return True

    @staticmethod
    def get_available_slots_for_day(
        schedule: ScheduleView,
        therapist_id: str,
        day: int,
        therapist: Optional[Therapist] = None,
        duration_minutes: int = DEFAULT_SESSION_DURATION
    ) -> List[int]:
        """
        Get all start hours on a day where a session of the given duration fits.

        The therapist's work window is scanned when a profile is supplied,
        otherwise business hours are.
        """
        if therapist is not None:
            work_schedule = WorkScheduleService.get_work_schedule(therapist)
            start_hour = work_schedule.work_start_hour
            end_hour = work_schedule.work_end_hour
        else:
            start_hour = BUSINESS_START_HOUR
            end_hour = BUSINESS_END_HOUR

        return [
            hour for hour in range(start_hour, end_hour)
            if AvailabilityService.is_slot_available(
                schedule, therapist_id, day, hour, duration_minutes, therapist
            )
        ]

    @staticmethod
    def get_conflicts(
        schedule: ScheduleView,
        therapist_id: str,
        day: int,
        hour: int,
        duration_minutes: int = DEFAULT_SESSION_DURATION
    ) -> List[ScheduleConflict]:
        """
        Get the existing bookings that occupy a proposed slot.

        With the default 50-minute duration this is the booking at the exact
        (day, hour). Longer durations report every covered hour.

        Returns:
            One ScheduleConflict per occupied hour, empty if free
        """
        conflicts: List[ScheduleConflict] = []
        day_schedule = schedule.get(day)
        if not day_schedule:
            return conflicts

        for check_hour in ScheduleService.covered_hours(hour, duration_minutes):
            hour_schedule = day_schedule.get(check_hour)
            if not hour_schedule:
                continue
            existing_session_id = hour_schedule.get(therapist_id)
            if existing_session_id:
                conflicts.append(ScheduleConflict(
                    day=day,
                    hour=check_hour,
                    therapist_id=therapist_id,
                    existing_session_id=existing_session_id,
                    reason=f"Slot already booked at {check_hour}:00",
                ))

        return conflicts

    @staticmethod
    def _check_hour_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
        """Check if two half-open hour ranges overlap."""
        return start1 < end2 and start2 < end1

    @staticmethod
    def client_has_conflicting_session(
        sessions: Sequence[Session],
        client_id: str,
        day: int,
        hour: int,
        duration_minutes: int = DEFAULT_SESSION_DURATION
    ) -> bool:
        """
        Check whether the client already has an overlapping active session.

        Uses interval overlap on the hour grid, so a multi-hour session blocks
        a new session that starts inside it, not just one at the same hour.
        Only scheduled and in-progress sessions count.
        """
        proposed_start = hour
        proposed_end = hour + ScheduleService.slots_needed(duration_minutes)

        for s in sessions:
            if s.client_id != client_id or s.scheduled_day != day or not s.is_active:
                continue
            existing_start = s.scheduled_hour
            existing_end = s.scheduled_hour + ScheduleService.slots_needed(s.duration_minutes)
            if AvailabilityService._check_hour_overlap(
                proposed_start, proposed_end, existing_start, existing_end
            ):
                return True

        return False

    @staticmethod
    def calculate_energy_cost(duration_minutes: int, therapist_level: int) -> int:
        """
        Calculate the energy a therapist spends on a session.

        Base cost is tiered by duration; higher levels are more efficient, with
        the level capped at 50 and the reduction floored at half the base cost.
        The result never increases as level rises.
        """
        base_cost = BASE_ENERGY_COST[validate_duration(duration_minutes)]
        capped_level = min(therapist_level, MAX_THERAPIST_LEVEL)
        level_modifier = max(MIN_ENERGY_MODIFIER, 1 - capped_level * ENERGY_REDUCTION_PER_LEVEL)
        return math.floor(base_cost * level_modifier + 0.5)
