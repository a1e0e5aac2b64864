"""
Work schedule service for therapist-specific working hours.

A therapist's work schedule narrows the clinic's business hours and adds up to
three break hours. Validation reports problems back to the caller instead of
raising, so proposals from an edit form can be shown with a reason.
"""

import logging
from typing import List, Optional, Tuple

from core.constants import (
    EARLIEST_WORK_START_HOUR,
    LATEST_WORK_END_HOUR,
    MIN_WORK_DAY_HOURS,
    MAX_BREAKS_PER_DAY,
    MIN_NET_WORKING_HOURS,
)
from models import Therapist, WorkSchedule, DEFAULT_WORK_SCHEDULE
from shared_types.availability import TimeValidation

logger = logging.getLogger(__name__)


class WorkScheduleService:
    """Service class for therapist work hours."""

    @staticmethod
    def get_work_schedule(therapist: Optional[Therapist]) -> WorkSchedule:
        """
        Get a therapist's work schedule, falling back to business hours.

        Args:
            therapist: Therapist, or None for the default profile

        Returns:
            The therapist's custom schedule, or DEFAULT_WORK_SCHEDULE
        """
        if therapist is None or therapist.work_schedule is None:
            return DEFAULT_WORK_SCHEDULE
        return therapist.work_schedule

    @staticmethod
    def is_within_work_hours(therapist: Optional[Therapist], hour: int) -> bool:
        """Check if an hour is a working (non-break) hour for the therapist."""
        schedule = WorkScheduleService.get_work_schedule(therapist)
        if hour < schedule.work_start_hour or hour >= schedule.work_end_hour:
            return False
        return hour not in schedule.break_hours

    @staticmethod
    def get_working_hours(therapist: Optional[Therapist]) -> List[int]:
        """All hours the therapist works, excluding breaks, in ascending order."""
        schedule = WorkScheduleService.get_work_schedule(therapist)
        return [
            hour for hour in range(schedule.work_start_hour, schedule.work_end_hour)
            if hour not in schedule.break_hours
        ]

    @staticmethod
    def validate_work_schedule(schedule: WorkSchedule) -> TimeValidation:
        """
        Validate a proposed work schedule.

        Rules:
        - Start no earlier than 6am, end no later than 10pm
        - End after start, at least a 4 hour day
        - At most 3 breaks, each inside the work window, no duplicates
        - At least 3 working hours left after breaks

        Returns:
            TimeValidation with the first rule that fails
        """
        start = schedule.work_start_hour
        end = schedule.work_end_hour
        breaks = schedule.break_hours

        if start < EARLIEST_WORK_START_HOUR:
            return TimeValidation(valid=False, reason="Work cannot start before 6am")
        if end > LATEST_WORK_END_HOUR:
            return TimeValidation(valid=False, reason="Work cannot end after 10pm")
        if end <= start:
            return TimeValidation(valid=False, reason="End hour must be after start hour")
        if end - start < MIN_WORK_DAY_HOURS:
            return TimeValidation(valid=False, reason=f"Work day must be at least {MIN_WORK_DAY_HOURS} hours")
        if len(breaks) > MAX_BREAKS_PER_DAY:
            return TimeValidation(valid=False, reason=f"Maximum {MAX_BREAKS_PER_DAY} breaks allowed")
        if len(set(breaks)) != len(breaks):
            return TimeValidation(valid=False, reason="Duplicate break hours are not allowed")
        for break_hour in breaks:
            if break_hour < start or break_hour >= end:
                return TimeValidation(valid=False, reason="Break hours must be within work hours")
        if (end - start) - len(breaks) < MIN_NET_WORKING_HOURS:
            return TimeValidation(
                valid=False,
                reason=f"Must have at least {MIN_NET_WORKING_HOURS} working hours after breaks"
            )

        return TimeValidation(valid=True)

    @staticmethod
    def update_work_schedule(
        therapist: Therapist,
        schedule: WorkSchedule
    ) -> Tuple[Therapist, TimeValidation]:
        """
        Apply a new work schedule to a copy of the therapist.

        Returns:
            (therapist, validation). When validation fails the original
            therapist is returned unchanged.
        """
        validation = WorkScheduleService.validate_work_schedule(schedule)
        if not validation.valid:
            logger.debug(f"Rejected work schedule for therapist {therapist.id}: {validation.reason}")
            return therapist, validation

        normalized = schedule.model_copy(update={"break_hours": sorted(schedule.break_hours)})
        return therapist.model_copy(update={"work_schedule": normalized}), validation
