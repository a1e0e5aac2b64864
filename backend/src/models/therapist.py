"""
Therapist model (scheduling-relevant subset).

Therapists conduct sessions. Each therapist may narrow the clinic's business
hours with a custom work window and up to three break hours; a therapist
without a custom profile works the default business hours with no breaks.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from core.config import BUSINESS_START_HOUR, BUSINESS_END_HOUR
from core.constants import MAX_THERAPIST_LEVEL


class WorkSchedule(BaseModel):
    """
    Custom work hours for a therapist.

    The type does not enforce the work-hour rules (minimum day length, break
    placement, ...); WorkScheduleService.validate_work_schedule does, so that
    invalid proposals can be reported back instead of raised.
    """

    work_start_hour: int = BUSINESS_START_HOUR
    """Hour work starts (inclusive)."""

    work_end_hour: int = BUSINESS_END_HOUR
    """Hour work ends (exclusive)."""

    break_hours: List[int] = Field(default_factory=list)
    """Hours blocked for breaks, empty means no breaks."""


DEFAULT_WORK_SCHEDULE = WorkSchedule()


class Therapist(BaseModel):
    """A therapist who can be booked for sessions."""

    id: str
    display_name: str = ""
    is_player: bool = False

    level: int = Field(default=1, ge=1, le=MAX_THERAPIST_LEVEL)
    """Experience level; higher levels spend less energy per session."""

    work_schedule: Optional[WorkSchedule] = None
    """Custom work hours. None means the default business-hours profile."""
