"""
Shared type definitions for the scheduling engine.

This module contains dataclasses and types that are used across multiple services.
"""

from shared_types.availability import (
    Schedule,
    ScheduleView,
    AvailableSlot,
    ScheduleConflict,
    RoomAvailability,
    TimeValidation,
    BookingCheck,
)
from shared_types.booking import (
    CreateSessionParams,
    BookingSuggestion,
    PlannedRecurringSlot,
    RecurringBookingFailure,
    RecurringBookingPlan,
    BookingResult,
)

__all__ = [
    "Schedule",
    "ScheduleView",
    "AvailableSlot",
    "ScheduleConflict",
    "RoomAvailability",
    "TimeValidation",
    "BookingCheck",
    "CreateSessionParams",
    "BookingSuggestion",
    "PlannedRecurringSlot",
    "RecurringBookingFailure",
    "RecurringBookingPlan",
    "BookingResult",
]
