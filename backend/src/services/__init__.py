"""
Services package for the scheduling engine.

This package contains service classes that encapsulate the scheduling and
booking rules shared by the booking UI, automated rebooking and the game loop.
"""

from .schedule_service import ScheduleService
from .work_schedule_service import WorkScheduleService
from .availability_service import AvailabilityService
from .room_service import RoomService
from .booking_constraint_service import BookingConstraintService
from .slot_matching_service import SlotMatchingService
from .recurring_booking_service import RecurringBookingPlanner
from .session_service import SessionService
from .booking_service import BookingService

__all__ = [
    "ScheduleService",
    "WorkScheduleService",
    "AvailabilityService",
    "RoomService",
    "BookingConstraintService",
    "SlotMatchingService",
    "RecurringBookingPlanner",
    "SessionService",
    "BookingService",
]
