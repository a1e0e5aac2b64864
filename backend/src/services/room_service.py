"""
Room service for in-person capacity checking.

This service handles:
- Counting rooms in use for a (day, hour)
- Checking that an in-person session has a room for every hour it covers

Only scheduled and in-progress in-person sessions hold a room. Completed
sessions are history and cancelled/conflict sessions never hold one.
Telehealth sessions never need a room.
"""

import logging
from typing import Optional, Sequence

from models import Building, Session
from services.schedule_service import ScheduleService
from shared_types.availability import BookingCheck, RoomAvailability

logger = logging.getLogger(__name__)


class RoomService:
    """Service for room capacity checks."""

    @staticmethod
    def count_in_person_sessions(
        sessions: Sequence[Session],
        day: int,
        hour: int,
        exclude_session_id: Optional[str] = None
    ) -> int:
        """
        Count in-person active sessions that overlap (day, hour) across all therapists.

        Args:
            sessions: All known sessions
            day: Day to check
            hour: Hour to check
            exclude_session_id: Ignore this session (e.g. one being moved)
        """
        count = 0
        for s in sessions:
            if s.is_virtual or not s.is_active or s.scheduled_day != day:
                continue
            if exclude_session_id is not None and s.id == exclude_session_id:
                continue
            end_hour = s.scheduled_hour + ScheduleService.slots_needed(s.duration_minutes)
            if s.scheduled_hour <= hour < end_hour:
                count += 1
        return count

    @staticmethod
    def get_room_availability(
        building: Building,
        sessions: Sequence[Session],
        day: int,
        hour: int,
        exclude_session_id: Optional[str] = None
    ) -> RoomAvailability:
        """Get room usage for a single hour."""
        rooms_in_use = RoomService.count_in_person_sessions(sessions, day, hour, exclude_session_id)
        rooms_available = building.rooms - rooms_in_use
        return RoomAvailability(
            total_rooms=building.rooms,
            rooms_in_use=rooms_in_use,
            rooms_available=rooms_available,
            can_book_in_person=rooms_available > 0,
        )

    @staticmethod
    def can_book_in_person_session(
        building: Building,
        sessions: Sequence[Session],
        day: int,
        hour: int,
        duration_minutes: int,
        exclude_session_id: Optional[str] = None
    ) -> BookingCheck:
        """
        Check that a new in-person session has a free room for every covered hour.

        Returns:
            BookingCheck naming the first hour without a free room
        """
        for check_hour in ScheduleService.covered_hours(hour, duration_minutes):
            availability = RoomService.get_room_availability(
                building, sessions, day, check_hour, exclude_session_id
            )
            if not availability.can_book_in_person:
                logger.debug(
                    f"No rooms on day {day} at hour {check_hour}: "
                    f"{availability.rooms_in_use}/{availability.total_rooms} in use"
                )
                return BookingCheck.rejected(f"No rooms available at hour {check_hour}")

        return BookingCheck.ok()
