"""
Booking constraint service: room capacity and telehealth eligibility.

These rules sit on top of therapist slot availability. The same candidate
slot can be bookable as a telehealth session and not in person (or the other
way round), so callers apply this check per session type.
"""

import logging
from typing import Optional, Sequence

from models import Building, Session
from services.room_service import RoomService
from shared_types.availability import BookingCheck

logger = logging.getLogger(__name__)


class BookingConstraintService:
    """Service class for session-type booking constraints."""

    @staticmethod
    def can_book_session_type(
        building: Building,
        sessions: Sequence[Session],
        telehealth_unlocked: bool,
        is_virtual: bool,
        day: int,
        hour: int,
        duration_minutes: int,
        exclude_session_id: Optional[str] = None
    ) -> BookingCheck:
        """
        Validate whether a session can be booked with the requested session type.

        - Virtual sessions require telehealth to be unlocked and never use a room.
        - In-person sessions need a free room for every hour they cover.
        - When rooms are full and telehealth is unlocked, the reason points to
          booking the session virtually instead; this is advice only.

        Args:
            building: Practice building (room count)
            sessions: All known sessions
            telehealth_unlocked: Whether the practice offers telehealth
            is_virtual: Requested session type
            day: Proposed day
            hour: Proposed start hour
            duration_minutes: Session duration
            exclude_session_id: Ignore this session's room (when rescheduling it)

        Returns:
            BookingCheck with a reason when the session type cannot be booked
        """
        if is_virtual:
            if not telehealth_unlocked:
                return BookingCheck.rejected("Telehealth is not unlocked")
            return BookingCheck.ok()

        room_check = RoomService.can_book_in_person_session(
            building, sessions, day, hour, duration_minutes, exclude_session_id
        )
        if room_check.can_book:
            return BookingCheck.ok()

        reason = room_check.reason or "No rooms available"
        if telehealth_unlocked:
            return BookingCheck.rejected(f"{reason} (virtual only)")
        return BookingCheck.rejected(f"{reason}. All rooms are booked")
