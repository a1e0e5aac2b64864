"""
Shared types for availability-related functionality.

This module contains the schedule index alias and the data classes returned by
the availability, slot matching and room services.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

# day -> hour -> therapist_id -> session_id. Sparse: a missing key means free.
Schedule = Dict[int, Dict[int, Dict[str, str]]]

# Read-only view accepted wherever a schedule is only inspected or copied
ScheduleView = Mapping[int, Mapping[int, Mapping[str, str]]]


@dataclass
class AvailableSlot:
    """
    A bookable (day, hour) for a therapist.

    Used by SlotMatchingService and the recurring planner so that candidate
    lists have one consistent structure.
    """
    day: int
    hour: int
    therapist_id: str
    is_preferred: bool = False  # Matches the client's time-of-day preference


@dataclass
class ScheduleConflict:
    """An existing booking occupying a slot a caller asked about."""
    day: int
    hour: int
    therapist_id: str
    existing_session_id: str
    reason: str


@dataclass
class RoomAvailability:
    """Room usage for one (day, hour)."""
    total_rooms: int
    rooms_in_use: int
    rooms_available: int
    can_book_in_person: bool
    can_book_virtual: bool = True  # Telehealth never needs a room


@dataclass
class TimeValidation:
    """Result of a time or work-schedule validation."""
    valid: bool
    reason: Optional[str] = None


@dataclass
class BookingCheck:
    """Result of a booking constraint check."""
    can_book: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "BookingCheck":
        return cls(can_book=True)

    @classmethod
    def rejected(cls, reason: str) -> "BookingCheck":
        return cls(can_book=False, reason=reason)
