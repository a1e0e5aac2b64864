# Package initialization
# Re-export the scheduling models so callers can import from `models`
from .game_time import GameTime
from .session import (
    Session,
    SessionStatus,
    SessionType,
    OCCUPYING_STATUSES,
    ACTIVE_STATUSES,
)
from .therapist import Therapist, WorkSchedule, DEFAULT_WORK_SCHEDULE
from .client import Client, DayAvailability, TimePreference, ANY_TIME_CLIENT
from .building import Building

__all__ = [
    "GameTime",
    "Session",
    "SessionStatus",
    "SessionType",
    "OCCUPYING_STATUSES",
    "ACTIVE_STATUSES",
    "Therapist",
    "WorkSchedule",
    "DEFAULT_WORK_SCHEDULE",
    "Client",
    "DayAvailability",
    "TimePreference",
    "ANY_TIME_CLIENT",
    "Building",
]
