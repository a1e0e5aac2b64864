"""
Client model (scheduling-relevant subset).

Clients declare the hours they can attend on each weekday, a time-of-day
preference, whether they prefer telehealth, and their billing arrangement.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.config import BUSINESS_START_HOUR, BUSINESS_END_HOUR


class TimePreference(str, Enum):
    """Client time-of-day preference."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"


class DayAvailability(BaseModel):
    """Hours a client can attend, keyed by weekday (e.g. monday=[9, 10, 14])."""

    monday: List[int] = Field(default_factory=list)
    tuesday: List[int] = Field(default_factory=list)
    wednesday: List[int] = Field(default_factory=list)
    thursday: List[int] = Field(default_factory=list)
    friday: List[int] = Field(default_factory=list)

    def hours_for(self, weekday: str) -> List[int]:
        """Return the available hours for a weekday name, empty if unknown."""
        return list(getattr(self, weekday, None) or [])

    @classmethod
    def every_business_hour(cls) -> "DayAvailability":
        """Availability covering every business hour on every weekday."""
        hours = list(range(BUSINESS_START_HOUR, BUSINESS_END_HOUR))
        return cls(
            monday=list(hours),
            tuesday=list(hours),
            wednesday=list(hours),
            thursday=list(hours),
            friday=list(hours),
        )


class Client(BaseModel):
    """A client who books sessions with a therapist."""

    id: str
    display_name: str = ""

    availability: DayAvailability = Field(default_factory=DayAvailability)
    preferred_time: TimePreference = TimePreference.ANY
    prefers_virtual: bool = False

    session_rate: float = 0
    """Base rate for a standard 50-minute session."""

    is_private_pay: bool = True
    """False when the client's sessions are billed to an insurer."""

    assigned_therapist_id: Optional[str] = None
    """Therapist currently treating the client, if any."""


# Placeholder used by slot matching when no real client is supplied:
# available for every business hour, no time-of-day preference.
ANY_TIME_CLIENT = Client(
    id="any-time-client",
    display_name="Any time",
    availability=DayAvailability.every_business_hour(),
    preferred_time=TimePreference.ANY,
)
