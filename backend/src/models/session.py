"""
Session model representing a single booked therapy appointment.

A session is the atomic bookable unit of the schedule. It is created by the
session factory at booking time and later mutated in place by the phases that
run sessions (status transitions, progress, quality). Once a session is
completed or cancelled it becomes immutable history.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.constants import SESSION_DURATIONS, INITIAL_SESSION_QUALITY


class SessionStatus(str, Enum):
    """Session lifecycle statuses."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    CONFLICT = "conflict"  # Set only by external subsystems; never occupies a slot


class SessionType(str, Enum):
    """Kind of session being delivered."""

    CLINICAL = "clinical"
    SUPERVISION = "supervision"


# Statuses whose sessions are written into the schedule index
OCCUPYING_STATUSES = frozenset({
    SessionStatus.SCHEDULED,
    SessionStatus.IN_PROGRESS,
    SessionStatus.COMPLETED,
})

# Statuses that still block the client's own calendar and the clinic's rooms
ACTIVE_STATUSES = frozenset({
    SessionStatus.SCHEDULED,
    SessionStatus.IN_PROGRESS,
})


class Session(BaseModel):
    """
    A booked session between one therapist and one client.

    Identity fields (therapist_id, client_id) are authoritative; the cached
    display names are for history views only.
    """

    # Later phases assign fields in place; keep status coerced to the enum
    model_config = ConfigDict(validate_assignment=True)

    id: str
    """Unique session identifier."""

    therapist_id: str
    """Therapist delivering the session."""

    client_id: str
    """Client receiving the session."""

    session_type: SessionType = SessionType.CLINICAL

    is_virtual: bool = False
    """True for telehealth sessions, which do not consume a room."""

    is_insurance: bool = False
    """True when the session is billed to the client's insurer."""

    scheduled_day: int = Field(ge=1)
    scheduled_hour: int = Field(ge=0, le=23)

    duration_minutes: int = 50
    """One of 50, 80 or 180. Occupies ceil(duration / 60) whole hour slots."""

    status: SessionStatus = SessionStatus.SCHEDULED

    progress: float = 0.0
    quality: float = INITIAL_SESSION_QUALITY

    payment: float = 0
    """Computed once at booking time and never recomputed."""

    energy_cost: int = 0
    xp_gained: int = 0

    # Cached names for history display
    therapist_name: str = ""
    client_name: str = ""

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, v: int) -> int:
        """Reject durations the hour grid cannot represent."""
        if v not in SESSION_DURATIONS:
            raise ValueError(f"duration_minutes must be one of {SESSION_DURATIONS}, got {v}")
        return v

    @property
    def is_active(self) -> bool:
        """Whether the session still blocks client time and rooms."""
        return self.status in ACTIVE_STATUSES

    @property
    def occupies_schedule(self) -> bool:
        """Whether the session is represented in the schedule index."""
        return self.status in OCCUPYING_STATUSES
