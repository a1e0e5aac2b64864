"""
Shared types for session creation, recurring planning and booking commits.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from core.constants import DEFAULT_SESSION_DURATION
from models.session import Session, SessionType
from shared_types.availability import Schedule


@dataclass
class CreateSessionParams:
    """Booking parameters handed to the session factory."""
    therapist_id: str
    client_id: str
    day: int
    hour: int
    duration: int = DEFAULT_SESSION_DURATION
    session_type: SessionType = SessionType.CLINICAL
    is_virtual: Optional[bool] = None  # None means "use the client's preference"


@dataclass
class BookingSuggestion:
    """A fully validated slot proposed for a client."""
    client_id: str
    therapist_id: str
    day: int
    hour: int
    duration: int
    is_virtual: bool
    is_preferred: bool


@dataclass
class PlannedRecurringSlot:
    """An occurrence of a recurring series that passed every check."""
    index: int
    day: int
    hour: int


@dataclass
class RecurringBookingFailure:
    """An occurrence of a recurring series that could not be planned."""
    index: int  # 0-based position within the requested series
    target_day: int
    preferred_hour: int
    reason: str


@dataclass
class RecurringBookingPlan:
    """
    Full report for a recurring series.

    The plan is informational: whether partial success is acceptable is the
    caller's decision.
    """
    planned: List[PlannedRecurringSlot] = field(default_factory=list)
    failures: List[RecurringBookingFailure] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when every requested occurrence was planned."""
        return not self.failures and len(self.planned) > 0

    @property
    def failed_indices(self) -> List[int]:
        return [f.index for f in self.failures]


@dataclass
class BookingResult:
    """
    Outcome of a validate-then-commit booking operation.

    On success `sessions` and `schedule` hold the new values the caller should
    swap in; on failure they are None and `error` explains why.
    """
    success: bool
    error: Optional[str] = None
    session: Optional[Session] = None
    sessions: Optional[List[Session]] = None
    schedule: Optional[Schedule] = None

    @classmethod
    def failed(cls, error: str) -> "BookingResult":
        return cls(success=False, error=error)
