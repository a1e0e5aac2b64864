"""
Session service: builds Session records at booking time.

Derived fields (payment, insurance flag, virtual flag, energy cost) are
computed once here and never recomputed; later phases only change status,
progress and quality.
"""

import logging
import uuid
from typing import Optional

from core.constants import DURATION_PAYMENT_MULTIPLIERS, INITIAL_SESSION_QUALITY
from models import Client, Session, SessionStatus, Therapist
from services.availability_service import AvailabilityService
from services.schedule_service import validate_duration
from shared_types.booking import CreateSessionParams
from utils.time_utils import format_time_range

logger = logging.getLogger(__name__)


class SessionService:
    """Service class for session construction and display helpers."""

    @staticmethod
    def calculate_session_payment(base_rate: float, duration_minutes: int) -> int:
        """
        Calculate the payment for a session from the client's base rate.

        80-minute sessions pay 1.5x and 180-minute sessions 3x the base rate.
        Rounded half up to a whole amount.
        """
        multiplier = DURATION_PAYMENT_MULTIPLIERS[validate_duration(duration_minutes)]
        return int(base_rate * multiplier + 0.5)

    @staticmethod
    def create_session(
        params: CreateSessionParams,
        therapist: Therapist,
        client: Client,
        session_id: Optional[str] = None
    ) -> Session:
        """
        Create a new scheduled session.

        Args:
            params: Booking parameters
            therapist: Resolved therapist (level and name are read)
            client: Resolved client (rate, billing, virtual preference, name)
            session_id: Explicit id, otherwise a random UUID

        Returns:
            Session with status 'scheduled', progress 0 and quality 0.5.
            is_virtual follows the client's preference unless params set it.

        Raises:
            ValueError: If the duration is not supported
        """
        duration = validate_duration(params.duration)
        is_virtual = client.prefers_virtual if params.is_virtual is None else params.is_virtual

        return Session(
            id=session_id or str(uuid.uuid4()),
            therapist_id=params.therapist_id,
            client_id=params.client_id,
            session_type=params.session_type,
            is_virtual=is_virtual,
            is_insurance=not client.is_private_pay,
            scheduled_day=params.day,
            scheduled_hour=params.hour,
            duration_minutes=duration,
            status=SessionStatus.SCHEDULED,
            progress=0.0,
            quality=INITIAL_SESSION_QUALITY,
            payment=SessionService.calculate_session_payment(client.session_rate, duration),
            energy_cost=AvailabilityService.calculate_energy_cost(duration, therapist.level),
            xp_gained=0,
            therapist_name=therapist.display_name,
            client_name=client.display_name,
        )

    @staticmethod
    def get_session_time_range(session: Session) -> str:
        """Display range for a session, e.g. '9:00 AM - 9:50 AM'."""
        return format_time_range(session.scheduled_hour, session.duration_minutes)
