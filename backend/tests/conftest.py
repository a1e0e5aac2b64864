"""
Test configuration and shared fixtures for the scheduling engine test suite.

The engine is pure, so fixtures are plain model factories. Helper functions
are importable from test modules via `from tests.conftest import ...`.
"""

from types import MappingProxyType
from typing import Any, List, Mapping, Optional

import pytest

from models import (
    Building,
    Client,
    DayAvailability,
    GameTime,
    Session,
    SessionStatus,
    Therapist,
    TimePreference,
    WorkSchedule,
)
from services.schedule_service import ScheduleService
from shared_types.availability import Schedule


def make_session(
    session_id: str = "s1",
    therapist_id: str = "t1",
    client_id: str = "c1",
    day: int = 1,
    hour: int = 9,
    duration: int = 50,
    status: SessionStatus = SessionStatus.SCHEDULED,
    is_virtual: bool = False,
    **overrides: Any
) -> Session:
    """Create a session with sensible defaults."""
    return Session(
        id=session_id,
        therapist_id=therapist_id,
        client_id=client_id,
        scheduled_day=day,
        scheduled_hour=hour,
        duration_minutes=duration,
        status=status,
        is_virtual=is_virtual,
        **overrides,
    )


def make_therapist(
    therapist_id: str = "t1",
    level: int = 1,
    work_start_hour: Optional[int] = None,
    work_end_hour: Optional[int] = None,
    break_hours: Optional[List[int]] = None,
    display_name: str = "Dr. Test",
) -> Therapist:
    """Create a therapist; any work-hour argument gives a custom work schedule."""
    work_schedule = None
    if work_start_hour is not None or work_end_hour is not None or break_hours is not None:
        work_schedule = WorkSchedule(
            work_start_hour=work_start_hour if work_start_hour is not None else 8,
            work_end_hour=work_end_hour if work_end_hour is not None else 17,
            break_hours=break_hours or [],
        )
    return Therapist(id=therapist_id, display_name=display_name, level=level, work_schedule=work_schedule)


def make_client(
    client_id: str = "c1",
    availability: Optional[DayAvailability] = None,
    preferred_time: TimePreference = TimePreference.ANY,
    prefers_virtual: bool = False,
    session_rate: float = 100,
    is_private_pay: bool = True,
    assigned_therapist_id: Optional[str] = None,
    display_name: str = "Test Client",
) -> Client:
    """Create a client, available for every business hour unless told otherwise."""
    return Client(
        id=client_id,
        display_name=display_name,
        availability=availability if availability is not None else DayAvailability.every_business_hour(),
        preferred_time=preferred_time,
        prefers_virtual=prefers_virtual,
        session_rate=session_rate,
        is_private_pay=is_private_pay,
        assigned_therapist_id=assigned_therapist_id,
    )


def make_building(rooms: int = 1) -> Building:
    """Create a building with the given room count."""
    return Building(rooms=rooms)


def schedule_with(*sessions: Session) -> Schedule:
    """Build a schedule holding the given sessions."""
    return ScheduleService.build_schedule_from_sessions(sessions)


def deep_freeze(schedule: Mapping) -> MappingProxyType:
    """Wrap every level of a schedule in a read-only MappingProxyType."""
    return MappingProxyType({
        day: MappingProxyType({
            hour: MappingProxyType(dict(slots))
            for hour, slots in hours.items()
        })
        for day, hours in schedule.items()
    })


def thaw(schedule: Mapping) -> dict:
    """Deep copy of a schedule into plain dicts, for equality snapshots."""
    return {
        day: {hour: dict(slots) for hour, slots in hours.items()}
        for day, hours in schedule.items()
    }


@pytest.fixture
def therapist() -> Therapist:
    """Therapist on the default business-hours profile."""
    return make_therapist()


@pytest.fixture
def client() -> Client:
    """Client available for every business hour."""
    return make_client()


@pytest.fixture
def building() -> Building:
    """Building with a single room."""
    return make_building()


@pytest.fixture
def start_of_day_one() -> GameTime:
    """Clock at 8:00 on day 1."""
    return GameTime(day=1, hour=8, minute=0)
