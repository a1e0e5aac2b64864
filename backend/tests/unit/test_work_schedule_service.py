"""
Unit tests for WorkScheduleService.
"""

import pytest

from models import DEFAULT_WORK_SCHEDULE, WorkSchedule
from services.work_schedule_service import WorkScheduleService
from tests.conftest import make_therapist


class TestGetWorkSchedule:
    """Test work schedule lookup and working hours."""

    def test_default_profile(self):
        assert WorkScheduleService.get_work_schedule(None) == DEFAULT_WORK_SCHEDULE
        assert WorkScheduleService.get_work_schedule(make_therapist()) == DEFAULT_WORK_SCHEDULE

    def test_default_working_hours_are_business_hours(self):
        assert WorkScheduleService.get_working_hours(make_therapist()) == list(range(8, 17))

    def test_custom_working_hours_skip_breaks(self):
        therapist = make_therapist(work_start_hour=9, work_end_hour=15, break_hours=[12])
        assert WorkScheduleService.get_working_hours(therapist) == [9, 10, 11, 13, 14]

    def test_is_within_work_hours(self):
        therapist = make_therapist(work_start_hour=10, work_end_hour=16, break_hours=[13])
        assert WorkScheduleService.is_within_work_hours(therapist, 9) is False
        assert WorkScheduleService.is_within_work_hours(therapist, 10) is True
        assert WorkScheduleService.is_within_work_hours(therapist, 13) is False
        assert WorkScheduleService.is_within_work_hours(therapist, 16) is False


class TestValidateWorkSchedule:
    """Test work schedule rules in the order they are applied."""

    def test_valid_schedule(self):
        result = WorkScheduleService.validate_work_schedule(
            WorkSchedule(work_start_hour=9, work_end_hour=17, break_hours=[12])
        )
        assert result.valid is True
        assert result.reason is None

    @pytest.mark.parametrize("start,end,breaks,reason", [
        (5, 12, [], "Work cannot start before 6am"),
        (14, 23, [], "Work cannot end after 10pm"),
        (12, 12, [], "End hour must be after start hour"),
        (9, 12, [], "Work day must be at least 4 hours"),
        (8, 17, [9, 10, 11, 12], "Maximum 3 breaks allowed"),
        (8, 17, [12, 12], "Duplicate break hours are not allowed"),
        (8, 17, [17], "Break hours must be within work hours"),
        (8, 17, [7], "Break hours must be within work hours"),
        (8, 13, [9, 10, 11], "Must have at least 3 working hours after breaks"),
    ])
    def test_rejections(self, start, end, breaks, reason):
        result = WorkScheduleService.validate_work_schedule(
            WorkSchedule(work_start_hour=start, work_end_hour=end, break_hours=breaks)
        )
        assert result.valid is False
        assert result.reason == reason

    def test_boundary_hours_are_allowed(self):
        result = WorkScheduleService.validate_work_schedule(WorkSchedule(work_start_hour=6, work_end_hour=22))
        assert result.valid is True


class TestUpdateWorkSchedule:
    """Test applying a work schedule to a therapist."""

    def test_valid_update_returns_copy_with_sorted_breaks(self):
        therapist = make_therapist()
        updated, validation = WorkScheduleService.update_work_schedule(
            therapist, WorkSchedule(work_start_hour=9, work_end_hour=17, break_hours=[15, 12])
        )
        assert validation.valid is True
        assert updated.work_schedule.break_hours == [12, 15]
        assert therapist.work_schedule is None

    def test_invalid_update_keeps_therapist(self):
        therapist = make_therapist()
        updated, validation = WorkScheduleService.update_work_schedule(
            therapist, WorkSchedule(work_start_hour=4, work_end_hour=12)
        )
        assert validation.valid is False
        assert updated is therapist
