"""
Unit tests for SlotMatchingService.

Tests candidate slot discovery across days and the best-slot suggestion used
by automated rebooking.
"""

from models import DayAvailability, GameTime, TimePreference
from services.slot_matching_service import SlotMatchingService
from tests.conftest import make_building, make_client, make_session, make_therapist, schedule_with


class TestFindMatchingSlots:
    """Test candidate slot discovery."""

    def test_no_client_uses_every_business_hour(self):
        slots = SlotMatchingService.find_matching_slots({}, make_therapist(), days_to_show=1)
        assert [s.hour for s in slots] == list(range(8, 17))
        assert all(s.is_preferred for s in slots)

    def test_intersects_client_weekday_availability(self):
        client = make_client(availability=DayAvailability(monday=[9, 10, 18], tuesday=[14]))
        slots = SlotMatchingService.find_matching_slots({}, make_therapist(), client, start_day=1, days_to_show=2)
        assert [(s.day, s.hour) for s in slots] == [(1, 9), (1, 10), (2, 14)]

    def test_weekday_cycle_wraps(self):
        client = make_client(availability=DayAvailability(monday=[9]))
        slots = SlotMatchingService.find_matching_slots({}, make_therapist(), client, start_day=1, days_to_show=11)
        assert [s.day for s in slots] == [1, 6, 11]

    def test_booked_and_break_hours_are_excluded(self):
        therapist = make_therapist(break_hours=[12])
        schedule = schedule_with(make_session(hour=9, duration=80))
        slots = SlotMatchingService.find_matching_slots(schedule, therapist, make_client(), days_to_show=1)
        assert [s.hour for s in slots] == [8, 11, 13, 14, 15, 16]

    def test_results_are_chronological_not_preference_ranked(self):
        client = make_client(preferred_time=TimePreference.AFTERNOON)
        slots = SlotMatchingService.find_matching_slots({}, make_therapist(), client, days_to_show=2)
        keys = [(s.day, s.hour) for s in slots]
        assert keys == sorted(keys)
        assert slots[0].hour == 8
        assert slots[0].is_preferred is False
        assert [s.hour for s in slots if s.is_preferred and s.day == 1] == [12, 13, 14, 15]

    def test_duration_limits_late_starts(self):
        slots = SlotMatchingService.find_matching_slots({}, make_therapist(), days_to_show=1, duration_minutes=180)
        assert [s.hour for s in slots] == list(range(8, 15))

    def test_client_availability_for_day(self):
        client = make_client(availability=DayAvailability(wednesday=[10, 11]))
        assert SlotMatchingService.get_client_availability_for_day(client, 3) == [10, 11]
        assert SlotMatchingService.get_client_availability_for_day(client, 4) == []


class TestSuggestSlotForClient:
    """Test best-slot suggestion across therapists."""

    def test_prefers_assigned_therapist(self):
        therapists = [make_therapist("t1"), make_therapist("t2")]
        client = make_client(assigned_therapist_id="t2")
        suggestion = SlotMatchingService.suggest_slot_for_client(
            {}, [], therapists, client, make_building(), False, GameTime(day=1, hour=8)
        )
        assert suggestion.therapist_id == "t2"
        assert (suggestion.day, suggestion.hour) == (1, 8)

    def test_prefers_preferred_slot_over_soonest(self):
        client = make_client(preferred_time=TimePreference.AFTERNOON)
        suggestion = SlotMatchingService.suggest_slot_for_client(
            {}, [], [make_therapist()], client, make_building(), False, GameTime(day=1, hour=8)
        )
        assert (suggestion.day, suggestion.hour) == (1, 12)
        assert suggestion.is_preferred is True

    def test_skips_past_hours(self):
        suggestion = SlotMatchingService.suggest_slot_for_client(
            {}, [], [make_therapist()], make_client(), make_building(), False,
            GameTime(day=1, hour=10, minute=15)
        )
        assert (suggestion.day, suggestion.hour) == (1, 11)

    def test_skips_hours_without_a_room(self):
        sessions = [make_session("other", therapist_id="t9", client_id="c9", hour=8)]
        suggestion = SlotMatchingService.suggest_slot_for_client(
            schedule_with(*sessions), sessions, [make_therapist()], make_client(), make_building(), False,
            GameTime(day=1, hour=8)
        )
        assert suggestion.hour == 9
        assert suggestion.is_virtual is False

    def test_virtual_preference_requires_telehealth(self):
        client = make_client(prefers_virtual=True)
        locked = SlotMatchingService.suggest_slot_for_client(
            {}, [], [make_therapist()], client, make_building(), False, GameTime(day=1, hour=8)
        )
        unlocked = SlotMatchingService.suggest_slot_for_client(
            {}, [], [make_therapist()], client, make_building(), True, GameTime(day=1, hour=8)
        )
        assert locked.is_virtual is False
        assert unlocked.is_virtual is True

    def test_falls_back_to_next_therapist(self):
        busy = make_therapist("t1", work_start_hour=8, work_end_hour=12)
        free = make_therapist("t2")
        client = make_client(availability=DayAvailability(monday=[14]), assigned_therapist_id="t1")
        suggestion = SlotMatchingService.suggest_slot_for_client(
            {}, [], [busy, free], client, make_building(), False, GameTime(day=1, hour=8), days_ahead=1
        )
        assert suggestion.therapist_id == "t2"
        assert suggestion.hour == 14

    def test_none_when_nothing_fits(self):
        client = make_client(availability=DayAvailability())
        suggestion = SlotMatchingService.suggest_slot_for_client(
            {}, [], [make_therapist()], client, make_building(), False, GameTime(day=1, hour=8)
        )
        assert suggestion is None
