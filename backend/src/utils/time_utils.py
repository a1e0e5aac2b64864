"""
Time and calendar utilities for the simulation clock.

All scheduling decisions compare against a GameTime supplied by the caller.
The calendar is a five-day repeating week (day 1 is a Monday) on a whole-hour
grid; weekends do not exist.
"""

import logging
from enum import Enum
from typing import Union

from core.constants import WEEKDAYS, TIME_PREFERENCE_WINDOWS
from models.client import TimePreference
from models.game_time import GameTime
from shared_types.availability import TimeValidation

logger = logging.getLogger(__name__)


class TimeComparison(str, Enum):
    """Ordering of two GameTime values."""

    BEFORE = "before"
    SAME = "same"
    AFTER = "after"


def compare_time(a: GameTime, b: GameTime) -> TimeComparison:
    """
    Compare two game times lexicographically on (day, hour, minute).

    Returns:
        BEFORE if a is earlier than b, AFTER if later, SAME otherwise
    """
    a_key = a.as_tuple()
    b_key = b.as_tuple()
    if a_key < b_key:
        return TimeComparison.BEFORE
    if a_key > b_key:
        return TimeComparison.AFTER
    return TimeComparison.SAME


def validate_not_in_past(now: GameTime, day: int, hour: int) -> TimeValidation:
    """
    Validate that a session starting at (day, hour) is not in the past.

    Sessions start at the top of the hour, so the current hour is bookable
    only while the clock still reads minute 0 of it. Once any time has
    elapsed within the hour it counts as in progress.

    Args:
        now: Current game time
        day: Proposed session day
        hour: Proposed session start hour

    Returns:
        TimeValidation with a reason when the slot is in the past
    """
    if day < now.day:
        return TimeValidation(valid=False, reason="Cannot schedule for a previous day")

    if day == now.day:
        if hour < now.hour:
            return TimeValidation(valid=False, reason="Cannot schedule for a past hour")

        if hour == now.hour and now.minute > 0:
            return TimeValidation(valid=False, reason="Cannot schedule for an hour already in progress")

    return TimeValidation(valid=True)


def weekday_of(day: int) -> str:
    """
    Get the weekday name for a game day (1 = monday, 5 = friday, then repeats).
    """
    return WEEKDAYS[(day - 1) % len(WEEKDAYS)]


def matches_time_preference(hour: int, preference: Union[TimePreference, str]) -> bool:
    """
    Check if an hour falls inside a client's time-of-day preference.

    Windows are inclusive: morning 8-11, afternoon 12-15, evening 16-17.
    'any' (and any unrecognised preference) always matches.
    """
    key = preference.value if isinstance(preference, TimePreference) else str(preference)
    window = TIME_PREFERENCE_WINDOWS.get(key)
    if window is None:
        return True
    start, end = window
    return start <= hour <= end


def _format_clock(hour: int, minute: int = 0) -> str:
    ampm = "PM" if hour >= 12 else "AM"
    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)
    return f"{display_hour}:{minute:02d} {ampm}"


def format_hour(hour: int) -> str:
    """
    Format a grid hour for display.

    Example:
        >>> format_hour(9)
        '9:00 AM'
        >>> format_hour(13)
        '1:00 PM'
    """
    return _format_clock(hour)


def format_time_range(start_hour: int, duration_minutes: int) -> str:
    """
    Format the true (minute-accurate) span of a session starting at start_hour.

    Example:
        >>> format_time_range(9, 80)
        '9:00 AM - 10:20 AM'
    """
    end_minutes = start_hour * 60 + duration_minutes
    return f"{_format_clock(start_hour)} - {_format_clock(end_minutes // 60, end_minutes % 60)}"
