"""Scheduling constants that are fixed by the simulation rules."""

from typing import Dict, Tuple

# Session durations (minutes) supported by the booking grid
SESSION_DURATIONS = (50, 80, 180)
DEFAULT_SESSION_DURATION = 50

# Payment multipliers applied to the client's base session rate
DURATION_PAYMENT_MULTIPLIERS: Dict[int, float] = {
    50: 1.0,
    80: 1.5,  # Extended session
    180: 3.0,  # Intensive session
}

# Base energy cost per duration tier, reduced by therapist level
BASE_ENERGY_COST: Dict[int, int] = {
    50: 15,
    80: 25,
    180: 50,
}
MAX_THERAPIST_LEVEL = 50
ENERGY_REDUCTION_PER_LEVEL = 0.01
MIN_ENERGY_MODIFIER = 0.5

# Neutral starting quality for a newly booked session
INITIAL_SESSION_QUALITY = 0.5

# Five-day week: game day 1 is a Monday, weekends do not exist
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")

# Inclusive hour windows for client time-of-day preferences
TIME_PREFERENCE_WINDOWS: Dict[str, Tuple[int, int]] = {
    "morning": (8, 11),
    "afternoon": (12, 15),
    "evening": (16, 17),
}

# Work schedule validation bounds
EARLIEST_WORK_START_HOUR = 6  # 6am
LATEST_WORK_END_HOUR = 22  # 10pm
MIN_WORK_DAY_HOURS = 4
MAX_BREAKS_PER_DAY = 3
MIN_NET_WORKING_HOURS = 3
