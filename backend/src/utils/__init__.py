"""
Utility modules for the scheduling engine.

This package contains shared helper functions used across the services,
currently the simulation clock and calendar primitives.
"""

from utils.time_utils import (
    TimeComparison,
    compare_time,
    validate_not_in_past,
    weekday_of,
    matches_time_preference,
    format_hour,
    format_time_range,
)

__all__ = [
    'TimeComparison',
    'compare_time',
    'validate_not_in_past',
    'weekday_of',
    'matches_time_preference',
    'format_hour',
    'format_time_range',
]
