"""Sentinel for reschedule fields the caller did not supply."""

from typing import Any, TypeVar

T = TypeVar("T")


class MissingType:
    """
    Type for the MISSING sentinel.

    Reschedule requests only change the fields they name. MISSING marks a
    field the caller left out (keep the session's current value), which is
    different from a value that was passed explicitly.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(MissingType, cls).__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MissingType)

    def __hash__(self) -> int:
        return hash("MISSING")

    def __deepcopy__(self, memo: Any):
        return self


MISSING = MissingType()


def resolve(value: Any, current: T) -> T:
    """Return current when value is MISSING, otherwise value."""
    return current if value is MISSING else value
