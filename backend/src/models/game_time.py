"""
Game clock value used for every time comparison in the scheduling engine.

The simulation clock is supplied by the caller (the day-advance driver); the
engine never reads a live clock of its own.
"""

from pydantic import BaseModel, ConfigDict, Field


class GameTime(BaseModel):
    """A point on the simulation clock, totally ordered by (day, hour, minute)."""

    model_config = ConfigDict(frozen=True)

    day: int = Field(ge=1)
    """Simulation day, starting at 1."""

    hour: int = Field(ge=0, le=23)
    """Hour of the day (0-23)."""

    minute: int = Field(default=0, ge=0, le=59)
    """Minute within the hour (0-59)."""

    def as_tuple(self) -> tuple[int, int, int]:
        """Sort key for lexicographic ordering."""
        return (self.day, self.hour, self.minute)
