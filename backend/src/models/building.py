"""
Building model (capacity-relevant subset).

In-person sessions each need a room for every hour they cover; telehealth
sessions need none.
"""

from pydantic import BaseModel, Field


class Building(BaseModel):
    """The practice's office building."""

    id: str = "starter_suite"
    name: str = "Starter Suite"

    rooms: int = Field(default=1, ge=0)
    """Number of therapy rooms available each hour."""
