"""Trip models - read-only trip metadata."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from trip_planner.app.models.common import to_calendar_date


class Trip(BaseModel):
    """Trip metadata as exposed by the trip store.

    start_date > end_date is accepted here; the day skeleton treats such a
    trip as having no days.
    """

    id: str
    title: str = ""
    destination: str = ""
    description: str | None = None
    start_date: date
    end_date: date
    travelers: int = Field(1, ge=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def truncate_dates(cls, v: Any) -> Any:
        """Drop any time component sent by the backend."""
        return to_calendar_date(v)
