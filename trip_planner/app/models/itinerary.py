"""Itinerary view models - the day-by-day projection rendered by the UI."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from trip_planner.app.models.common import ActivityType, DayState, coerce_activity_type


class ActivityEntry(BaseModel):
    """Single activity as displayed within a day.

    id is the owning itinerary entry's id, not the catalog activity id.
    """

    id: str
    title: str
    type: ActivityType
    time: str
    location: str
    duration: str
    notes: str | None = None
    cost: float = 0


class Day(BaseModel):
    """One calendar day of a trip with its ordered activities."""

    index: int = Field(..., ge=1, description="1-based position within the trip")
    date: date
    activities: list[ActivityEntry] = Field(default_factory=list)

    @property
    def state(self) -> DayState:
        """Empty or populated."""
        return DayState.populated if self.activities else DayState.empty

    @property
    def activity_ids(self) -> list[str]:
        return [a.id for a in self.activities]


class ActivityDraft(BaseModel):
    """User-entered fields for a new catalog activity."""

    name: str = Field(..., min_length=1, max_length=200)
    type: ActivityType = ActivityType.attraction
    cost: float = Field(0, ge=0)
    duration: int = Field(60, gt=0, description="Duration in minutes")
    description: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Ensure the activity has a title."""
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class LegacyActivityPayload(BaseModel):
    """Activity data serialized into an entry's notes by older clients."""

    title: str = "Activity"
    type: ActivityType = ActivityType.attraction
    time: str = "12:00"
    location: str | None = None
    duration: str | int | float = "1 hour"
    notes: str | None = None
    cost: float = 0

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        """Null fields take their defaults."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("type", mode="before")
    @classmethod
    def default_unknown_type(cls, v: Any) -> ActivityType:
        """Unknown legacy types fall back to the default type."""
        return coerce_activity_type(v)

    @field_validator("cost", mode="before")
    @classmethod
    def default_missing_cost(cls, v: Any) -> Any:
        """Older clients wrote an empty string for no cost."""
        return 0 if v == "" else v
