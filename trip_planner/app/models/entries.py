"""Persisted itinerary entries and catalog references."""

from collections.abc import Mapping
from datetime import date
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

from trip_planner.app.models.common import ActivityType, coerce_activity_type, to_calendar_date


class CityRef(BaseModel):
    """City an activity takes place in."""

    id: str
    name: str
    country: str | None = None


class CatalogActivity(BaseModel):
    """Activity definition from the activity catalog."""

    id: str
    city_id: str | None = None
    name: str
    type: ActivityType = ActivityType.attraction
    cost: float = 0
    duration: float = Field(60, description="Duration in minutes")
    description: str | None = None
    image_url: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def default_unknown_type(cls, v: Any) -> ActivityType:
        """Unknown catalog types fall back to the default type."""
        return coerce_activity_type(v)


class LinkedActivity(BaseModel):
    """Entry backed by a catalog activity."""

    kind: Literal["linked"] = "linked"
    activity: CatalogActivity


class LegacyActivity(BaseModel):
    """Entry whose activity data is serialized as JSON in its notes."""

    kind: Literal["legacy"] = "legacy"
    raw_notes: str | None


EntrySource = Annotated[LinkedActivity | LegacyActivity, Field(discriminator="kind")]


class ItineraryEntry(BaseModel):
    """Persisted itinerary entry mirrored from the itinerary store."""

    id: str
    trip_id: str
    city_id: str
    city: CityRef | None = None
    date: date
    activity_id: str | None = None
    activity: CatalogActivity | None = None
    notes: str | None = None
    order_index: int = 0

    @field_validator("date", mode="before")
    @classmethod
    def truncate_date(cls, v: Any) -> Any:
        """Entries may arrive with full timestamps."""
        return to_calendar_date(v)

    @field_validator("order_index", mode="before")
    @classmethod
    def default_order_index(cls, v: Any) -> Any:
        """Missing order index sorts as 0."""
        return 0 if v is None else v

    def resolve_source(self, catalog: Mapping[str, CatalogActivity] | None = None) -> EntrySource:
        """Resolve which representation carries this entry's activity data.

        A populated activity wins. An unpopulated activity_id is looked up in
        the optional catalog; anything unresolved is treated as legacy.
        """
        if self.activity is not None:
            return LinkedActivity(activity=self.activity)
        if self.activity_id and catalog and self.activity_id in catalog:
            return LinkedActivity(activity=catalog[self.activity_id])
        return LegacyActivity(raw_notes=self.notes)


class NewItineraryEntry(BaseModel):
    """Payload for creating an itinerary entry."""

    trip_id: str
    city_id: str
    date: date
    activity_id: str
    order_index: int = Field(..., ge=0)
    notes: str | None = None
