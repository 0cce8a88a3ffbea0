"""Models package - re-exports for convenience."""

from trip_planner.app.models.common import ActivityType, DayState
from trip_planner.app.models.entries import (
    CatalogActivity,
    CityRef,
    EntrySource,
    ItineraryEntry,
    LegacyActivity,
    LinkedActivity,
    NewItineraryEntry,
)
from trip_planner.app.models.itinerary import (
    ActivityDraft,
    ActivityEntry,
    Day,
    LegacyActivityPayload,
)
from trip_planner.app.models.trip import Trip

__all__ = [
    # Common
    "ActivityType",
    "DayState",
    # Trip
    "Trip",
    # Entries
    "CityRef",
    "CatalogActivity",
    "ItineraryEntry",
    "NewItineraryEntry",
    "LinkedActivity",
    "LegacyActivity",
    "EntrySource",
    # Itinerary
    "Day",
    "ActivityEntry",
    "ActivityDraft",
    "LegacyActivityPayload",
]
