"""Backend collaborator protocol interfaces."""

from dataclasses import dataclass
from typing import Any, Protocol

from trip_planner.app.models.entries import CatalogActivity, ItineraryEntry, NewItineraryEntry
from trip_planner.app.models.itinerary import ActivityDraft
from trip_planner.app.models.trip import Trip


@dataclass
class SharedItinerary:
    """Publicly shared trip with its itinerary entries."""

    trip: Trip
    entries: list[ItineraryEntry]
    budget: dict[str, Any] | None = None


class TripStore(Protocol):
    """Read access to trip metadata."""

    async def get_trip(self, trip_id: str) -> Trip:
        """Get trip by ID.

        Args:
            trip_id: Trip ID

        Returns:
            Trip metadata

        Raises:
            BackendUnavailableError: On transport failure, or when the trip
                is missing or not accessible (status_code 403/404)
        """
        ...

    async def get_shared_itinerary(self, slug: str) -> SharedItinerary:
        """Get a publicly shared trip and its entries by share slug."""
        ...


class ItineraryStore(Protocol):
    """Itinerary entry persistence."""

    async def list_itinerary(self, trip_id: str) -> list[ItineraryEntry]:
        """List a trip's entries, ordered by date then order index.

        City and activity references are populated when available.
        """
        ...

    async def create_itinerary_entry(self, new_entry: NewItineraryEntry) -> ItineraryEntry:
        """Create an itinerary entry.

        Returns:
            The stored entry with its backend ID (references not populated)
        """
        ...

    async def delete_itinerary_entry(self, entry_id: str) -> None:
        """Delete an itinerary entry by its ID."""
        ...


class ActivityCatalog(Protocol):
    """Activity catalog access."""

    async def create_activity(self, city_id: str, draft: ActivityDraft) -> CatalogActivity:
        """Create a catalog activity in a city from a draft."""
        ...

    async def search_activities(
        self,
        city_id: str | None = None,
        activity_type: str | None = None,
        query: str | None = None,
    ) -> list[CatalogActivity]:
        """Search catalog activities, cheapest first."""
        ...


class PlannerBackend(TripStore, ItineraryStore, ActivityCatalog, Protocol):
    """All backend collaborators used by an itinerary session."""
