"""In-memory implementation of the planner backend protocols."""

import uuid

from trip_planner.app.errors import BackendUnavailableError
from trip_planner.app.models.entries import CatalogActivity, CityRef, ItineraryEntry, NewItineraryEntry
from trip_planner.app.models.itinerary import ActivityDraft
from trip_planner.app.models.trip import Trip
from trip_planner.app.stores.base import SharedItinerary


class InMemoryPlannerBackend:
    """In-memory implementation of PlannerBackend.

    Mirrors the REST backend's behaviour: listings come back sorted by date
    and order index with city and activity references populated, while
    created entries come back unpopulated.
    """

    def __init__(self) -> None:
        self._trips: dict[str, Trip] = {}
        self._cities: dict[str, CityRef] = {}
        self._activities: dict[str, CatalogActivity] = {}
        self._entries: dict[str, ItineraryEntry] = {}
        self._shared: dict[str, str] = {}

    # Seeding helpers

    def add_trip(self, trip: Trip) -> Trip:
        self._trips[trip.id] = trip
        return trip

    def add_city(self, city: CityRef) -> CityRef:
        self._cities[city.id] = city
        return city

    def add_activity(self, activity: CatalogActivity) -> CatalogActivity:
        self._activities[activity.id] = activity
        return activity

    def add_entry(self, entry: ItineraryEntry) -> ItineraryEntry:
        self._entries[entry.id] = entry.model_copy(update={"city": None, "activity": None})
        return entry

    def share_trip(self, trip_id: str, slug: str) -> None:
        self._shared[slug] = trip_id

    @property
    def entry_ids(self) -> list[str]:
        return list(self._entries)

    @property
    def activity_ids(self) -> list[str]:
        return list(self._activities)

    # TripStore

    async def get_trip(self, trip_id: str) -> Trip:
        """Get trip by ID."""
        trip = self._trips.get(trip_id)
        if trip is None:
            raise BackendUnavailableError("get_trip", "Forbidden", status_code=403)
        return trip.model_copy(deep=True)

    async def get_shared_itinerary(self, slug: str) -> SharedItinerary:
        """Get a shared trip and its entries."""
        trip_id = self._shared.get(slug)
        if trip_id is None or trip_id not in self._trips:
            raise BackendUnavailableError("get_shared_itinerary", "Not found", status_code=404)
        return SharedItinerary(
            trip=self._trips[trip_id].model_copy(deep=True),
            entries=await self.list_itinerary(trip_id),
        )

    # ItineraryStore

    def _populate(self, entry: ItineraryEntry) -> ItineraryEntry:
        activity = self._activities.get(entry.activity_id) if entry.activity_id else None
        return entry.model_copy(
            update={
                "city": self._cities.get(entry.city_id),
                "activity": activity,
            },
            deep=True,
        )

    async def list_itinerary(self, trip_id: str) -> list[ItineraryEntry]:
        """List a trip's entries, populated and ordered."""
        if trip_id not in self._trips:
            raise BackendUnavailableError("list_itinerary", "Forbidden", status_code=403)
        entries = [e for e in self._entries.values() if e.trip_id == trip_id]
        entries.sort(key=lambda e: (e.date, e.order_index))
        return [self._populate(e) for e in entries]

    async def create_itinerary_entry(self, new_entry: NewItineraryEntry) -> ItineraryEntry:
        """Create an itinerary entry."""
        if new_entry.trip_id not in self._trips:
            raise BackendUnavailableError("create_itinerary_entry", "Forbidden", status_code=403)
        entry = ItineraryEntry(
            id=uuid.uuid4().hex,
            trip_id=new_entry.trip_id,
            city_id=new_entry.city_id,
            date=new_entry.date,
            activity_id=new_entry.activity_id,
            notes=new_entry.notes,
            order_index=new_entry.order_index,
        )
        self._entries[entry.id] = entry
        return entry.model_copy(deep=True)

    async def delete_itinerary_entry(self, entry_id: str) -> None:
        """Delete an itinerary entry."""
        if entry_id not in self._entries:
            raise BackendUnavailableError("delete_itinerary_entry", "Forbidden", status_code=403)
        del self._entries[entry_id]

    # ActivityCatalog

    async def create_activity(self, city_id: str, draft: ActivityDraft) -> CatalogActivity:
        """Create a catalog activity."""
        activity = CatalogActivity(
            id=uuid.uuid4().hex,
            city_id=city_id,
            name=draft.name,
            type=draft.type,
            cost=draft.cost,
            duration=draft.duration,
            description=draft.description,
        )
        self._activities[activity.id] = activity
        return activity.model_copy(deep=True)

    async def search_activities(
        self,
        city_id: str | None = None,
        activity_type: str | None = None,
        query: str | None = None,
    ) -> list[CatalogActivity]:
        """Search catalog activities, cheapest first."""
        results = list(self._activities.values())
        if city_id:
            results = [a for a in results if a.city_id == city_id]
        if activity_type:
            results = [a for a in results if activity_type.lower() in a.type.value]
        if query:
            results = [a for a in results if query.lower() in a.name.lower()]
        results.sort(key=lambda a: a.cost)
        return [a.model_copy(deep=True) for a in results]
