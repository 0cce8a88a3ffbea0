"""Shared pytest fixtures for all test suites."""

from datetime import date

import pytest

from trip_planner.app.models import CatalogActivity, CityRef, ItineraryEntry, Trip
from trip_planner.app.models.common import ActivityType
from trip_planner.app.stores.inmemory import InMemoryPlannerBackend

TRIP_ID = "trip-1"
PARIS = CityRef(id="city-paris", name="Paris", country="France")


def _make_entry(
    entry_id: str,
    day: date,
    order_index: int = 0,
    *,
    activity: CatalogActivity | None = None,
    notes: str | None = None,
    city: CityRef | None = PARIS,
) -> ItineraryEntry:
    """Helper to create an itinerary entry, populated like a backend listing."""
    return ItineraryEntry(
        id=entry_id,
        trip_id=TRIP_ID,
        city_id=city.id if city else "city-missing",
        city=city,
        date=day,
        activity_id=activity.id if activity else None,
        activity=activity,
        notes=notes,
        order_index=order_index,
    )


def _make_activity(
    activity_id: str,
    name: str,
    *,
    type: ActivityType = ActivityType.attraction,
    cost: float = 0,
    duration: int = 60,
    description: str | None = None,
) -> CatalogActivity:
    """Helper to create a catalog activity in Paris."""
    return CatalogActivity(
        id=activity_id,
        city_id=PARIS.id,
        name=name,
        type=type,
        cost=cost,
        duration=duration,
        description=description,
    )


@pytest.fixture
def trip() -> Trip:
    """Three-day trip, 2025-06-01 to 2025-06-03."""
    return Trip(
        id=TRIP_ID,
        title="Paris Long Weekend",
        destination="Paris",
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 3),
    )


@pytest.fixture
def backend(trip: Trip) -> InMemoryPlannerBackend:
    """In-memory backend seeded with the trip, Paris and two scheduled activities."""
    store = InMemoryPlannerBackend()
    store.add_trip(trip)
    store.add_city(PARIS)
    louvre = store.add_activity(_make_activity("act-louvre", "Louvre", cost=22, duration=180))
    bistro = store.add_activity(
        _make_activity("act-bistro", "Bistro Lunch", type=ActivityType.restaurant, cost=35, duration=90)
    )
    store.add_entry(_make_entry("entry-louvre", date(2025, 6, 1), 0, activity=louvre))
    store.add_entry(_make_entry("entry-bistro", date(2025, 6, 1), 1, activity=bistro))
    return store
