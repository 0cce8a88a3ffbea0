"""Tests for itinerary session mutations."""

import itertools
from datetime import date

import pytest

from trip_planner.app.errors import (
    BackendUnavailableError,
    MissingCityError,
    ReorderMismatchError,
    UnknownDayError,
    UnknownEntryError,
)
from trip_planner.app.models import ActivityDraft, ActivityType, CatalogActivity, CityRef, DayState, ItineraryEntry
from trip_planner.app.models.entries import NewItineraryEntry
from trip_planner.app.services.itinerary_session import ItinerarySession
from trip_planner.app.services.notices import Notice
from trip_planner.app.stores.inmemory import InMemoryPlannerBackend

JUNE_1 = date(2025, 6, 1)
JUNE_2 = date(2025, 6, 2)


class FailingEntryBackend(InMemoryPlannerBackend):
    """Backend whose itinerary writes fail after the catalog write succeeds."""

    async def create_itinerary_entry(self, new_entry: NewItineraryEntry) -> ItineraryEntry:
        raise BackendUnavailableError("create_itinerary_entry", "boom", status_code=500)

    async def delete_itinerary_entry(self, entry_id: str) -> None:
        raise BackendUnavailableError("delete_itinerary_entry", "boom", status_code=500)


def copy_into(source: InMemoryPlannerBackend, target: InMemoryPlannerBackend) -> InMemoryPlannerBackend:
    """Copy the seeded state of one backend into another."""
    target._trips = dict(source._trips)
    target._cities = dict(source._cities)
    target._activities = dict(source._activities)
    target._entries = dict(source._entries)
    return target


@pytest.fixture
def notices() -> list[Notice]:
    return []


@pytest.fixture
def draft() -> ActivityDraft:
    return ActivityDraft(name="Seine Cruise", type=ActivityType.activity, cost=15, duration=75)


@pytest.mark.asyncio
async def test_load_projects_backend_entries(backend: InMemoryPlannerBackend, notices: list[Notice]) -> None:
    """Test that load builds three days with the seeded activities on day 1."""
    session = ItinerarySession(backend, "trip-1", notifier=notices.append)

    days = await session.load()

    assert [d.date for d in days] == [JUNE_1, JUNE_2, date(2025, 6, 3)]
    assert days[0].activity_ids == ["entry-louvre", "entry-bistro"]
    assert days[0].activities[0].location == "Paris"
    assert days[0].activities[1].duration == "90 minutes"
    assert session.cities["city-paris"].name == "Paris"
    assert notices == []


@pytest.mark.asyncio
async def test_load_failure_keeps_previous_state(backend: InMemoryPlannerBackend, notices: list[Notice]) -> None:
    """Test that a failed reload leaves prior state intact and notifies."""
    session = ItinerarySession(backend, "trip-1", notifier=notices.append)
    await session.load()
    before = session.days

    session.trip_id = "trip-missing"
    with pytest.raises(BackendUnavailableError):
        await session.load()

    assert session.days == before
    assert notices[-1].level == "error"


@pytest.mark.asyncio
async def test_add_activity_appends_to_day(
    backend: InMemoryPlannerBackend, draft: ActivityDraft, notices: list[Notice]
) -> None:
    """Test that add persists catalog activity and entry, then appends."""
    session = ItinerarySession(backend, "trip-1", notifier=notices.append)
    await session.load()

    added = await session.add_activity(session.days[0], "city-paris", draft.model_copy(update={"notes": "Sunset"}))

    day = session.get_day(JUNE_1)
    assert day.activity_ids == ["entry-louvre", "entry-bistro", added.id]
    assert added.id in backend.entry_ids
    assert added.title == "Seine Cruise"
    assert added.type == ActivityType.activity
    assert added.duration == "75 minutes"
    assert added.location == "Paris"
    assert added.notes == "Sunset"
    assert added.time == "12:00"
    assert notices[-1].level == "success"

    # The new entry survives a full reload from the backend
    reloaded = ItinerarySession(backend, "trip-1", notifier=notices.append)
    await reloaded.load()
    assert reloaded.get_day(JUNE_1).activity_ids == day.activity_ids


@pytest.mark.asyncio
async def test_add_uses_day_length_as_order_index(backend: InMemoryPlannerBackend, draft: ActivityDraft) -> None:
    """Test that the new entry's order index equals the day's activity count."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    added = await session.add_activity(JUNE_2, "city-paris", draft)

    mirrored = next(e for e in session.entries if e.id == added.id)
    assert mirrored.order_index == 0
    assert mirrored.date == JUNE_2


@pytest.mark.asyncio
async def test_add_after_removals_lands_last(backend: InMemoryPlannerBackend, draft: ActivityDraft) -> None:
    """Test that an added activity displays last when stored indexes have gaps."""
    for i, order_index in enumerate((2, 3)):
        activity = backend.add_activity(CatalogActivity(id=f"act-{i}", city_id="city-paris", name=f"Stop {i}"))
        backend.add_entry(
            ItineraryEntry(
                id=f"e{i}",
                trip_id="trip-1",
                city_id="city-paris",
                date=JUNE_1,
                activity_id=activity.id,
                order_index=order_index,
            )
        )
    session = ItinerarySession(backend, "trip-1")
    await session.load()
    assert session.get_day(JUNE_1).activity_ids == ["entry-louvre", "entry-bistro", "e0", "e1"]

    await session.remove_activity("entry-louvre")
    await session.remove_activity("entry-bistro")
    added = await session.add_activity(JUNE_1, "city-paris", draft)

    assert session.get_day(JUNE_1).activity_ids == ["e0", "e1", added.id]
    # The backend still receives the day's length as the order index
    assert backend._entries[added.id].order_index == 2

    session.refresh()
    assert session.get_day(JUNE_1).activity_ids[-1] == added.id


@pytest.mark.asyncio
async def test_add_without_city_is_rejected_locally(
    backend: InMemoryPlannerBackend, draft: ActivityDraft, notices: list[Notice]
) -> None:
    """Test that a missing city raises before anything is sent."""
    session = ItinerarySession(backend, "trip-1", notifier=notices.append)
    await session.load()
    activities_before = backend.activity_ids

    with pytest.raises(MissingCityError):
        await session.add_activity(JUNE_1, None, draft)

    assert backend.activity_ids == activities_before
    assert notices[-1].level == "warning"


@pytest.mark.asyncio
async def test_add_failure_leaves_local_state_untouched(
    backend: InMemoryPlannerBackend, draft: ActivityDraft, notices: list[Notice]
) -> None:
    """Test that a failed entry write does not leave a local orphan."""
    failing = copy_into(backend, FailingEntryBackend())
    session = ItinerarySession(failing, "trip-1", notifier=notices.append)
    await session.load()
    days_before = session.days
    entries_before = list(session.entries)

    with pytest.raises(BackendUnavailableError):
        await session.add_activity(JUNE_1, "city-paris", draft)

    assert session.days == days_before
    assert session.entries == entries_before
    assert notices[-1] == Notice("error", "Error", "Failed to save activity")


@pytest.mark.asyncio
async def test_add_to_date_outside_trip_raises(backend: InMemoryPlannerBackend, draft: ActivityDraft) -> None:
    """Test that adding to a non-trip date is rejected."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    with pytest.raises(UnknownDayError) as exc_info:
        await session.add_activity(date(2025, 7, 1), "city-paris", draft)

    assert exc_info.value.day == date(2025, 7, 1)
    assert exc_info.value.trip_id == "trip-1"


@pytest.mark.asyncio
async def test_add_then_remove_restores_day(backend: InMemoryPlannerBackend, draft: ActivityDraft) -> None:
    """Test that remove(add(...).id) returns the day to its prior state."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()
    before = session.get_day(JUNE_1)

    added = await session.add_activity(JUNE_1, "city-paris", draft)
    await session.remove_activity(added.id)

    assert session.get_day(JUNE_1) == before
    assert added.id not in backend.entry_ids


@pytest.mark.asyncio
async def test_remove_last_activity_empties_day(backend: InMemoryPlannerBackend) -> None:
    """Test the populated -> empty transition."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()
    assert session.get_day(JUNE_1).state == DayState.populated

    await session.remove_activity("entry-louvre")
    assert session.get_day(JUNE_1).state == DayState.populated

    await session.remove_activity("entry-bistro")
    assert session.get_day(JUNE_1).state == DayState.empty


@pytest.mark.asyncio
async def test_remove_requires_entry_id_not_catalog_id(backend: InMemoryPlannerBackend) -> None:
    """Test that a catalog activity id is not accepted for deletion."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    with pytest.raises(UnknownEntryError):
        await session.remove_activity("act-louvre")

    assert "entry-louvre" in backend.entry_ids


@pytest.mark.asyncio
async def test_remove_failure_keeps_entry_visible(backend: InMemoryPlannerBackend, notices: list[Notice]) -> None:
    """Test that a failed delete does not remove the activity locally."""
    failing = copy_into(backend, FailingEntryBackend())
    session = ItinerarySession(failing, "trip-1", notifier=notices.append)
    await session.load()

    with pytest.raises(BackendUnavailableError):
        await session.remove_activity("entry-louvre")

    assert "entry-louvre" in session.get_day(JUNE_1).activity_ids
    assert notices[-1].level == "error"


@pytest.mark.asyncio
async def test_every_permutation_reorders_exactly(backend: InMemoryPlannerBackend, draft: ActivityDraft) -> None:
    """Test that any permutation becomes the day's order and keeps the id set."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()
    await session.add_activity(JUNE_1, "city-paris", draft)
    original = session.get_day(JUNE_1).activities

    for permutation in itertools.permutations(original):
        day = session.reorder_activities(JUNE_1, list(permutation))
        assert day.activities == list(permutation)
        assert set(day.activity_ids) == {a.id for a in original}


@pytest.mark.asyncio
async def test_reorder_survives_reprojection_but_not_reload(
    backend: InMemoryPlannerBackend, draft: ActivityDraft
) -> None:
    """Test that reorder is local: kept on refresh, lost on reload."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    session.reorder_activities(JUNE_1, ["entry-bistro", "entry-louvre"])
    added = await session.add_activity(JUNE_1, "city-paris", draft)

    assert session.get_day(JUNE_1).activity_ids == ["entry-bistro", "entry-louvre", added.id]

    await session.load()
    assert session.get_day(JUNE_1).activity_ids == ["entry-louvre", "entry-bistro", added.id]


@pytest.mark.asyncio
async def test_reorder_rejects_changed_set(backend: InMemoryPlannerBackend) -> None:
    """Test that a reorder adding or dropping ids is rejected."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    with pytest.raises(ReorderMismatchError):
        session.reorder_activities(JUNE_1, ["entry-louvre"])
    with pytest.raises(ReorderMismatchError):
        session.reorder_activities(JUNE_1, ["entry-louvre", "entry-louvre"])
    with pytest.raises(ReorderMismatchError):
        session.reorder_activities(JUNE_1, ["entry-louvre", "entry-other"])

    assert session.get_day(JUNE_1).activity_ids == ["entry-louvre", "entry-bistro"]


@pytest.mark.asyncio
async def test_added_activity_in_unknown_city_gets_placeholder_location(
    backend: InMemoryPlannerBackend, draft: ActivityDraft
) -> None:
    """Test that an unregistered city shows the placeholder until registered."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    added = await session.add_activity(JUNE_2, "city-lyon", draft)
    assert added.location == "Unknown Location"

    session.register_city(CityRef(id="city-lyon", name="Lyon"))
    again = await session.add_activity(JUNE_2, "city-lyon", draft)
    assert again.location == "Lyon"


@pytest.mark.asyncio
async def test_malformed_entries_are_collected(backend: InMemoryPlannerBackend) -> None:
    """Test that dropped entries are exposed on the session."""
    backend.add_entry(
        ItineraryEntry(
            id="entry-legacy-bad",
            trip_id="trip-1",
            city_id="city-paris",
            date=JUNE_2,
            notes="not json",
        )
    )
    session = ItinerarySession(backend, "trip-1")

    await session.load()

    assert [e.entry_id for e in session.dropped] == ["entry-legacy-bad"]
    assert session.get_day(JUNE_2).activities == []
    assert session.get_day(JUNE_1).state == DayState.populated


@pytest.mark.asyncio
async def test_cost_summary_reflects_projection(backend: InMemoryPlannerBackend) -> None:
    """Test that the session cost summary sums the loaded activities."""
    session = ItinerarySession(backend, "trip-1")
    await session.load()

    summary = session.cost_summary()

    assert summary.total == 57
    assert summary.by_day[0].total == 57
    assert summary.by_type == {ActivityType.attraction: 22, ActivityType.restaurant: 35}
