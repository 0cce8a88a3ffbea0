"""Itinerary session - one trip's projection plus its mutation operations.

Mutations persist first and re-project second. Local state is only touched
after the backend has confirmed a write, so the projection never shows an
activity the backend does not have.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import date

from trip_planner.app.errors import (
    BackendUnavailableError,
    MalformedEntryError,
    MissingCityError,
    ReorderMismatchError,
    UnknownDayError,
    UnknownEntryError,
)
from trip_planner.app.models.entries import CatalogActivity, CityRef, ItineraryEntry, NewItineraryEntry
from trip_planner.app.models.itinerary import ActivityDraft, ActivityEntry, Day
from trip_planner.app.models.trip import Trip
from trip_planner.app.projection.costs import CostSummary, summarize_costs
from trip_planner.app.projection.merge import project_itinerary
from trip_planner.app.services.notices import Notice, Notifier, log_notice
from trip_planner.app.services.views import ItineraryView
from trip_planner.app.stores.base import PlannerBackend
from trip_planner.app.utils.logging import structured_logger
from trip_planner.app.utils.metrics import metrics

logger = logging.getLogger(__name__)


class ItinerarySession:
    """Day-by-day itinerary state for a single trip view.

    Holds a local mirror of the trip's itinerary entries and the days
    projected from it. Not safe for concurrent mutation; callers await each
    operation before issuing the next.
    """

    def __init__(
        self,
        backend: PlannerBackend,
        trip_id: str,
        *,
        notifier: Notifier = log_notice,
        catalog: Mapping[str, CatalogActivity] | None = None,
    ) -> None:
        self._backend = backend
        self.trip_id = trip_id
        self._notify = notifier
        self._catalog = dict(catalog or {})
        self.trip: Trip | None = None
        self.entries: list[ItineraryEntry] = []
        self.cities: dict[str, CityRef] = {}
        self.days: list[Day] = []
        self.dropped: list[MalformedEntryError] = []

    # Loading and projection

    async def load(self) -> list[Day]:
        """Fetch the trip and its entries, then project them.

        On failure the previously loaded state is kept.

        Raises:
            BackendUnavailableError: If either fetch fails
        """
        try:
            trip = await self._backend.get_trip(self.trip_id)
            entries = await self._backend.list_itinerary(self.trip_id)
        except BackendUnavailableError as e:
            self._notify(Notice("error", "Could not load itinerary", "Please try again."))
            logger.warning(f"Loading trip {self.trip_id} failed: {e}")
            raise

        self.trip = trip
        self.entries = entries
        for entry in entries:
            if entry.city is not None:
                self.cities[entry.city.id] = entry.city
        return self.refresh()

    def refresh(self) -> list[Day]:
        """Re-project the local entry mirror onto the trip's days."""
        if self.trip is None:
            raise RuntimeError("session not loaded")
        self.dropped = []
        self.days = project_itinerary(
            self.trip,
            self.entries,
            catalog=self._catalog,
            on_malformed=self.dropped.append,
        )
        return self.days

    def register_city(self, city: CityRef) -> None:
        """Make a city's name known for locations of newly added activities."""
        self.cities[city.id] = city

    def get_day(self, day: Day | date) -> Day:
        """Current projected day for a Day or calendar date.

        Raises:
            UnknownDayError: If the date is not part of the trip
        """
        target = day.date if isinstance(day, Day) else day
        for candidate in self.days:
            if candidate.date == target:
                return candidate
        raise UnknownDayError(target, self.trip_id)

    def cost_summary(self) -> CostSummary:
        """Cost breakdown of the current projection."""
        return summarize_costs(self.days)

    def view(self) -> ItineraryView:
        """Trip, days and costs of the current projection."""
        if self.trip is None:
            raise RuntimeError("session not loaded")
        return ItineraryView(trip=self.trip, days=self.days, costs=self.cost_summary())

    # Mutations

    async def add_activity(self, day: Day | date, city_id: str | None, draft: ActivityDraft) -> ActivityEntry:
        """Create a catalog activity and schedule it at the end of a day.

        Args:
            day: Day (or its date) to add to
            city_id: City the activity takes place in
            draft: Activity fields entered by the user

        Returns:
            The new activity as projected

        Raises:
            MissingCityError: If no city is selected
            BackendUnavailableError: If either backend write fails
        """
        if not city_id:
            self._notify(Notice("warning", "Select a city", "Choose a city for this day first."))
            metrics.inc_mutation("add_activity", "missing_city")
            raise MissingCityError()

        current = self.get_day(day)
        try:
            activity = await self._backend.create_activity(city_id, draft)
            created = await self._backend.create_itinerary_entry(
                NewItineraryEntry(
                    trip_id=self.trip_id,
                    city_id=city_id,
                    date=current.date,
                    activity_id=activity.id,
                    order_index=len(current.activities),
                    notes=draft.notes,
                )
            )
        except BackendUnavailableError as e:
            self._notify(Notice("error", "Error", "Failed to save activity"))
            metrics.inc_mutation("add_activity", "error")
            structured_logger.log_mutation("add_activity", self.trip_id, "error", error_reason=str(e))
            raise

        # Stored indexes may have gaps after removals; the mirror keeps the new entry last
        last_index = max((e.order_index for e in self.entries if e.date == current.date), default=-1)
        self.entries.append(
            created.model_copy(
                update={
                    "activity": activity,
                    "city": self.cities.get(city_id),
                    "order_index": max(created.order_index, last_index + 1),
                }
            )
        )
        self.refresh()

        metrics.inc_mutation("add_activity", "success")
        structured_logger.log_mutation("add_activity", self.trip_id, "success", entry_id=created.id)
        self._notify(Notice("success", "Activity added", f"{activity.name} was added to day {current.index}"))

        added = next(a for a in self.get_day(current.date).activities if a.id == created.id)
        return added

    async def remove_activity(self, entry_id: str) -> None:
        """Delete an itinerary entry and drop it from its day.

        Args:
            entry_id: Itinerary entry id (the ActivityEntry id), never a
                catalog activity id

        Raises:
            UnknownEntryError: If no mirrored entry has this id
            BackendUnavailableError: If the delete fails; the entry stays
        """
        if not any(e.id == entry_id for e in self.entries):
            raise UnknownEntryError(entry_id)

        try:
            await self._backend.delete_itinerary_entry(entry_id)
        except BackendUnavailableError as e:
            self._notify(Notice("error", "Error", "Failed to remove activity"))
            metrics.inc_mutation("remove_activity", "error")
            structured_logger.log_mutation(
                "remove_activity", self.trip_id, "error", entry_id=entry_id, error_reason=str(e)
            )
            raise

        self.entries = [e for e in self.entries if e.id != entry_id]
        self.refresh()

        metrics.inc_mutation("remove_activity", "success")
        structured_logger.log_mutation("remove_activity", self.trip_id, "success", entry_id=entry_id)

    def reorder_activities(self, day: Day | date, new_order: Sequence[ActivityEntry | str]) -> Day:
        """Apply a drag-reorder to a day.

        Local only: the new order is not sent to the backend and is lost on
        the next load. The mirrored order indexes are rewritten so that
        re-projections within this session keep it.

        Raises:
            ReorderMismatchError: If new_order is not a permutation of the
                day's activities
        """
        current = self.get_day(day)
        ids = [item if isinstance(item, str) else item.id for item in new_order]
        if len(ids) != len(current.activities) or set(ids) != set(current.activity_ids):
            raise ReorderMismatchError(
                f"reorder of day {current.index} must contain exactly its {len(current.activities)} activities"
            )

        position = {entry_id: i for i, entry_id in enumerate(ids)}
        self.entries = [
            e.model_copy(update={"order_index": position[e.id]}) if e.id in position else e
            for e in self.entries
        ]
        self.refresh()

        metrics.inc_mutation("reorder_activities", "success")
        return self.get_day(current.date)
