"""Entry merge - overlay persisted itinerary entries onto the day skeleton.

Every presentation surface (builder, view, calendar, shared page) renders
the output of project_itinerary, so date matching, ordering and the legacy
notes fallback live here only.
"""

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date

from pydantic import ValidationError

from trip_planner.app.errors import MalformedEntryError
from trip_planner.app.models.entries import (
    CatalogActivity,
    ItineraryEntry,
    LegacyActivity,
    LinkedActivity,
)
from trip_planner.app.models.itinerary import ActivityEntry, Day, LegacyActivityPayload
from trip_planner.app.models.trip import Trip
from trip_planner.app.projection.skeleton import build_trip_skeleton
from trip_planner.app.utils.logging import structured_logger
from trip_planner.app.utils.metrics import metrics

logger = logging.getLogger(__name__)

# The catalog has no time-of-day field
DEFAULT_ACTIVITY_TIME = "12:00"
UNKNOWN_LOCATION = "Unknown Location"

MalformedHandler = Callable[[MalformedEntryError], None]


def format_duration(minutes: int | float) -> str:
    """Format a duration in minutes for display."""
    if isinstance(minutes, float) and minutes.is_integer():
        minutes = int(minutes)
    return f"{minutes} minutes"


def _linked_activity_entry(entry: ItineraryEntry, activity: CatalogActivity) -> ActivityEntry:
    return ActivityEntry(
        id=entry.id,
        title=activity.name,
        type=activity.type,
        time=DEFAULT_ACTIVITY_TIME,
        location=entry.city.name if entry.city else UNKNOWN_LOCATION,
        duration=format_duration(activity.duration),
        notes=entry.notes or activity.description,
        cost=activity.cost,
    )


def parse_legacy_notes(entry_id: str, raw_notes: str | None) -> LegacyActivityPayload:
    """Parse activity data serialized into an entry's notes.

    Raises:
        MalformedEntryError: If notes are empty, not JSON, not a JSON object,
            or carry fields of the wrong type
    """
    if not raw_notes or not raw_notes.strip():
        raise MalformedEntryError(entry_id, "no activity reference and empty notes")

    try:
        data = json.loads(raw_notes)
    except json.JSONDecodeError as e:
        raise MalformedEntryError(entry_id, f"notes are not valid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise MalformedEntryError(entry_id, f"notes JSON is a {type(data).__name__}, expected an object")

    try:
        return LegacyActivityPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedEntryError(entry_id, f"notes JSON has invalid fields ({e.error_count()} errors)") from e


def _legacy_activity_entry(entry: ItineraryEntry, raw_notes: str | None) -> ActivityEntry:
    payload = parse_legacy_notes(entry.id, raw_notes)

    duration = payload.duration
    if isinstance(duration, (int, float)):
        duration = format_duration(duration)

    return ActivityEntry(
        id=entry.id,
        title=payload.title,
        type=payload.type,
        time=payload.time or DEFAULT_ACTIVITY_TIME,
        location=payload.location or UNKNOWN_LOCATION,
        duration=duration,
        notes=payload.notes,
        cost=payload.cost,
    )


def to_activity_entry(
    entry: ItineraryEntry,
    catalog: Mapping[str, CatalogActivity] | None = None,
) -> ActivityEntry:
    """Map one itinerary entry to its display model.

    Raises:
        MalformedEntryError: If a legacy entry's notes cannot be parsed
    """
    source = entry.resolve_source(catalog)
    if isinstance(source, LinkedActivity):
        return _linked_activity_entry(entry, source.activity)
    if isinstance(source, LegacyActivity):
        return _legacy_activity_entry(entry, source.raw_notes)
    raise TypeError(f"unsupported entry source: {source!r}")


def merge_entries(
    skeleton: Iterable[Day],
    entries: Iterable[ItineraryEntry],
    *,
    catalog: Mapping[str, CatalogActivity] | None = None,
    on_malformed: MalformedHandler | None = None,
) -> list[Day]:
    """Overlay itinerary entries onto a day skeleton.

    This is a pure function over its inputs: the skeleton days are never
    mutated and new Day objects are returned.

    Args:
        skeleton: Days produced by build_day_skeleton
        entries: Persisted entries, in backend order
        catalog: Optional catalog activities by id, for unpopulated references
        on_malformed: Called once per dropped legacy entry

    Returns:
        Days with activities sorted by order_index (ties keep input order)
    """
    by_date: dict[date, list[ItineraryEntry]] = {}
    for entry in entries:
        by_date.setdefault(entry.date, []).append(entry)

    days: list[Day] = []
    matched_dates: set[date] = set()
    for day in skeleton:
        day_entries = by_date.get(day.date, [])
        matched_dates.add(day.date)

        # sorted() is stable, equal order_index keeps input order
        activities: list[ActivityEntry] = []
        for entry in sorted(day_entries, key=lambda e: e.order_index):
            try:
                activities.append(to_activity_entry(entry, catalog))
            except MalformedEntryError as e:
                structured_logger.log_dropped_entry(e.entry_id, e.reason)
                metrics.inc_dropped("malformed")
                if on_malformed is not None:
                    on_malformed(e)

        days.append(day.model_copy(update={"activities": activities}))

    for outside in sorted(set(by_date) - matched_dates):
        logger.debug(f"{len(by_date[outside])} itinerary entries dated {outside} fall outside the trip")

    return days


def project_itinerary(
    trip: Trip,
    entries: Iterable[ItineraryEntry],
    *,
    catalog: Mapping[str, CatalogActivity] | None = None,
    on_malformed: MalformedHandler | None = None,
) -> list[Day]:
    """Build the trip's day skeleton and merge its entries onto it."""
    return merge_entries(
        build_trip_skeleton(trip),
        entries,
        catalog=catalog,
        on_malformed=on_malformed,
    )
