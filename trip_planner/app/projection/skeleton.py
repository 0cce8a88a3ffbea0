"""Day-skeleton generation from trip bounds."""

from datetime import date, datetime, timedelta

from trip_planner.app.models.itinerary import Day
from trip_planner.app.models.trip import Trip


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def build_day_skeleton(start: date | datetime, end: date | datetime) -> list[Day]:
    """Build one empty Day per calendar date in [start, end].

    Pure function; identical inputs always give the same days in ascending
    date order. A reversed range yields no days rather than an error.

    Args:
        start: First trip date (any time component is dropped)
        end: Last trip date, inclusive

    Returns:
        Empty days with 1-based index
    """
    cursor = _as_date(start)
    last = _as_date(end)

    days: list[Day] = []
    index = 1
    while cursor <= last:
        days.append(Day(index=index, date=cursor))
        cursor += timedelta(days=1)
        index += 1

    return days


def build_trip_skeleton(trip: Trip) -> list[Day]:
    """Build the empty day skeleton for a trip."""
    return build_day_skeleton(trip.start_date, trip.end_date)
