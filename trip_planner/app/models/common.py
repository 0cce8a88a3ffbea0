"""Common types and helpers shared across all models."""

from datetime import date, datetime
from enum import Enum
from typing import Any


class ActivityType(str, Enum):
    """Type of itinerary activity."""

    attraction = "attraction"
    restaurant = "restaurant"
    hotel = "hotel"
    transport = "transport"
    activity = "activity"


DEFAULT_ACTIVITY_TYPE = ActivityType.attraction


class DayState(str, Enum):
    """Derived state of a single trip day."""

    empty = "empty"
    populated = "populated"


def coerce_activity_type(value: Any) -> ActivityType:
    """Map a raw type value onto ActivityType, defaulting unknown values."""
    if isinstance(value, ActivityType):
        return value
    if isinstance(value, str):
        try:
            return ActivityType(value.strip().lower())
        except ValueError:
            return DEFAULT_ACTIVITY_TYPE
    return DEFAULT_ACTIVITY_TYPE


def to_calendar_date(value: Any) -> Any:
    """Truncate a date, datetime or ISO string to its calendar date.

    The date is taken as written; timestamps are not converted between
    timezones, so "2025-06-01T23:30:00-05:00" stays on 2025-06-01.
    Values of any other type are returned unchanged for pydantic to reject.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        return date.fromisoformat(value[:10])
    return value
