"""Cost summary over a projected itinerary."""

from collections.abc import Iterable
from datetime import date

from pydantic import BaseModel

from trip_planner.app.models.common import ActivityType
from trip_planner.app.models.itinerary import Day


class DayCost(BaseModel):
    """Total activity cost for one day."""

    index: int
    date: date
    total: float


class CostSummary(BaseModel):
    """Cost breakdown by day and by activity type."""

    by_day: list[DayCost]
    by_type: dict[ActivityType, float]
    total: float


def day_total(day: Day) -> float:
    """Sum of activity costs for a day."""
    return sum(a.cost for a in day.activities)


def summarize_costs(days: Iterable[Day]) -> CostSummary:
    """Summarize activity costs of projected days.

    Types without activities are omitted from by_type.
    """
    by_day: list[DayCost] = []
    by_type: dict[ActivityType, float] = {}

    for day in days:
        by_day.append(DayCost(index=day.index, date=day.date, total=day_total(day)))
        for activity in day.activities:
            by_type[activity.type] = by_type.get(activity.type, 0) + activity.cost

    return CostSummary(
        by_day=by_day,
        by_type=by_type,
        total=sum(d.total for d in by_day),
    )
