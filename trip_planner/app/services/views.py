"""Response view of a projected itinerary."""

from pydantic import BaseModel

from trip_planner.app.models.itinerary import Day
from trip_planner.app.models.trip import Trip
from trip_planner.app.projection.costs import CostSummary


class ItineraryView(BaseModel):
    """Trip with its projected days and costs."""

    trip: Trip
    days: list[Day]
    costs: CostSummary
