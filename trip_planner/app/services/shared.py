"""Read-only projection of publicly shared itineraries."""

from trip_planner.app.projection.costs import summarize_costs
from trip_planner.app.projection.merge import project_itinerary
from trip_planner.app.services.views import ItineraryView
from trip_planner.app.stores.base import TripStore


async def load_shared_itinerary(store: TripStore, slug: str) -> ItineraryView:
    """Project a shared trip's itinerary.

    Raises:
        BackendUnavailableError: If the share link is unknown or the backend fails
    """
    shared = await store.get_shared_itinerary(slug)
    days = project_itinerary(shared.trip, shared.entries)
    return ItineraryView(trip=shared.trip, days=days, costs=summarize_costs(days))
