"""Shared itinerary endpoint - public, read-only."""

from typing import Annotated

from fastapi import APIRouter, Depends

from trip_planner.app.api.dependencies import get_backend
from trip_planner.app.services.shared import load_shared_itinerary
from trip_planner.app.services.views import ItineraryView
from trip_planner.app.stores.base import PlannerBackend

router = APIRouter(prefix="/shared", tags=["shared"])


@router.get("/{slug}/itinerary", response_model=ItineraryView)
async def get_shared_itinerary(
    slug: str,
    backend: Annotated[PlannerBackend, Depends(get_backend)],
) -> ItineraryView:
    """Projected itinerary of a shared trip."""
    return await load_shared_itinerary(backend, slug)
