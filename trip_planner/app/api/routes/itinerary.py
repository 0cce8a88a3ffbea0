"""Itinerary endpoints - projected days plus add/remove of activities."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from trip_planner.app.api.dependencies import get_backend
from trip_planner.app.models.itinerary import ActivityDraft, ActivityEntry
from trip_planner.app.services.itinerary_session import ItinerarySession
from trip_planner.app.services.notices import Notice
from trip_planner.app.services.views import ItineraryView
from trip_planner.app.stores.base import PlannerBackend

router = APIRouter(prefix="/trips/{trip_id}/itinerary", tags=["itinerary"])


def _discard_notice(notice: Notice) -> None:
    """Errors reach HTTP clients through the exception handlers."""


class AddActivityRequest(BaseModel):
    """Request body for POST /trips/{trip_id}/itinerary/{day_date}/activities."""

    city_id: str | None = None
    draft: ActivityDraft


async def _load_session(trip_id: str, backend: PlannerBackend) -> ItinerarySession:
    session = ItinerarySession(backend, trip_id, notifier=_discard_notice)
    await session.load()
    return session


@router.get("", response_model=ItineraryView)
async def get_itinerary(
    trip_id: str,
    backend: Annotated[PlannerBackend, Depends(get_backend)],
) -> ItineraryView:
    """Trip with its day-by-day itinerary and cost summary."""
    session = await _load_session(trip_id, backend)
    return session.view()


@router.post(
    "/{day_date}/activities",
    response_model=ActivityEntry,
    status_code=status.HTTP_201_CREATED,
)
async def add_activity(
    trip_id: str,
    day_date: date,
    request: AddActivityRequest,
    backend: Annotated[PlannerBackend, Depends(get_backend)],
) -> ActivityEntry:
    """Create a catalog activity and append it to a day.

    Returns:
        The added activity; its id is the new itinerary entry id
    """
    session = await _load_session(trip_id, backend)
    return await session.add_activity(day_date, request.city_id, request.draft)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_activity(
    trip_id: str,
    entry_id: str,
    backend: Annotated[PlannerBackend, Depends(get_backend)],
) -> Response:
    """Remove an itinerary entry by its id."""
    session = await _load_session(trip_id, backend)
    await session.remove_activity(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
