"""Activity catalog search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from trip_planner.app.api.dependencies import get_backend
from trip_planner.app.models.entries import CatalogActivity
from trip_planner.app.stores.base import PlannerBackend

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/activities", response_model=list[CatalogActivity])
async def search_activities(
    backend: Annotated[PlannerBackend, Depends(get_backend)],
    city_id: Annotated[str | None, Query()] = None,
    type: Annotated[str | None, Query()] = None,
    q: Annotated[str | None, Query()] = None,
) -> list[CatalogActivity]:
    """Search catalog activities by city, type and name, cheapest first."""
    return await backend.search_activities(city_id=city_id, activity_type=type, query=q)
