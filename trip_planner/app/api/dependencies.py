"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator

from trip_planner.app.adapters.planner_api import PlannerApiClient
from trip_planner.app.config import get_settings
from trip_planner.app.stores.base import PlannerBackend


async def get_backend() -> AsyncGenerator[PlannerBackend, None]:
    """Planner backend client scoped to one request.

    Tests override this dependency with an in-memory backend.
    """
    async with PlannerApiClient(get_settings()) as client:
        yield client
