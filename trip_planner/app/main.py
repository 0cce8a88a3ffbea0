"""FastAPI application - itinerary projection service."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trip_planner.app.api.routes.catalog import router as catalog_router
from trip_planner.app.api.routes.health import router as health_router
from trip_planner.app.api.routes.itinerary import router as itinerary_router
from trip_planner.app.api.routes.metrics import router as metrics_router
from trip_planner.app.api.routes.shared import router as shared_router
from trip_planner.app.config import get_settings
from trip_planner.app.errors import (
    BackendUnavailableError,
    MissingCityError,
    UnknownDayError,
    UnknownEntryError,
)
from trip_planner.app.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
log = logging.getLogger(__name__)

app = FastAPI(title="Trip Planner Itinerary API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ui_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(itinerary_router)
app.include_router(shared_router)
app.include_router(catalog_router)


# Error bodies are {"error": <message>}; no tracebacks reach clients
@app.exception_handler(MissingCityError)
async def missing_city_handler(request: Request, exc: MissingCityError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.exception_handler(UnknownEntryError)
async def unknown_entry_handler(request: Request, exc: UnknownEntryError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(UnknownDayError)
async def unknown_day_handler(request: Request, exc: UnknownDayError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(BackendUnavailableError)
async def backend_unavailable_handler(request: Request, exc: BackendUnavailableError) -> JSONResponse:
    if exc.is_not_found:
        return JSONResponse(status_code=404, content={"error": "Not found"})
    log.warning(f"Backend {exc.operation} failed: {exc}")
    return JSONResponse(status_code=502, content={"error": "Planner backend unavailable, please retry"})


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Trip Planner Itinerary API", "version": "0.1.0"}
