"""REST adapter for the planner backend (trips, itinerary, activity catalog)."""

import time
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from trip_planner.app.config import Settings, get_settings
from trip_planner.app.errors import BackendUnavailableError
from trip_planner.app.models.entries import CatalogActivity, CityRef, ItineraryEntry, NewItineraryEntry
from trip_planner.app.models.itinerary import ActivityDraft
from trip_planner.app.models.trip import Trip
from trip_planner.app.stores.base import SharedItinerary
from trip_planner.app.utils.logging import structured_logger
from trip_planner.app.utils.metrics import metrics


def _ref_id(value: Any) -> str | None:
    """Id of a reference that may be a bare id or a populated object."""
    if value is None:
        return None
    if isinstance(value, dict):
        ref = value.get("_id") or value.get("id")
        return str(ref) if ref is not None else None
    return str(value)


def _doc_id(payload: dict[str, Any]) -> str:
    return str(payload.get("_id") or payload["id"])


def parse_trip(payload: dict[str, Any]) -> Trip:
    """Parse a trip document."""
    return Trip(
        id=_doc_id(payload),
        title=payload.get("title") or "",
        destination=payload.get("destination") or "",
        description=payload.get("description"),
        start_date=payload["startDate"],
        end_date=payload["endDate"],
        travelers=payload.get("travelers") or 1,
    )


def parse_city(payload: dict[str, Any]) -> CityRef:
    """Parse a populated city document."""
    return CityRef(id=_doc_id(payload), name=payload.get("name") or "", country=payload.get("country"))


def parse_catalog_activity(payload: dict[str, Any]) -> CatalogActivity:
    """Parse an activity catalog document."""
    data: dict[str, Any] = {
        "id": _doc_id(payload),
        "city_id": _ref_id(payload.get("cityId")),
        "name": payload.get("name") or "",
        "type": payload.get("type"),
        "description": payload.get("description"),
        "image_url": payload.get("imageUrl"),
    }
    # Absent numeric fields take the model defaults
    if payload.get("cost") is not None:
        data["cost"] = payload["cost"]
    if payload.get("duration") is not None:
        data["duration"] = payload["duration"]
    return CatalogActivity(**data)


def parse_itinerary_entry(payload: dict[str, Any]) -> ItineraryEntry:
    """Parse an itinerary entry, with or without populated references.

    Response structure: {_id, tripId, cityId: id | {...}, date,
    activityId: id | {...} | null, notes?, orderIndex}
    """
    city_ref = payload.get("cityId")
    activity_ref = payload.get("activityId")
    return ItineraryEntry(
        id=_doc_id(payload),
        trip_id=_ref_id(payload.get("tripId")) or "",
        city_id=_ref_id(city_ref) or "",
        city=parse_city(city_ref) if isinstance(city_ref, dict) else None,
        date=payload["date"],
        activity_id=_ref_id(activity_ref),
        activity=parse_catalog_activity(activity_ref) if isinstance(activity_ref, dict) else None,
        notes=payload.get("notes"),
        order_index=payload.get("orderIndex"),
    )


def parse_itinerary_entries(items: list[Any]) -> list[ItineraryEntry]:
    """Parse a listing of entries, skipping records that do not parse.

    A single unparseable record is logged and counted, never fatal to the
    rest of the listing.
    """
    entries: list[ItineraryEntry] = []
    for item in items:
        try:
            entries.append(parse_itinerary_entry(item))
        except (ValidationError, KeyError, TypeError, AttributeError) as e:
            entry_id = str(item.get("_id") or item.get("id")) if isinstance(item, dict) else "<unknown>"
            structured_logger.log_dropped_entry(entry_id, f"unparseable: {e}")
            metrics.inc_dropped("unparseable")
    return entries


class PlannerApiClient:
    """Async client for the planner REST backend.

    Implements the PlannerBackend protocol. Every transport failure or
    non-2xx response surfaces as BackendUnavailableError.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create a client.

        Args:
            settings: Settings (defaults to the cached application settings)
            client: Optional httpx client (for testing with mocks)
        """
        self._settings = settings or get_settings()
        self._base_url = self._settings.planner_api_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._settings.request_timeout_s)

    async def __aenter__(self) -> "PlannerApiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.planner_api_token:
            headers["Authorization"] = f"Bearer {self._settings.planner_api_token}"
        return headers

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body (None when there is none)."""
        start = time.perf_counter()
        try:
            response = await self._client.request(
                method, f"{self._base_url}{path}", headers=self._headers(), **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            latency_ms = (time.perf_counter() - start) * 1000
            status_code = e.response.status_code
            metrics.record_backend_latency(operation, "http_error", latency_ms)
            structured_logger.log_backend_call(operation, "http_error", latency_ms, status_code)
            raise BackendUnavailableError(
                operation,
                f"Planner backend rejected {operation} (HTTP {status_code})",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            latency_ms = (time.perf_counter() - start) * 1000
            metrics.record_backend_latency(operation, "unavailable", latency_ms)
            structured_logger.log_backend_call(operation, "unavailable", latency_ms)
            raise BackendUnavailableError(
                operation, f"Could not reach the planner backend ({type(e).__name__})"
            ) from e

        latency_ms = (time.perf_counter() - start) * 1000
        metrics.record_backend_latency(operation, "success", latency_ms)
        structured_logger.log_backend_call(operation, "success", latency_ms, response.status_code)

        if "application/json" not in response.headers.get("content-type", ""):
            return None
        return response.json()

    # TripStore

    async def get_trip(self, trip_id: str) -> Trip:
        """GET /trips/{tripId}."""
        data = await self._request("get_trip", "GET", f"/trips/{trip_id}")
        return parse_trip(data)

    async def get_shared_itinerary(self, slug: str) -> SharedItinerary:
        """GET /shared/u/{slug} -> {...trip, itineraries, budget}."""
        data = await self._request("get_shared_itinerary", "GET", f"/shared/u/{slug}")
        return SharedItinerary(
            trip=parse_trip(data),
            entries=parse_itinerary_entries(data.get("itineraries") or []),
            budget=data.get("budget"),
        )

    # ItineraryStore

    async def list_itinerary(self, trip_id: str) -> list[ItineraryEntry]:
        """GET /itinerary/{tripId}."""
        data = await self._request("list_itinerary", "GET", f"/itinerary/{trip_id}")
        return parse_itinerary_entries(data or [])

    async def create_itinerary_entry(self, new_entry: NewItineraryEntry) -> ItineraryEntry:
        """POST /itinerary."""
        body: dict[str, Any] = {
            "tripId": new_entry.trip_id,
            "cityId": new_entry.city_id,
            "date": new_entry.date.isoformat(),
            "activityId": new_entry.activity_id,
            "orderIndex": new_entry.order_index,
        }
        if new_entry.notes:
            body["notes"] = new_entry.notes
        data = await self._request("create_itinerary_entry", "POST", "/itinerary", json=body)
        return parse_itinerary_entry(data)

    async def delete_itinerary_entry(self, entry_id: str) -> None:
        """DELETE /itinerary/{entryId}."""
        await self._request("delete_itinerary_entry", "DELETE", f"/itinerary/{entry_id}")

    # ActivityCatalog

    async def create_activity(self, city_id: str, draft: ActivityDraft) -> CatalogActivity:
        """POST /activities."""
        body = {
            "cityId": city_id,
            "name": draft.name,
            "type": draft.type.value,
            "cost": draft.cost,
            "duration": draft.duration,
            "description": draft.description or "",
        }
        data = await self._request("create_activity", "POST", "/activities", json=body)
        return parse_catalog_activity(data)

    async def search_activities(
        self,
        city_id: str | None = None,
        activity_type: str | None = None,
        query: str | None = None,
    ) -> list[CatalogActivity]:
        """GET /activities?cityId&type&q."""
        params = {
            k: v
            for k, v in {"cityId": city_id, "type": activity_type, "q": query}.items()
            if v
        }
        data = await self._request("search_activities", "GET", "/activities", params=params)
        return [parse_catalog_activity(item) for item in data or []]
