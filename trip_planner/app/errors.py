"""Error taxonomy for itinerary loading, projection and mutation."""


class ItineraryError(Exception):
    """Base class for itinerary errors."""


class MissingCityError(ItineraryError):
    """A mutation was attempted without a selected city."""

    def __init__(self, message: str = "Select a city before adding an activity") -> None:
        super().__init__(message)


class BackendUnavailableError(ItineraryError):
    """A backend call failed (network error, timeout or non-2xx response)."""

    def __init__(self, operation: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        """True when the backend refused or could not find the resource."""
        return self.status_code in (403, 404)


class MalformedEntryError(ItineraryError):
    """A legacy entry's notes payload could not be parsed."""

    def __init__(self, entry_id: str, reason: str) -> None:
        super().__init__(f"Itinerary entry {entry_id} is malformed: {reason}")
        self.entry_id = entry_id
        self.reason = reason


class UnknownEntryError(ItineraryError):
    """The id does not belong to any itinerary entry of the trip."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"Itinerary entry {entry_id} not found")
        self.entry_id = entry_id


class ReorderMismatchError(ItineraryError):
    """A reorder did not contain exactly the day's current activities."""


class UnknownDayError(ItineraryError):
    """The date is not one of the trip's days."""

    def __init__(self, day: object, trip_id: str) -> None:
        super().__init__(f"{day} is not a day of trip {trip_id}")
        self.day = day
        self.trip_id = trip_id
