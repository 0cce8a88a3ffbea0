"""Structured logging for itinerary projection and mutations."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class StructuredItineraryLogger:
    """Structured logger for itinerary events."""

    def log_dropped_entry(self, entry_id: str, reason: str) -> None:
        """Log an entry left out of the projection."""
        logger.warning(
            f"Dropping itinerary entry {entry_id}: {reason}",
            extra={"structured": {"entry_id": entry_id, "reason": reason}},
        )

    def log_mutation(
        self,
        operation: str,
        trip_id: str,
        outcome: str,
        entry_id: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a mutation attempt with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "trip_id": trip_id,
            "outcome": outcome,
        }
        if entry_id:
            log_data["entry_id"] = entry_id
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Itinerary mutation: {operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_backend_call(self, operation: str, outcome: str, latency_ms: float, status_code: int | None = None) -> None:
        """Log a backend request."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }
        if status_code is not None:
            log_data["status_code"] = status_code

        if outcome == "success":
            logger.debug(f"Planner backend: {operation} - {outcome}", extra={"structured": log_data})
        else:
            logger.warning(f"Planner backend: {operation} - {outcome}", extra={"structured": log_data})


structured_logger = StructuredItineraryLogger()
