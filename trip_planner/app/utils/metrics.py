"""Prometheus metrics for itinerary projection and backend calls."""

from prometheus_client import Counter, Histogram

entries_dropped_total = Counter(
    "itinerary_entries_dropped_total",
    "Itinerary entries dropped from the projection",
    ["reason"],
)

mutations_total = Counter(
    "itinerary_mutations_total",
    "Itinerary mutation attempts",
    ["operation", "outcome"],
)

backend_latency_ms = Histogram(
    "planner_backend_latency_ms",
    "Planner backend call latency in milliseconds",
    ["operation", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, 10000],
)


class PrometheusItineraryMetrics:
    """Prometheus-based itinerary metrics implementation."""

    def inc_dropped(self, reason: str) -> None:
        """Increment dropped entry counter."""
        entries_dropped_total.labels(reason=reason).inc()

    def inc_mutation(self, operation: str, outcome: str) -> None:
        """Increment mutation counter."""
        mutations_total.labels(operation=operation, outcome=outcome).inc()

    def record_backend_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record backend call latency."""
        backend_latency_ms.labels(operation=operation, outcome=outcome).observe(latency_ms)


metrics = PrometheusItineraryMetrics()
