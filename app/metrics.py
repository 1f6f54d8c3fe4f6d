# =============================================================================
# app/metrics.py - Prometheus Metrics
# =============================================================================
# Request metrics exposed at GET /metrics in Prometheus text format.
#
# Each app instance gets its own CollectorRegistry (held on app.state),
# so tests can build as many apps as they like without "Duplicated
# timeseries" errors from the global default registry.
# =============================================================================

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


class RequestMetrics:
    """
    Registry plus the HTTP request duration histogram.

    Example:
        metrics = RequestMetrics()
        metrics.observe("GET", "/applications", 200, 0.012)
        body = metrics.render()
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        # Default process/runtime metrics
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            labelnames=["method", "route", "status_code"],
            registry=self.registry,
        )

    def observe(self, method: str, route: str, status_code: int, seconds: float) -> None:
        """Record one finished request."""
        self.request_duration.labels(
            method=method,
            route=route,
            status_code=str(status_code),
        ).observe(seconds)

    def render(self) -> bytes:
        """Current metrics in Prometheus exposition format."""
        return generate_latest(self.registry)
