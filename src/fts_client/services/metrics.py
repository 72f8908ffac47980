"""Prometheus metrics recorded by the search executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


@dataclass
class MetricsRegistry:
    """Container owning the collectors describing search traffic.

    * ``search_requests_total`` counts calls by outcome (``success``, ``retry``,
      ``http_error``, ``ambiguous_timeout``, ``request_canceled``,
      ``mapping_error``).
    * ``search_request_duration_seconds`` records end-to-end latency by outcome.
    """

    registry: CollectorRegistry = field(init=False)
    requests: Counter = field(init=False)
    latency: Histogram = field(init=False)

    def __post_init__(self) -> None:
        self._initialise()

    def _initialise(self) -> None:
        """Instantiate collectors on a fresh registry."""
        # A private registry keeps resets from touching the process-wide default.
        self.registry = CollectorRegistry()
        self.requests = Counter(
            "search_requests_total",
            "Number of search requests grouped by outcome.",
            ("outcome",),
            registry=self.registry,
        )
        self.latency = Histogram(
            "search_request_duration_seconds",
            "Observed duration of search requests in seconds.",
            ("outcome",),
            registry=self.registry,
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 75.0, float("inf")),
        )

    def reset(self) -> None:
        """Reset all collectors to an empty state."""
        self._initialise()

    def record_request(self, outcome: str, seconds: float) -> None:
        """Count one request and record its duration (clamped to >= 0)."""
        self.requests.labels(outcome=outcome).inc()
        self.latency.labels(outcome=outcome).observe(max(0.0, float(seconds)))

    def render(self) -> bytes:
        """Return the latest metrics snapshot in Prometheus exposition format."""
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        """Expose the canonical content type for the Prometheus text format."""
        return CONTENT_TYPE_LATEST


# Default registry used when a client is not given its own.
metrics: Final[MetricsRegistry] = MetricsRegistry()


__all__ = ["metrics", "MetricsRegistry"]
