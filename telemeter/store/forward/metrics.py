"""Prometheus instrumentation for metric forwarding."""

from typing import Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

# Upper bound matches the forwarding request timeout.
DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)


class ForwardMetrics:
    """Counters and histogram shared by every forwarding attempt.

    Pass an isolated ``CollectorRegistry`` in tests; production code uses
    ``get_forward_metrics()`` which registers once on the process registry.
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry

        self._samples_total = Counter(
            name="telemeter_forward_samples_total",
            documentation="Total amount of samples successfully forwarded",
            registry=registry,
        )
        self._errors_total = Counter(
            name="telemeter_forward_request_errors_total",
            documentation="Total amount of errors encountered while forwarding",
            registry=registry,
        )
        self._duration_seconds = Histogram(
            name="telemeter_forward_request_duration_seconds",
            documentation="Tracks the duration of all forwarding requests",
            labelnames=["status_code"],
            buckets=DURATION_BUCKETS,
            registry=registry,
        )
        self._overwritten_timestamps_total = Counter(
            name="telemeter_forward_overwritten_timestamps_total",
            documentation="Total number of timestamps that were overwritten",
            registry=registry,
        )

    def record_samples(self, count: int) -> None:
        self._samples_total.inc(count)

    def record_error(self) -> None:
        self._errors_total.inc()

    def observe_duration(self, status_code: int, seconds: float) -> None:
        self._duration_seconds.labels(status_code=str(status_code)).observe(seconds)

    def record_overwritten_timestamp(self) -> None:
        self._overwritten_timestamps_total.inc()


_forward_metrics: Optional[ForwardMetrics] = None


def get_forward_metrics() -> ForwardMetrics:
    """Get the process-wide forwarding metrics, registering them on first use."""
    global _forward_metrics
    if _forward_metrics is None:
        _forward_metrics = ForwardMetrics(REGISTRY)
    return _forward_metrics
