"""Shared fixtures for store tests."""

from datetime import datetime, timezone

import pytest
from prometheus_client import CollectorRegistry

from telemeter.store.forward.metrics import ForwardMetrics
from telemeter.store.models import (
    LabelPair,
    Metric,
    MetricFamily,
    MetricType,
    PartitionedMetrics,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)
NOW_MS = int(NOW.timestamp() * 1000)


def make_up_batch(partition_key: str = "test") -> PartitionedMetrics:
    """Three ``up`` metrics with timestamps in July 2019."""
    samples = [
        ("value0", 1.0, 1562500000000),
        ("value1", 1.0, 1562600000000),
        ("value2", 0.0, 1562700000000),
    ]
    metrics = [
        Metric(
            labels=[
                LabelPair("cluster", "test"),
                LabelPair("job", "test"),
                LabelPair("label", label),
            ],
            timestamp_ms=timestamp,
            untyped=value,
        )
        for label, value, timestamp in samples
    ]
    return PartitionedMetrics(
        partition_key=partition_key,
        families=[MetricFamily(name="up", type=MetricType.UNTYPED, metrics=metrics)],
    )


@pytest.fixture
def registry():
    """Isolated metrics registry."""
    return CollectorRegistry()


@pytest.fixture
def forward_metrics(registry):
    """Forwarding metrics registered on the isolated registry."""
    return ForwardMetrics(registry)


@pytest.fixture
def up_batch():
    """Batch with three untyped ``up`` samples."""
    return make_up_batch()


@pytest.fixture
def now():
    """Fixed conversion instant, later than every sample in ``up_batch``."""
    return NOW


@pytest.fixture
def up_batch_factory():
    """Build ``up`` batches for a given partition key."""
    return make_up_batch
