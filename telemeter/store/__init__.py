"""Metric stores.

This package defines the partitioned metric model, the store contract, an
in-memory store and the remote write forwarding decorator.
"""

from telemeter.store.base import Store
from telemeter.store.memstore import MemStore
from telemeter.store.models import (
    LabelPair,
    Metric,
    MetricFamily,
    MetricType,
    PartitionedMetrics,
)

__all__ = [
    "LabelPair",
    "MemStore",
    "Metric",
    "MetricFamily",
    "MetricType",
    "PartitionedMetrics",
    "Store",
]
