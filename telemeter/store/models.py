"""Metric family models shared by all stores."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class MetricType(str, Enum):
    """Declared type of a metric family."""

    COUNTER = "counter"
    GAUGE = "gauge"
    SUMMARY = "summary"
    UNTYPED = "untyped"
    HISTOGRAM = "histogram"
    GAUGE_HISTOGRAM = "gauge_histogram"


@dataclass
class LabelPair:
    """Single label of a metric."""

    name: str
    value: str


@dataclass
class Metric:
    """One metric instance of a family.

    Only the value slot matching the family type is expected to be set.
    Summary and histogram payloads are kept opaque.
    """

    labels: List[LabelPair] = field(default_factory=list)
    timestamp_ms: int = 0
    counter: Optional[float] = None
    gauge: Optional[float] = None
    untyped: Optional[float] = None
    summary: Optional[Any] = None
    histogram: Optional[Any] = None


@dataclass
class MetricFamily:
    """Named group of metrics sharing one type."""

    name: str
    type: MetricType
    metrics: List[Metric] = field(default_factory=list)
    help: str = ""


@dataclass
class PartitionedMetrics:
    """Metric families submitted together for one partition (tenant/cluster)."""

    partition_key: str
    families: List[MetricFamily] = field(default_factory=list)

    @property
    def metric_count(self) -> int:
        """Total number of metrics across all families."""
        return sum(len(f.metrics) for f in self.families)

    def max_timestamp_ms(self) -> Optional[int]:
        """Newest metric timestamp in the batch, if any."""
        timestamps = [m.timestamp_ms for f in self.families for m in f.metrics]
        return max(timestamps) if timestamps else None
