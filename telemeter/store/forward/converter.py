"""Metric family to remote write time series conversion."""

from datetime import datetime
from typing import List, Optional, Sequence

from telemeter.exceptions import ConversionError, UnsupportedMetricTypeError
from telemeter.store.forward import remote_pb2
from telemeter.store.forward.metrics import ForwardMetrics
from telemeter.store.models import Metric, MetricFamily, MetricType, PartitionedMetrics

NAME_LABEL = "__name__"

SUPPORTED_TYPES = (MetricType.COUNTER, MetricType.GAUGE, MetricType.UNTYPED)


def _sample_value(family: MetricFamily, metric: Metric) -> float:
    if family.type == MetricType.COUNTER:
        value = metric.counter
    elif family.type == MetricType.GAUGE:
        value = metric.gauge
    elif family.type == MetricType.UNTYPED:
        value = metric.untyped
    else:
        raise UnsupportedMetricTypeError(family.type.value, family.name)

    if value is None:
        raise ConversionError(
            f"metric in family {family.name} has no {family.type.value} value",
            family=family.name,
        )

    return float(value)


def convert_to_timeseries(
    batch: PartitionedMetrics,
    now: datetime,
    metrics: Optional[ForwardMetrics] = None,
) -> List[remote_pb2.TimeSeries]:
    """Convert a partition's metric families into remote write time series.

    Every metric becomes one series labelled ``__name__`` followed by its own
    labels in order, carrying a single sample. Timestamps later than ``now``
    are overwritten with ``now``; older timestamps are kept as they are.

    Args:
        batch: Metrics to convert
        now: Conversion instant
        metrics: Optional instrumentation, counts overwritten timestamps

    Returns:
        List[TimeSeries]: One series per metric, in family then metric order

    Raises:
        UnsupportedMetricTypeError: If a family is not a counter, gauge or untyped
        ConversionError: If a metric lacks the value for its family type
    """
    timeseries: List[remote_pb2.TimeSeries] = []

    timestamp = int(now.timestamp() * 1000)
    for family in batch.families:
        if family.type not in SUPPORTED_TYPES:
            raise UnsupportedMetricTypeError(family.type.value, family.name)

        for metric in family.metrics:
            ts = remote_pb2.TimeSeries()
            ts.labels.add(name=NAME_LABEL, value=family.name)
            for label in metric.labels:
                ts.labels.add(name=label.name, value=label.value)

            value = _sample_value(family, metric)

            sample_timestamp = metric.timestamp_ms
            if sample_timestamp > timestamp:
                sample_timestamp = timestamp
                if metrics is not None:
                    metrics.record_overwritten_timestamp()

            ts.samples.add(value=value, timestamp=sample_timestamp)
            timeseries.append(ts)

    return timeseries


def timeseries_mean_drift(
    timeseries: Sequence[remote_pb2.TimeSeries], timestamp_seconds: int
) -> float:
    """Mean difference in seconds between timestamp_seconds and every sample.

    Callers must pass at least one sample.
    """
    count = 0
    total = 0.0

    for ts in timeseries:
        for sample in ts.samples:
            total += float(timestamp_seconds) - float(sample.timestamp // 1000)
            count += 1

    return total / count
