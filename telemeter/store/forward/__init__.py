"""Prometheus remote write forwarding.

This module converts stored metric families into remote write time series and
ships them, Snappy-compressed and Protobuf-encoded, to a receive endpoint.
"""

from telemeter.store.forward.converter import (
    convert_to_timeseries,
    timeseries_mean_drift,
)
from telemeter.store.forward.metrics import ForwardMetrics, get_forward_metrics
from telemeter.store.forward.protocol import (
    build_write_request,
    decode_write_request,
    encode_write_request,
)
from telemeter.store.forward.store import ForwardStore

__all__ = [
    "ForwardMetrics",
    "ForwardStore",
    "build_write_request",
    "convert_to_timeseries",
    "decode_write_request",
    "encode_write_request",
    "get_forward_metrics",
    "timeseries_mean_drift",
]
