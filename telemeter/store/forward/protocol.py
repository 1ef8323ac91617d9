"""Prometheus remote write protocol codec.

This module encodes write requests for the receive endpoint (Protobuf
serialization followed by Snappy block compression) and decodes them again
for receivers and tests.
"""

from typing import Any, Dict, Sequence

import snappy
import structlog

from telemeter.exceptions import SerializationError
from telemeter.store.forward import remote_pb2

logger = structlog.get_logger(__name__)

CONTENT_TYPE = "application/x-protobuf"
CONTENT_ENCODING = "snappy"
REMOTE_WRITE_VERSION = "0.1.0"
TENANT_HEADER = "THANOS-TENANT"


def build_write_request(
    timeseries: Sequence[remote_pb2.TimeSeries],
) -> remote_pb2.WriteRequest:
    """Wrap converted time series in a single WriteRequest."""
    write_request = remote_pb2.WriteRequest()
    write_request.timeseries.extend(timeseries)
    return write_request


def encode_write_request(write_request: remote_pb2.WriteRequest) -> bytes:
    """Serialize and Snappy-compress a WriteRequest.

    Args:
        write_request: Request to encode

    Returns:
        bytes: Compressed payload ready to POST

    Raises:
        SerializationError: If serialization or compression fails
    """
    try:
        data = write_request.SerializeToString()
    except Exception as e:
        raise SerializationError(str(e)) from e

    try:
        compressed = snappy.compress(data)
    except Exception as e:
        raise SerializationError(f"snappy: {e}") from e

    logger.debug(
        "Encoded write request",
        timeseries=len(write_request.timeseries),
        serialized_bytes=len(data),
        compressed_bytes=len(compressed),
    )

    return compressed


def decode_write_request(compressed_data: bytes) -> remote_pb2.WriteRequest:
    """Decode a Snappy-compressed Protobuf WriteRequest.

    Raises:
        ValueError: If decompression or decoding fails
    """
    try:
        decompressed = snappy.decompress(compressed_data)

        write_request = remote_pb2.WriteRequest()
        write_request.ParseFromString(decompressed)

        return write_request

    except snappy.UncompressError as e:
        raise ValueError(f"Failed to decompress remote write request: {e}") from e
    except Exception as e:
        raise ValueError(f"Failed to decode remote write request: {e}") from e


def count_samples(write_request: remote_pb2.WriteRequest) -> int:
    """Total number of samples across all time series."""
    return sum(len(ts.samples) for ts in write_request.timeseries)


def write_request_statistics(write_request: remote_pb2.WriteRequest) -> Dict[str, Any]:
    """Summarize a WriteRequest.

    Returns:
        dict: total_time_series, total_samples, unique_metrics,
            min_timestamp and max_timestamp (ms, None when empty)
    """
    metric_names = set()
    min_timestamp = None
    max_timestamp = None

    for ts in write_request.timeseries:
        for label in ts.labels:
            if label.name == "__name__":
                metric_names.add(label.value)

        for sample in ts.samples:
            if min_timestamp is None or sample.timestamp < min_timestamp:
                min_timestamp = sample.timestamp
            if max_timestamp is None or sample.timestamp > max_timestamp:
                max_timestamp = sample.timestamp

    return {
        "total_time_series": len(write_request.timeseries),
        "total_samples": count_samples(write_request),
        "unique_metrics": len(metric_names),
        "min_timestamp": min_timestamp,
        "max_timestamp": max_timestamp,
    }
