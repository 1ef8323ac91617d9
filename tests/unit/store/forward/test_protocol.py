"""Tests for the remote write codec."""

import pytest
import snappy

from telemeter.exceptions import SerializationError
from telemeter.store.forward import remote_pb2
from telemeter.store.forward.converter import convert_to_timeseries
from telemeter.store.forward.protocol import (
    build_write_request,
    decode_write_request,
    encode_write_request,
    write_request_statistics,
)


class TestProtocol:
    """Test remote write encoding and decoding."""

    def test_payload_is_snappy_block_of_protobuf(self, up_batch, now):
        """The payload decompresses to a plain serialized WriteRequest."""
        write_request = build_write_request(convert_to_timeseries(up_batch, now))

        payload = encode_write_request(write_request)

        parsed = remote_pb2.WriteRequest()
        parsed.ParseFromString(snappy.decompress(payload))
        assert parsed == write_request

    def test_wire_field_numbers(self):
        """Field numbers match the upstream prompb definitions."""
        fields = {
            name: {f.name: f.number for f in message.fields}
            for name, message in remote_pb2.DESCRIPTOR.message_types_by_name.items()
        }

        assert fields == {
            "Label": {"name": 1, "value": 2},
            "Sample": {"value": 1, "timestamp": 2},
            "TimeSeries": {"labels": 1, "samples": 2},
            "WriteRequest": {"timeseries": 1},
        }

    def test_statistics(self, up_batch, now):
        write_request = build_write_request(convert_to_timeseries(up_batch, now))

        stats = write_request_statistics(write_request)

        assert stats == {
            "total_time_series": 3,
            "total_samples": 3,
            "unique_metrics": 1,
            "min_timestamp": 1562500000000,
            "max_timestamp": 1562700000000,
        }

    def test_decode_rejects_garbage(self):
        with pytest.raises(ValueError):
            decode_write_request(b"\xff\xff not snappy")

    def test_encode_failure_is_serialization_error(self, monkeypatch):
        def broken(data):
            raise RuntimeError("no codec")

        monkeypatch.setattr(snappy, "compress", broken)

        with pytest.raises(SerializationError):
            encode_write_request(remote_pb2.WriteRequest())
