"""Protocol buffer messages for the Prometheus remote write format.

Only the subset of ``prometheus/prompb`` written by the forwarder is declared:

    message Label        { string name = 1; string value = 2; }
    message Sample       { double value = 1; int64 timestamp = 2; }
    message TimeSeries   { repeated Label labels = 1; repeated Sample samples = 2; }
    message WriteRequest { repeated TimeSeries timeseries = 1; reserved 2; }

Field numbers match upstream, so payloads are readable by any remote write
receiver.
"""

from google.protobuf import descriptor_pb2 as _descriptor_pb2
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf import message_factory as _message_factory

_Field = _descriptor_pb2.FieldDescriptorProto

_file = _descriptor_pb2.FileDescriptorProto(
    name="telemeter/remote.proto",
    package="prometheus",
    syntax="proto3",
)

_label = _file.message_type.add(name="Label")
_label.field.add(
    name="name", number=1, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL
)
_label.field.add(
    name="value", number=2, type=_Field.TYPE_STRING, label=_Field.LABEL_OPTIONAL
)

_sample = _file.message_type.add(name="Sample")
_sample.field.add(
    name="value", number=1, type=_Field.TYPE_DOUBLE, label=_Field.LABEL_OPTIONAL
)
_sample.field.add(
    name="timestamp", number=2, type=_Field.TYPE_INT64, label=_Field.LABEL_OPTIONAL
)

_timeseries = _file.message_type.add(name="TimeSeries")
_timeseries.field.add(
    name="labels",
    number=1,
    type=_Field.TYPE_MESSAGE,
    label=_Field.LABEL_REPEATED,
    type_name=".prometheus.Label",
)
_timeseries.field.add(
    name="samples",
    number=2,
    type=_Field.TYPE_MESSAGE,
    label=_Field.LABEL_REPEATED,
    type_name=".prometheus.Sample",
)

_write_request = _file.message_type.add(name="WriteRequest")
_write_request.field.add(
    name="timeseries",
    number=1,
    type=_Field.TYPE_MESSAGE,
    label=_Field.LABEL_REPEATED,
    type_name=".prometheus.TimeSeries",
)
_write_request.reserved_range.add(start=2, end=3)

# Private pool: other libraries may register their own prometheus.* messages.
_pool = _descriptor_pool.DescriptorPool()
DESCRIPTOR = _pool.AddSerializedFile(_file.SerializeToString())

Label = _message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name["Label"])
Sample = _message_factory.GetMessageClass(DESCRIPTOR.message_types_by_name["Sample"])
TimeSeries = _message_factory.GetMessageClass(
    DESCRIPTOR.message_types_by_name["TimeSeries"]
)
WriteRequest = _message_factory.GetMessageClass(
    DESCRIPTOR.message_types_by_name["WriteRequest"]
)

__all__ = ["DESCRIPTOR", "Label", "Sample", "TimeSeries", "WriteRequest"]
