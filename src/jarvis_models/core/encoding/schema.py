"""Protobuf descriptors for the jarvis.models.v1 schema.

The descriptors mirror the .proto files under proto/jarvis/models/v1 and
are registered in the default descriptor pool the same way generated
``_pb2`` modules register theirs. Enum values are taken from the
ProtoEnum classes so the Python enums remain the single source of numbers.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf import timestamp_pb2

from jarvis_models.core.enums import EntityType, MetricType, ProtoEnum, SampleType

PACKAGE = "jarvis.models.v1"

ENUM_TYPES: dict[str, type[ProtoEnum]] = {
    enum.__name__: enum for enum in (EntityType, SampleType, MetricType)
}

_Field = descriptor_pb2.FieldDescriptorProto

_ENUM_FILES = {
    EntityType: "jarvis/models/v1/entity_type.proto",
    SampleType: "jarvis/models/v1/sample_type.proto",
    MetricType: "jarvis/models/v1/metric_type.proto",
}
_SAMPLE_FILE = "jarvis/models/v1/sample.proto"
_MEASUREMENT_FILE = "jarvis/models/v1/measurement.proto"
_TIMESTAMP_FILE = timestamp_pb2.DESCRIPTOR.name


def _new_file(name: str, *dependencies: str) -> descriptor_pb2.FileDescriptorProto:
    return descriptor_pb2.FileDescriptorProto(
        name=name,
        package=PACKAGE,
        syntax="proto3",
        dependency=list(dependencies),
    )


def _enum_file(enum: type[ProtoEnum]) -> descriptor_pb2.FileDescriptorProto:
    file = _new_file(_ENUM_FILES[enum])
    enum_type = file.enum_type.add(name=enum.__name__)
    for member in enum:
        enum_type.value.add(name=member.proto_name, number=member.value)
    return file


def _add_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    type_: int,
    type_name: str = "",
    label: int = _Field.LABEL_OPTIONAL,
) -> None:
    field = message.field.add(name=name, number=number, type=type_, label=label)
    if type_name:
        field.type_name = type_name


def _sample_file() -> descriptor_pb2.FileDescriptorProto:
    file = _new_file(_SAMPLE_FILE, *_ENUM_FILES.values())
    sample = file.message_type.add(name="Sample")
    _add_field(sample, "entity_type", 1, _Field.TYPE_ENUM, f".{PACKAGE}.EntityType")
    _add_field(sample, "entity_name", 2, _Field.TYPE_STRING)
    _add_field(sample, "sample_type", 3, _Field.TYPE_ENUM, f".{PACKAGE}.SampleType")
    _add_field(sample, "sample_name", 4, _Field.TYPE_STRING)
    _add_field(sample, "metric_type", 5, _Field.TYPE_ENUM, f".{PACKAGE}.MetricType")
    _add_field(sample, "value", 6, _Field.TYPE_DOUBLE)
    return file


def _measurement_file() -> descriptor_pb2.FileDescriptorProto:
    file = _new_file(_MEASUREMENT_FILE, _SAMPLE_FILE, _TIMESTAMP_FILE)
    measurement = file.message_type.add(name="Measurement")
    _add_field(measurement, "id", 1, _Field.TYPE_STRING)
    _add_field(measurement, "source", 2, _Field.TYPE_STRING)
    _add_field(measurement, "location", 3, _Field.TYPE_STRING)
    _add_field(
        measurement,
        "samples",
        4,
        _Field.TYPE_MESSAGE,
        f".{PACKAGE}.Sample",
        label=_Field.LABEL_REPEATED,
    )
    _add_field(
        measurement, "measured_at_time", 5, _Field.TYPE_MESSAGE, ".google.protobuf.Timestamp"
    )
    return file


def _register() -> None:
    pool = descriptor_pool.Default()
    files = [_enum_file(enum) for enum in _ENUM_FILES]
    files += [_sample_file(), _measurement_file()]
    for file in files:
        pool.AddSerializedFile(file.SerializeToString())


_register()

SAMPLE_DESCRIPTOR = descriptor_pool.Default().FindMessageTypeByName(f"{PACKAGE}.Sample")
MEASUREMENT_DESCRIPTOR = descriptor_pool.Default().FindMessageTypeByName(f"{PACKAGE}.Measurement")

SampleMessage = message_factory.GetMessageClass(SAMPLE_DESCRIPTOR)
MeasurementMessage = message_factory.GetMessageClass(MEASUREMENT_DESCRIPTOR)
