"""Protobuf binary encoder and decoder for Sample and Measurement.

Records are converted to and from messages of the jarvis.models.v1 schema
(see schema.py and proto/jarvis/models/v1) and serialized by the protobuf
runtime. Field numbers are permanent. Encoding is deterministic: fields are
written in field-number order, zero values are omitted and preserved
unknown fields are appended last.
"""

import io
import logging
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from google.protobuf import proto
from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import DecodeError, Message
from google.protobuf.unknown_fields import UnknownFieldSet

from jarvis_models.core.config import DEFAULT_OPTIONS, CodecOptions
from jarvis_models.core.encoding.schema import MeasurementMessage, SampleMessage
from jarvis_models.core.enums import EntityType, MetricType, SampleType
from jarvis_models.core.exceptions import EncodeError, MalformedInput, TypeMismatch
from jarvis_models.core.models import Measurement, Record, Sample, Timestamp

logger = logging.getLogger(__name__)

R = TypeVar("R", Sample, Measurement)

# Wire types
VARINT = 0
I64 = 1
LEN = 2

WIRE_TYPE_NAMES = {
    0: "varint",
    1: "fixed64",
    2: "length-delimited",
    3: "start-group",
    4: "end-group",
    5: "fixed32",
}


def _expected_wire_type(field: FieldDescriptor) -> int:
    if field.type == FieldDescriptor.TYPE_DOUBLE:
        return I64
    if field.type in (FieldDescriptor.TYPE_STRING, FieldDescriptor.TYPE_MESSAGE):
        return LEN
    return VARINT


def _check_unknown_fields(message: Message) -> None:
    """Reject known fields that arrived with the wrong wire type.

    The runtime keeps such fields as unknown data instead of failing.
    """
    descriptor = message.DESCRIPTOR
    for item in UnknownFieldSet(message):
        field = descriptor.fields_by_number.get(item.field_number)
        if field is None:
            logger.debug(
                "%s: skipped unknown field %d (%s)",
                descriptor.name,
                item.field_number,
                WIRE_TYPE_NAMES[item.wire_type],
            )
            continue
        # @tra: Codec.Decode.TypeMismatch
        raise TypeMismatch(
            f"{descriptor.name}.{field.name}",
            WIRE_TYPE_NAMES[_expected_wire_type(field)],
            WIRE_TYPE_NAMES[item.wire_type],
        )


def _unknown_bytes(message: Message) -> bytes:
    stripped = type(message)()
    stripped.CopyFrom(message)
    for field in stripped.DESCRIPTOR.fields:
        stripped.ClearField(field.name)
    return stripped.SerializeToString()


def _merge_unknown(message: Message, unknown: bytes) -> None:
    if not unknown:
        return
    try:
        message.MergeFromString(unknown)
    except DecodeError as e:
        raise EncodeError(f"{message.DESCRIPTOR.name}.unknown_fields is corrupt: {e}") from e


def sample_to_message(sample: Sample) -> Any:
    """Convert a Sample to a jarvis.models.v1.Sample message."""
    message = SampleMessage(
        entity_type=int(sample.entity_type),
        entity_name=sample.entity_name,
        sample_type=int(sample.sample_type),
        sample_name=sample.sample_name,
        metric_type=int(sample.metric_type),
        value=sample.value,
    )
    _merge_unknown(message, sample.unknown_fields)
    return message


def measurement_to_message(measurement: Measurement) -> Any:
    """Convert a Measurement to a jarvis.models.v1.Measurement message.

    Raises:
        EncodeError: If measured_at_time.seconds does not fit in an int64.
    """
    message = MeasurementMessage(
        id=measurement.id,
        source=measurement.source,
        location=measurement.location,
        samples=[sample_to_message(s) for s in measurement.samples],
    )
    timestamp = measurement.measured_at_time
    if timestamp is not None:
        # The epoch is an empty sub-message that must still be written
        message.measured_at_time.SetInParent()
        try:
            message.measured_at_time.seconds = timestamp.seconds
        except ValueError as e:
            raise EncodeError(f"Measurement.measured_at_time: {e}") from e
        message.measured_at_time.nanos = timestamp.nanos
    _merge_unknown(message, measurement.unknown_fields)
    return message


def to_message(record: Record) -> Any:
    """Convert a Sample or Measurement to its protobuf message.

    Raises:
        TypeError: If record is not a Sample or Measurement.
    """
    if isinstance(record, Sample):
        return sample_to_message(record)
    if isinstance(record, Measurement):
        return measurement_to_message(record)
    raise TypeError(f"cannot encode {type(record).__name__}; expected Sample or Measurement")


def sample_from_message(message: Any, options: CodecOptions = DEFAULT_OPTIONS) -> Sample:
    """Convert a jarvis.models.v1.Sample message to a Sample.

    Raises:
        TypeMismatch: If a known field arrived with an unexpected wire type.
    """
    _check_unknown_fields(message)
    # @tra: Codec.Decode.UnknownEnumValue
    return Sample(
        entity_type=EntityType.from_wire(message.entity_type),
        entity_name=message.entity_name,
        sample_type=SampleType.from_wire(message.sample_type),
        sample_name=message.sample_name,
        metric_type=MetricType.from_wire(message.metric_type),
        value=message.value,
        unknown_fields=_unknown_bytes(message) if options.preserve_unknown_fields else b"",
    )


def measurement_from_message(
    message: Any, options: CodecOptions = DEFAULT_OPTIONS
) -> Measurement:
    """Convert a jarvis.models.v1.Measurement message to a Measurement.

    Raises:
        TypeMismatch: If a known field arrived with an unexpected wire type.
        MalformedInput: If the timestamp nanos are out of range.
    """
    _check_unknown_fields(message)
    timestamp = None
    if message.HasField("measured_at_time"):
        _check_unknown_fields(message.measured_at_time)
        try:
            timestamp = Timestamp.from_proto(message.measured_at_time)
        except ValueError as e:
            raise MalformedInput(str(e)) from e
    return Measurement(
        id=message.id,
        source=message.source,
        location=message.location,
        samples=tuple(sample_from_message(s, options) for s in message.samples),
        measured_at_time=timestamp,
        unknown_fields=_unknown_bytes(message) if options.preserve_unknown_fields else b"",
    )


_MESSAGES: dict[type, tuple[Any, Any]] = {
    Sample: (SampleMessage, sample_from_message),
    Measurement: (MeasurementMessage, measurement_from_message),
}


def _message_type(kind: type) -> tuple[Any, Any]:
    entry = _MESSAGES.get(kind)
    if entry is None:
        raise TypeError(f"cannot decode into {kind!r}; expected Sample or Measurement")
    return entry


def encode(record: Record) -> bytes:
    """Encode a Sample or Measurement to protobuf bytes.

    Args:
        record: The record to encode.

    Returns:
        The encoded message.

    Raises:
        TypeError: If record is not a Sample or Measurement.
        EncodeError: If the record holds a value the schema cannot carry.
    """
    return to_message(record).SerializeToString(deterministic=True)


def encode_sample(sample: Sample) -> bytes:
    return encode(sample)


def encode_measurement(measurement: Measurement) -> bytes:
    return encode(measurement)


def _check_input(data: object, options: CodecOptions) -> None:
    if not isinstance(data, bytes | bytearray | memoryview):
        raise TypeError(f"expected bytes-like input, got {type(data).__name__}")
    _check_size(len(data), options)


def _check_size(size: int, options: CodecOptions, offset: int | None = None) -> None:
    if options.max_message_size and size > options.max_message_size:
        raise MalformedInput(
            f"message of {size} bytes exceeds limit of {options.max_message_size}",
            offset=offset,
        )


def decode(
    data: bytes | bytearray | memoryview,
    kind: type[R],
    options: CodecOptions = DEFAULT_OPTIONS,
) -> R:
    """Decode protobuf bytes into a record.

    Absent fields take their zero values, unknown fields are skipped (and
    kept on the record when options.preserve_unknown_fields is set) and
    unknown enum values become UNSPECIFIED.

    Args:
        data: The encoded message.
        kind: Sample or Measurement.
        options: Codec options.

    Returns:
        A fully populated record of the requested kind.

    Raises:
        MalformedInput: If the input is truncated or corrupt.
        TypeMismatch: If a known field has an unexpected wire type.
    """
    message_type, convert = _message_type(kind)
    _check_input(data, options)
    message = message_type()
    try:
        message.ParseFromString(bytes(data))
    except DecodeError as e:
        raise MalformedInput(f"cannot parse {kind.__name__}: {e}") from e
    return convert(message, options)


def decode_sample(
    data: bytes | bytearray | memoryview, options: CodecOptions = DEFAULT_OPTIONS
) -> Sample:
    return decode(data, Sample, options)


def decode_measurement(
    data: bytes | bytearray | memoryview, options: CodecOptions = DEFAULT_OPTIONS
) -> Measurement:
    return decode(data, Measurement, options)


def encode_delimited(records: Iterable[Record]) -> bytes:
    """Encode records as a stream of varint length-prefixed messages."""
    out = io.BytesIO()
    for record in records:
        proto.serialize_length_prefixed(to_message(record), out)
    return out.getvalue()


def decode_delimited(
    data: bytes | bytearray | memoryview,
    kind: type[R],
    options: CodecOptions = DEFAULT_OPTIONS,
) -> Iterator[R]:
    """Decode a stream produced by encode_delimited.

    Records are yielded lazily; a corrupt record raises MalformedInput when
    it is reached. Errors carry the offset of the record's length prefix.
    """
    message_type, convert = _message_type(kind)
    if not isinstance(data, bytes | bytearray | memoryview):
        raise TypeError(f"expected bytes-like input, got {type(data).__name__}")

    payload = bytes(data)
    stream = io.BytesIO(payload)
    while stream.tell() < len(payload):
        start = stream.tell()
        try:
            message = proto.parse_length_prefixed(message_type, stream)
        except (DecodeError, ValueError) as e:
            raise MalformedInput(f"cannot parse {kind.__name__}: {e}", offset=start) from e
        _check_size(message.ByteSize(), options, offset=start)
        yield convert(message, options)
