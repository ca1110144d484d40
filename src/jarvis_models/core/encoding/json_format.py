"""Textual representation of Sample and Measurement.

Records go through the protobuf JSON mapping with the schema field names
as keys. Enums render as protobuf names ("ENTITY_TYPE_DEVICE") and
UNSPECIFIED as "", non-finite doubles as "NaN", "Infinity" and
"-Infinity", and timestamps as RFC 3339 strings in UTC. Parsing is
lenient in the same way as protobuf JSON: unknown keys are ignored, enums
may be names or numbers, and unknown enum values map to UNSPECIFIED.
"""

import json
import math
from collections.abc import Mapping
from typing import Any, TypeVar

from google.protobuf import json_format
from google.protobuf.descriptor import Descriptor, FieldDescriptor

from jarvis_models.core.config import DEFAULT_OPTIONS, CodecOptions
from jarvis_models.core.encoding.protobuf import (
    measurement_from_message,
    sample_from_message,
    to_message,
)
from jarvis_models.core.encoding.schema import (
    ENUM_TYPES,
    MEASUREMENT_DESCRIPTOR,
    SAMPLE_DESCRIPTOR,
    MeasurementMessage,
    SampleMessage,
)
from jarvis_models.core.exceptions import EncodeError, MalformedInput, TypeMismatch
from jarvis_models.core.models import Measurement, Record, Sample

R = TypeVar("R", Sample, Measurement)


def _json_type(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _is_sample(field: FieldDescriptor) -> bool:
    return field.message_type is not None and (
        field.message_type.full_name == SAMPLE_DESCRIPTOR.full_name
    )


def _normalize_out(
    data: dict[str, Any], descriptor: Descriptor, options: CodecOptions
) -> dict[str, Any]:
    # Schema order, absent timestamp as None and UNSPECIFIED as ""
    result: dict[str, Any] = {}
    for field in descriptor.fields:
        value = data.get(field.name)
        if _is_sample(field):
            value = [_normalize_out(s, SAMPLE_DESCRIPTOR, options) for s in value or []]
        elif field.enum_type is not None and not options.json_enums_as_ints:
            if value == field.enum_type.values_by_number[0].name:
                value = ""
        result[field.name] = value
    return result


def to_dict(record: Record, options: CodecOptions = DEFAULT_OPTIONS) -> dict[str, Any]:
    """Convert a record to a JSON-compatible dict.

    Raises:
        TypeError: If record is not a Sample or Measurement.
        EncodeError: If the timestamp lies outside years 0001 to 9999.
    """
    message = to_message(record)
    try:
        data = json_format.MessageToDict(
            message,
            preserving_proto_field_name=True,
            always_print_fields_with_no_presence=True,
            use_integers_for_enums=options.json_enums_as_ints,
        )
    except (json_format.SerializeToJsonError, ValueError, OverflowError) as e:
        raise EncodeError(f"cannot represent {type(record).__name__} as JSON: {e}") from e
    return _normalize_out(data, message.DESCRIPTOR, options)


def to_json(record: Record, options: CodecOptions = DEFAULT_OPTIONS) -> str:
    """Serialize a record to a JSON string."""
    return json.dumps(
        to_dict(record, options),
        indent=options.json_indent,
        ensure_ascii=False,
        allow_nan=False,
    )


def _double_in(name: str, value: object) -> object:
    if isinstance(value, bool):
        raise TypeMismatch(name, "number", "boolean")
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            raise MalformedInput(f"field {name!r} is out of range for a double") from None
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value
    if isinstance(value, str):
        return value
    raise TypeMismatch(name, "number", _json_type(value))


def _field_in(field: FieldDescriptor, value: object) -> object:
    name = field.name
    if _is_sample(field):
        if not isinstance(value, list):
            raise TypeMismatch(name, "array", _json_type(value))
        return [_normalize_in(s, SAMPLE_DESCRIPTOR) for s in value]
    if field.message_type is not None:
        if not isinstance(value, str):
            raise TypeMismatch(name, "RFC 3339 string", _json_type(value))
        return value
    if field.enum_type is not None:
        if isinstance(value, str):
            return ENUM_TYPES[field.enum_type.name].from_name(value).proto_name
        if isinstance(value, int) and not isinstance(value, bool):
            return ENUM_TYPES[field.enum_type.name].from_wire(value).proto_name
        raise TypeMismatch(name, "enum name or number", _json_type(value))
    if field.type == FieldDescriptor.TYPE_DOUBLE:
        return _double_in(name, value)
    if not isinstance(value, str):
        raise TypeMismatch(name, "string", _json_type(value))
    return value


def _normalize_in(data: object, descriptor: Descriptor) -> dict[str, Any]:
    """Check JSON types and canonicalize enum names before ParseDict."""
    if not isinstance(data, Mapping):
        raise TypeMismatch(descriptor.name, "object", _json_type(data))
    result: dict[str, Any] = {}
    for key, value in data.items():
        if not isinstance(key, str) or value is None:
            continue
        field = descriptor.fields_by_name.get(key) or descriptor.fields_by_camelcase_name.get(key)
        if field is None:
            continue
        result[field.name] = _field_in(field, value)
    return result


def sample_from_dict(data: Mapping[str, Any]) -> Sample:
    message = _parse(_normalize_in(data, SAMPLE_DESCRIPTOR), SampleMessage(), "Sample")
    return sample_from_message(message)


def measurement_from_dict(data: Mapping[str, Any]) -> Measurement:
    message = _parse(
        _normalize_in(data, MEASUREMENT_DESCRIPTOR), MeasurementMessage(), "Measurement"
    )
    return measurement_from_message(message)


def _parse(data: dict[str, Any], message: Any, what: str) -> Any:
    try:
        return json_format.ParseDict(data, message, ignore_unknown_fields=True)
    except (json_format.ParseError, ValueError) as e:
        raise MalformedInput(f"cannot parse {what}: {e}") from e


_FROM_DICT = {
    Sample: sample_from_dict,
    Measurement: measurement_from_dict,
}


def from_dict(data: Mapping[str, Any], kind: type[R]) -> R:
    """Build a record from a JSON-compatible dict.

    Keys may be the schema field names or their lowerCamelCase JSON names.

    Args:
        data: Parsed JSON object.
        kind: Sample or Measurement.

    Raises:
        TypeMismatch: If a field holds a value of the wrong JSON type.
        MalformedInput: If a value has the right type but cannot be parsed.
    """
    builder = _FROM_DICT.get(kind)
    if builder is None:
        raise TypeError(f"cannot build {kind!r}; expected Sample or Measurement")
    return builder(data)


def from_json(text: str | bytes, kind: type[R]) -> R:
    """Parse a JSON document into a record.

    Raises:
        MalformedInput: If the text is not valid JSON.
        TypeMismatch: If a field holds a value of the wrong JSON type.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, UnicodeDecodeError and oversized integer literals
        raise MalformedInput(f"invalid JSON: {e}") from e
    return from_dict(data, kind)
