"""Measurement interchange schema and codecs.

Defines the Sample and Measurement records and their protobuf-compatible
binary encoding, plus JSON and YAML representations for debugging and APIs.
"""

from jarvis_models.adapters.codecs import JsonCodec, ProtobufCodec, YamlCodec, codec_for
from jarvis_models.core.config import DEFAULT_OPTIONS, CodecOptions
from jarvis_models.core.encoding.json_format import from_dict, from_json, to_dict, to_json
from jarvis_models.core.encoding.ndjson import decode_measurements, encode_measurements
from jarvis_models.core.encoding.protobuf import (
    decode,
    decode_delimited,
    decode_measurement,
    decode_sample,
    encode,
    encode_delimited,
)
from jarvis_models.core.encoding.yaml_format import from_yaml, to_yaml
from jarvis_models.core.enums import EntityType, MetricType, SampleType
from jarvis_models.core.exceptions import CodecError, EncodeError, MalformedInput, TypeMismatch
from jarvis_models.core.models import Measurement, Sample, Timestamp
from jarvis_models.core.ports import CodecPort
from jarvis_models.core.samples import counter, gauge, measurement
from jarvis_models.core.units import format_value, unit_for

__all__ = [
    # models
    "Measurement",
    "Sample",
    "Timestamp",
    # enumerations
    "EntityType",
    "MetricType",
    "SampleType",
    # helpers
    "counter",
    "gauge",
    "measurement",
    "format_value",
    "unit_for",
    # binary codec
    "encode",
    "decode",
    "decode_sample",
    "decode_measurement",
    "encode_delimited",
    "decode_delimited",
    # text codec
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "to_yaml",
    "from_yaml",
    "encode_measurements",
    "decode_measurements",
    # configuration
    "CodecOptions",
    "DEFAULT_OPTIONS",
    # ports and adapters
    "CodecPort",
    "JsonCodec",
    "ProtobufCodec",
    "YamlCodec",
    "codec_for",
    # exceptions
    "CodecError",
    "EncodeError",
    "MalformedInput",
    "TypeMismatch",
]
