"""Codec adapters implementing CodecPort."""

import logging
from typing import TypeVar

from jarvis_models.core.config import DEFAULT_OPTIONS, CodecOptions
from jarvis_models.core.encoding import json_format, protobuf, yaml_format
from jarvis_models.core.exceptions import MalformedInput
from jarvis_models.core.models import Measurement, Record, Sample

logger = logging.getLogger(__name__)

R = TypeVar("R", Sample, Measurement)


# @tra: Adapter.Codec.ImplementsCodecPort
class ProtobufCodec:
    """Binary protobuf codec.

    Example:
        ```python
        codec = ProtobufCodec()
        data = codec.encode(measurement)
        assert codec.decode(data, Measurement) == measurement
        ```
    """

    content_type = "application/x-protobuf"

    def __init__(self, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        self._options = options

    @property
    def options(self) -> CodecOptions:
        return self._options

    def encode(self, record: Record) -> bytes:
        return protobuf.encode(record)

    def decode(self, data: bytes, kind: type[R]) -> R:
        try:
            return protobuf.decode(data, kind, self._options)
        except MalformedInput as e:
            logger.debug("Failed to decode %s from protobuf: %s", kind.__name__, e)
            raise


class JsonCodec:
    """UTF-8 JSON codec using the schema field names as keys."""

    content_type = "application/json"

    def __init__(self, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        self._options = options

    @property
    def options(self) -> CodecOptions:
        return self._options

    def encode(self, record: Record) -> bytes:
        return json_format.to_json(record, self._options).encode("utf-8")

    def decode(self, data: bytes, kind: type[R]) -> R:
        try:
            return json_format.from_json(data, kind)
        except MalformedInput as e:
            logger.debug("Failed to decode %s from JSON: %s", kind.__name__, e)
            raise


class YamlCodec:
    """UTF-8 YAML codec with the same keys and values as JsonCodec."""

    content_type = "application/yaml"

    def __init__(self, options: CodecOptions = DEFAULT_OPTIONS) -> None:
        self._options = options

    @property
    def options(self) -> CodecOptions:
        return self._options

    def encode(self, record: Record) -> bytes:
        return yaml_format.to_yaml(record, self._options).encode("utf-8")

    def decode(self, data: bytes, kind: type[R]) -> R:
        try:
            return yaml_format.from_yaml(data, kind)
        except MalformedInput as e:
            logger.debug("Failed to decode %s from YAML: %s", kind.__name__, e)
            raise


_BY_CONTENT_TYPE = {
    ProtobufCodec.content_type: ProtobufCodec,
    JsonCodec.content_type: JsonCodec,
    YamlCodec.content_type: YamlCodec,
}


def codec_for(
    content_type: str, options: CodecOptions = DEFAULT_OPTIONS
) -> ProtobufCodec | JsonCodec | YamlCodec:
    """Return a codec for a MIME content type.

    Parameters such as "; charset=utf-8" are ignored.

    Raises:
        ValueError: If no codec handles the content type.
    """
    base = content_type.split(";", 1)[0].strip().lower()
    try:
        return _BY_CONTENT_TYPE[base](options)
    except KeyError:
        raise ValueError(f"unsupported content type: {content_type!r}") from None
