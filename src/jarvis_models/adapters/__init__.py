"""Adapters implementing core ports."""

from jarvis_models.adapters.codecs import JsonCodec, ProtobufCodec, YamlCodec, codec_for

__all__ = [
    "JsonCodec",
    "ProtobufCodec",
    "YamlCodec",
    "codec_for",
]
