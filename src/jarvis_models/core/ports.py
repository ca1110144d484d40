"""Port interface for record codecs.

The protocol defines the contract codec adapters must implement. Code that
moves records around depends only on this interface, not on a concrete
wire format.
"""

from typing import Protocol, TypeVar, runtime_checkable

from jarvis_models.core.models import Measurement, Record, Sample

R = TypeVar("R", Sample, Measurement)


@runtime_checkable
class CodecPort(Protocol):
    """Port for encoding and decoding records.

    Examples: ProtobufCodec, JsonCodec.
    """

    content_type: str

    def encode(self, record: Record) -> bytes:
        """Encode a Sample or Measurement."""
        ...

    def decode(self, data: bytes, kind: type[R]) -> R:
        """Decode bytes into a record of the given kind.

        Raises:
            MalformedInput: If the data cannot be decoded.
        """
        ...
