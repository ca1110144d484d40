"""Hand-assembled protobuf fields for building test inputs."""

import struct

# Wire types
VARINT = 0
I64 = 1
LEN = 2
SGROUP = 3
EGROUP = 4
I32 = 5


def varint(value: int) -> bytes:
    """Encode a varint; negative values use 64-bit two's complement."""
    value &= (1 << 64) - 1
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def tag(field_number: int, wire_type: int) -> bytes:
    return varint((field_number << 3) | wire_type)


def int_field(field_number: int, value: int) -> bytes:
    return tag(field_number, VARINT) + varint(value)


def double_field(field_number: int, value: float) -> bytes:
    return tag(field_number, I64) + struct.pack("<d", value)


def bytes_field(field_number: int, payload: bytes) -> bytes:
    return tag(field_number, LEN) + varint(len(payload)) + payload


def string_field(field_number: int, value: str) -> bytes:
    return bytes_field(field_number, value.encode("utf-8"))
