"""Codec configuration."""

from dataclasses import dataclass

DEFAULT_MAX_MESSAGE_SIZE = 64 * 1024 * 1024


@dataclass(frozen=True)
class CodecOptions:
    """Tunables shared by the binary and textual codecs.

    Attributes:
        preserve_unknown_fields: Keep unrecognized wire fields on decoded
            records so they are written back on re-encode.
        max_message_size: Largest binary input accepted by decode, in bytes.
            0 disables the check.
        json_enums_as_ints: Render enums as numbers instead of names.
        json_indent: Indentation passed to json.dumps (None for compact).
    """

    preserve_unknown_fields: bool = True
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE
    json_enums_as_ints: bool = False
    json_indent: int | None = None

    def __post_init__(self) -> None:
        if self.max_message_size < 0:
            raise ValueError("max_message_size must be >= 0")
        if self.json_indent is not None and self.json_indent < 0:
            raise ValueError("json_indent must be >= 0 or None")


DEFAULT_OPTIONS = CodecOptions()
