"""Exceptions raised while encoding or decoding records."""


class CodecError(Exception):
    """Base error for all codec failures."""


class EncodeError(CodecError, ValueError):
    """Raised when a record holds a value its target format cannot represent."""


class MalformedInput(CodecError, ValueError):
    """Raised when input bytes or text cannot be decoded into a record.

    Attributes:
        offset: Byte offset into the binary input where decoding failed.
        line: 1-based line number for line-oriented text input.
    """

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        line: int | None = None,
    ) -> None:
        if offset is not None:
            message = f"{message} (at offset {offset})"
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.offset = offset
        self.line = line


class TypeMismatch(MalformedInput):
    """Raised when a known field is encoded with an incompatible type.

    Attributes:
        field: Name of the declared field.
        expected: Description of the declared encoding.
        actual: Description of the encoding found in the input.
    """

    def __init__(
        self,
        field: str,
        expected: str,
        actual: str,
        *,
        offset: int | None = None,
        line: int | None = None,
    ) -> None:
        super().__init__(
            f"field {field!r} expected {expected}, got {actual}",
            offset=offset,
            line=line,
        )
        self.field = field
        self.expected = expected
        self.actual = actual
