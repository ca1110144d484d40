"""NDJSON encoder and decoder for measurement batches."""

import json
from collections.abc import Iterable, Iterator

from jarvis_models.core.config import DEFAULT_OPTIONS, CodecOptions
from jarvis_models.core.encoding.json_format import from_dict, to_dict
from jarvis_models.core.exceptions import MalformedInput, TypeMismatch
from jarvis_models.core.models import Measurement


def encode_measurements(
    measurements: Iterable[Measurement], options: CodecOptions = DEFAULT_OPTIONS
) -> str:
    """Encode measurements to newline-delimited JSON.

    Args:
        measurements: An iterable of Measurement objects.
        options: Codec options. json_indent is ignored, every object is
            written on a single line.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no measurements.
    """
    lines = []
    for measurement in measurements:
        obj = to_dict(measurement, options)
        lines.append(json.dumps(obj, ensure_ascii=False, allow_nan=False))

    if not lines:
        return ""

    return "\n".join(lines) + "\n"


def decode_measurements(text: str) -> Iterator[Measurement]:
    """Decode newline-delimited JSON into measurements.

    Blank lines are skipped.

    Args:
        text: NDJSON string.

    Yields:
        One Measurement per non-blank line, in order.

    Raises:
        MalformedInput: If a line is not valid JSON or not a valid
            measurement. The error carries the 1-based line number.
    """
    for number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except ValueError as e:
            raise MalformedInput(f"invalid JSON: {e}", line=number) from e
        try:
            measurement = from_dict(data, Measurement)
        except TypeMismatch as e:
            raise TypeMismatch(e.field, e.expected, e.actual, line=number) from e
        except MalformedInput as e:
            raise MalformedInput(str(e), line=number) from e
        yield measurement
