"""YAML representation of Sample and Measurement.

Uses the same mapping as the JSON representation. Timestamps stay RFC 3339
strings: the loader does not turn them into datetimes, which would drop
the nanoseconds.
"""

from typing import TypeVar

import yaml

from jarvis_models.core.config import DEFAULT_OPTIONS, CodecOptions
from jarvis_models.core.encoding.json_format import from_dict, to_dict
from jarvis_models.core.exceptions import MalformedInput
from jarvis_models.core.models import Measurement, Record, Sample

R = TypeVar("R", Sample, Measurement)


class _Loader(yaml.SafeLoader):
    """SafeLoader that keeps timestamp scalars as strings."""


_Loader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_scalar)


def to_yaml(record: Record, options: CodecOptions = DEFAULT_OPTIONS) -> str:
    """Serialize a record to a YAML document.

    Keys keep the schema field order. json_indent is ignored.
    """
    return yaml.safe_dump(
        to_dict(record, options),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def from_yaml(text: str | bytes, kind: type[R]) -> R:
    """Parse a YAML document into a record.

    Raises:
        MalformedInput: If the text is not valid YAML.
        TypeMismatch: If a field holds a value of the wrong type.
    """
    try:
        data = yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as e:
        raise MalformedInput(f"invalid YAML: {e}") from e
    return from_dict(data, kind)
