"""Core domain models for measurement data."""

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Self

from google.protobuf import timestamp_pb2

from jarvis_models.core.enums import EntityType, MetricType, SampleType
from jarvis_models.core.units import format_value

NANOS_PER_SECOND = 1_000_000_000

# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z
MIN_RFC3339_SECONDS = -62_135_596_800
MAX_RFC3339_SECONDS = 253_402_300_799


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point in time independent of any time zone.

    Mirrors google.protobuf.Timestamp.

    Attributes:
        seconds: Signed seconds since 1970-01-01T00:00:00Z.
        nanos: Non-negative fraction of a second, 0 to 999,999,999.
    """

    seconds: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError("Timestamp.seconds must be an int")
        if isinstance(self.nanos, bool) or not isinstance(self.nanos, int):
            raise TypeError("Timestamp.nanos must be an int")
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"Timestamp.nanos out of range: {self.nanos}")

    @classmethod
    def now(cls) -> Self:
        """Return the current time."""
        return cls.from_nanoseconds(time.time_ns())

    @classmethod
    def from_nanoseconds(cls, total: int) -> Self:
        seconds, nanos = divmod(total, NANOS_PER_SECOND)
        return cls(seconds=seconds, nanos=nanos)

    def to_nanoseconds(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanos

    @classmethod
    def from_proto(cls, message: timestamp_pb2.Timestamp) -> Self:
        """Convert a google.protobuf.Timestamp message.

        Raises:
            ValueError: If nanos is outside 0 to 999,999,999.
        """
        return cls(seconds=message.seconds, nanos=message.nanos)

    def to_proto(self) -> timestamp_pb2.Timestamp:
        """Convert to a google.protobuf.Timestamp message.

        Raises:
            ValueError: If seconds does not fit in an int64.
        """
        return timestamp_pb2.Timestamp(seconds=self.seconds, nanos=self.nanos)

    @classmethod
    def from_datetime(cls, value: datetime) -> Self:
        """Convert a datetime, treating naive values as UTC."""
        message = timestamp_pb2.Timestamp()
        message.FromDatetime(value)
        return cls.from_proto(message)

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC datetime, truncating to microseconds."""
        return self.to_proto().ToDatetime(tzinfo=UTC)

    @classmethod
    def from_rfc3339(cls, text: str) -> Self:
        """Parse an RFC 3339 timestamp with up to nanosecond precision.

        Args:
            text: Timestamp such as "2021-05-01T05:45:03.043614293Z".

        Raises:
            ValueError: If the text is not a valid RFC 3339 timestamp.
        """
        message = timestamp_pb2.Timestamp()
        try:
            message.FromJsonString(text)
        except ValueError as e:
            raise ValueError(f"Invalid RFC 3339 timestamp: {text!r}") from e
        return cls.from_proto(message)

    def to_rfc3339(self) -> str:
        """Format as RFC 3339 in UTC with 0, 3, 6 or 9 fractional digits.

        Raises:
            ValueError: If the timestamp lies outside years 0001 to 9999.
        """
        if not MIN_RFC3339_SECONDS <= self.seconds <= MAX_RFC3339_SECONDS:
            raise ValueError(f"Timestamp out of RFC 3339 range: {self.seconds}")
        return self.to_proto().ToJsonString()

def _require_str(owner: str, name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{owner}.{name} must be a str, got {type(value).__name__}")


@dataclass(frozen=True)
class Sample:
    """A single measured value tagged by entity, sample and metric type.

    Attributes:
        entity_type: Kind of entity measured (e.g., DEVICE).
        entity_name: Identifier of the entity instance (e.g., "TP-Link HS110").
        sample_type: Category of the measurement (e.g., ELECTRICITY_CONSUMPTION).
        sample_name: Identifier of the sample within its type (e.g., "Oven").
        metric_type: How the value is interpreted (COUNTER or GAUGE).
        value: The measured quantity.
        unknown_fields: Raw wire fields not known to this schema version.
            Ignored by equality.
    """

    entity_type: EntityType = EntityType.UNSPECIFIED
    entity_name: str = ""
    sample_type: SampleType = SampleType.UNSPECIFIED
    sample_name: str = ""
    metric_type: MetricType = MetricType.UNSPECIFIED
    value: float = 0.0
    unknown_fields: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self) -> None:
        # Plain ints are accepted and promoted; unknown values are rejected
        object.__setattr__(self, "entity_type", EntityType(self.entity_type))
        object.__setattr__(self, "sample_type", SampleType(self.sample_type))
        object.__setattr__(self, "metric_type", MetricType(self.metric_type))
        _require_str("Sample", "entity_name", self.entity_name)
        _require_str("Sample", "sample_name", self.sample_name)
        if isinstance(self.value, bool) or not isinstance(self.value, int | float):
            raise TypeError("Sample.value must be a number")
        try:
            object.__setattr__(self, "value", float(self.value))
        except OverflowError:
            raise ValueError("Sample.value is out of range for a double") from None
        object.__setattr__(self, "unknown_fields", bytes(self.unknown_fields))

    def __str__(self) -> str:
        return format_value(self)


@dataclass(frozen=True)
class Measurement:
    """A timestamped batch of samples from one source and location.

    Attributes:
        id: Identifier of the measurement. Uniqueness is up to the producer.
        source: Producer of the measurement (e.g., an exporter name).
        location: Physical or logical origin (e.g., "My Home").
        samples: Samples in insertion order.
        measured_at_time: When the samples were taken, or None if unset.
        unknown_fields: Raw wire fields not known to this schema version.
            Ignored by equality.
    """

    id: str = ""
    source: str = ""
    location: str = ""
    samples: tuple[Sample, ...] = ()
    measured_at_time: Timestamp | None = None
    unknown_fields: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_str("Measurement", "id", self.id)
        _require_str("Measurement", "source", self.source)
        _require_str("Measurement", "location", self.location)

        samples = tuple(self.samples)
        for sample in samples:
            if not isinstance(sample, Sample):
                raise TypeError("Measurement.samples must contain Sample instances")
        object.__setattr__(self, "samples", samples)

        if isinstance(self.measured_at_time, datetime):
            object.__setattr__(
                self, "measured_at_time", Timestamp.from_datetime(self.measured_at_time)
            )
        elif self.measured_at_time is not None and not isinstance(
            self.measured_at_time, Timestamp
        ):
            raise TypeError("Measurement.measured_at_time must be a Timestamp or datetime")
        object.__setattr__(self, "unknown_fields", bytes(self.unknown_fields))

    def add_sample(self, sample: Sample) -> "Measurement":
        """Return a new Measurement with `sample` appended."""
        return Measurement(
            id=self.id,
            source=self.source,
            location=self.location,
            samples=(*self.samples, sample),
            measured_at_time=self.measured_at_time,
            unknown_fields=self.unknown_fields,
        )


Record = Sample | Measurement
