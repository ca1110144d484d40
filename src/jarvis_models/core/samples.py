"""Helper functions for creating Sample and Measurement objects."""

import uuid
from collections.abc import Iterable
from datetime import datetime

from jarvis_models.core.enums import EntityType, MetricType, SampleType
from jarvis_models.core.models import Measurement, Sample, Timestamp


def counter(
    entity_type: EntityType,
    entity_name: str,
    sample_type: SampleType,
    sample_name: str,
    value: float,
) -> Sample:
    """Create a counter sample.

    Args:
        entity_type: Kind of entity measured
        entity_name: Entity instance (e.g., "TP-Link HS110")
        sample_type: Measurement category
        sample_name: Sample within its category (e.g., "Oven")
        value: Monotonic total (e.g., consumed energy in joules)

    Returns:
        Sample with metric_type COUNTER
    """
    return Sample(
        entity_type=entity_type,
        entity_name=entity_name,
        sample_type=sample_type,
        sample_name=sample_name,
        metric_type=MetricType.COUNTER,
        value=value,
    )


def gauge(
    entity_type: EntityType,
    entity_name: str,
    sample_type: SampleType,
    sample_name: str,
    value: float,
) -> Sample:
    """Create a gauge sample.

    Args:
        entity_type: Kind of entity measured
        entity_name: Entity instance
        sample_type: Measurement category
        sample_name: Sample within its category
        value: Current reading (e.g., temperature)

    Returns:
        Sample with metric_type GAUGE
    """
    return Sample(
        entity_type=entity_type,
        entity_name=entity_name,
        sample_type=sample_type,
        sample_name=sample_name,
        metric_type=MetricType.GAUGE,
        value=value,
    )


def measurement(
    source: str,
    location: str,
    samples: Iterable[Sample] = (),
    *,
    id: str | None = None,
    measured_at: Timestamp | datetime | None = None,
) -> Measurement:
    """Create a measurement, generating an id and timestamp when omitted.

    Args:
        source: Producer of the measurement (e.g., "jarvis-tp-link-hs-110-exporter")
        location: Origin of the measurement (e.g., "My Home")
        samples: Samples to include, in order
        id: Measurement id (default: random UUID4)
        measured_at: Measurement time (default: now)

    Returns:
        Measurement with the given samples
    """
    return Measurement(
        id=id if id is not None else str(uuid.uuid4()),
        source=source,
        location=location,
        samples=tuple(samples),
        measured_at_time=measured_at if measured_at is not None else Timestamp.now(),
    )
