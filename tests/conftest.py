"""Shared test fixtures for all test modules."""

import pytest

from jarvis_models.core.enums import EntityType, MetricType, SampleType
from jarvis_models.core.models import Measurement, Sample, Timestamp


@pytest.fixture
def cpu_sample() -> Sample:
    """Sample from the reference round-trip scenario."""
    return Sample(
        entity_type=EntityType(1),
        entity_name="host-a",
        sample_type=SampleType(2),
        sample_name="cpu",
        metric_type=MetricType(1),
        value=42.5,
    )


@pytest.fixture
def cpu_measurement(cpu_sample: Sample) -> Measurement:
    """Measurement from the reference round-trip scenario."""
    return Measurement(
        id="m1",
        source="sensor-7",
        location="rack-3",
        samples=(cpu_sample,),
        measured_at_time=Timestamp(seconds=1700000000, nanos=0),
    )


@pytest.fixture
def oven_sample() -> Sample:
    """Energy counter reported by a smart plug."""
    return Sample(
        entity_type=EntityType.DEVICE,
        entity_name="TP-Link HS110",
        sample_type=SampleType.ELECTRICITY_CONSUMPTION,
        sample_name="Oven",
        metric_type=MetricType.COUNTER,
        value=9695872800.0,
    )


@pytest.fixture
def oven_measurement(oven_sample: Sample) -> Measurement:
    """Measurement with a nanosecond-precision timestamp."""
    return Measurement(
        id="cc6e17bb-fd60-4dde-acc3-0cda7d752acc",
        source="jarvis-tp-link-hs-110-exporter",
        location="My Home",
        samples=(oven_sample,),
        measured_at_time=Timestamp.from_rfc3339("2021-05-01T05:45:03.043614293Z"),
    )
