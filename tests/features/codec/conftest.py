"""BDD step definitions for measurement interchange features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from jarvis_models.adapters.codecs import JsonCodec, ProtobufCodec, YamlCodec, codec_for
from jarvis_models.core.enums import EntityType, SampleType
from jarvis_models.core.exceptions import MalformedInput
from jarvis_models.core.models import Measurement, Timestamp
from jarvis_models.core.ports import CodecPort
from jarvis_models.core.samples import counter
from tests.raw_fields import int_field


@dataclass
class CodecScenarioContext:
    """State shared between the steps of one scenario."""

    original: Measurement = field(default_factory=Measurement)
    codec: CodecPort = field(default_factory=ProtobufCodec)
    data: bytes = b""
    unknown: bytes = b""
    decoded: Measurement | None = None
    error: Exception | None = None


@pytest.fixture
def ctx() -> CodecScenarioContext:
    """Fresh scenario context for each test."""
    return CodecScenarioContext()


# === Background Steps ===
@given(
    parsers.parse(
        'a measurement "{id}" from "{source}" at "{location}" taken at {seconds:d} seconds'
    )
)
def given_measurement(
    ctx: CodecScenarioContext, id: str, source: str, location: str, seconds: int
) -> None:
    ctx.original = Measurement(
        id=id,
        source=source,
        location=location,
        measured_at_time=Timestamp(seconds=seconds),
    )


@given(parsers.parse('a counter sample "{name}" of {value:f} for entity "{entity}"'))
def given_counter_sample(
    ctx: CodecScenarioContext, name: str, value: float, entity: str
) -> None:
    sample = counter(EntityType.DEVICE, entity, SampleType.ELECTRICITY_PRODUCTION, name, value)
    ctx.original = ctx.original.add_sample(sample)


# === Encoding Steps ===
@when("the measurement is encoded as protobuf")
def when_encoded_as_protobuf(ctx: CodecScenarioContext) -> None:
    ctx.codec = ProtobufCodec()
    ctx.data = ctx.codec.encode(ctx.original)


@when("the measurement is encoded as JSON")
def when_encoded_as_json(ctx: CodecScenarioContext) -> None:
    ctx.codec = JsonCodec()
    ctx.data = ctx.codec.encode(ctx.original)


@when("the measurement is encoded as YAML")
def when_encoded_as_yaml(ctx: CodecScenarioContext) -> None:
    ctx.codec = YamlCodec()
    ctx.data = ctx.codec.encode(ctx.original)


@when(parsers.parse("an unknown varint field {number:d} with value {value:d} is appended"))
def when_unknown_field_appended(ctx: CodecScenarioContext, number: int, value: int) -> None:
    ctx.unknown = int_field(number, value)
    ctx.data += ctx.unknown


@when(parsers.parse("the last {n:d} bytes are dropped"))
def when_bytes_dropped(ctx: CodecScenarioContext, n: int) -> None:
    ctx.data = ctx.data[:-n]


@when("the bytes are decoded as a measurement")
def when_decoded(ctx: CodecScenarioContext) -> None:
    try:
        ctx.decoded = ctx.codec.decode(ctx.data, Measurement)
    except MalformedInput as e:
        ctx.error = e


@when(parsers.parse('a codec is requested for "{content_type}"'))
def when_codec_requested(ctx: CodecScenarioContext, content_type: str) -> None:
    ctx.codec = codec_for(content_type)


# === Assertions ===
@then("the decoded measurement equals the original")
def then_decoded_equals_original(ctx: CodecScenarioContext) -> None:
    assert ctx.error is None
    assert ctx.decoded == ctx.original


@then("re-encoding the decoded measurement keeps the unknown field")
def then_unknown_field_kept(ctx: CodecScenarioContext) -> None:
    assert ctx.decoded is not None
    assert ctx.decoded.unknown_fields == ctx.unknown
    assert ctx.codec.encode(ctx.decoded) == ctx.data


@then("decoding fails with a malformed input error")
def then_decoding_fails(ctx: CodecScenarioContext) -> None:
    assert ctx.decoded is None
    assert isinstance(ctx.error, MalformedInput)


@then(parsers.parse('the codec content type is "{expected}"'))
def then_content_type(ctx: CodecScenarioContext, expected: str) -> None:
    assert ctx.codec.content_type == expected
