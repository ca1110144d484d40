"""Tests for NDJSON measurement encoder."""

import json

import pytest

from jarvis_models.core.encoding.ndjson import decode_measurements, encode_measurements
from jarvis_models.core.exceptions import MalformedInput, TypeMismatch
from jarvis_models.core.models import Measurement, Sample


class TestNdjsonEncoder:
    """Tests for NDJSON encoding of measurements."""

    @pytest.mark.encoding
    def test_encode_single_measurement(self, oven_measurement: Measurement) -> None:
        """Single Measurement encodes to one JSON line."""
        result = encode_measurements([oven_measurement])

        parsed = json.loads(result.strip())
        assert parsed["id"] == "cc6e17bb-fd60-4dde-acc3-0cda7d752acc"
        assert parsed["location"] == "My Home"
        assert parsed["samples"][0]["value"] == 9695872800.0

    @pytest.mark.encoding
    def test_encode_multiple_measurements(self) -> None:
        """Multiple measurements are newline-delimited."""
        measurements = [Measurement(id="first"), Measurement(id="second")]

        result = encode_measurements(measurements)

        lines = result.strip().split("\n")
        assert len(lines) == 2
        assert json.loads(lines[0])["id"] == "first"
        assert json.loads(lines[1])["id"] == "second"

    @pytest.mark.encoding
    def test_encode_empty_iterable(self) -> None:
        """Empty input returns empty string."""
        assert encode_measurements([]) == ""

    @pytest.mark.encoding
    def test_output_ends_with_newline(self) -> None:
        """Each measurement ends with a newline character."""
        assert encode_measurements([Measurement()]).endswith("\n")

    @pytest.mark.encoding
    def test_newlines_in_values_stay_escaped(self) -> None:
        """Embedded newlines cannot split a record across lines."""
        result = encode_measurements([Measurement(location="line\nbreak")])
        assert result.count("\n") == 1


class TestNdjsonDecoder:
    """Tests for NDJSON decoding of measurements."""

    @pytest.mark.encoding
    def test_roundtrip(self, oven_measurement: Measurement, cpu_measurement: Measurement) -> None:
        """Decoding the encoder output yields the same measurements."""
        text = encode_measurements([oven_measurement, cpu_measurement])
        assert list(decode_measurements(text)) == [oven_measurement, cpu_measurement]

    @pytest.mark.encoding
    def test_blank_lines_skipped(self) -> None:
        """Blank and whitespace-only lines are ignored."""
        text = '\n{"id": "a"}\n   \n{"id": "b"}\n\n'
        assert [m.id for m in decode_measurements(text)] == ["a", "b"]

    @pytest.mark.encoding
    def test_invalid_json_reports_line(self) -> None:
        """Syntax errors carry the line number."""
        text = '{"id": "a"}\n{"id": \n'
        with pytest.raises(MalformedInput, match="line 2") as exc_info:
            list(decode_measurements(text))
        assert exc_info.value.line == 2

    @pytest.mark.encoding
    def test_type_mismatch_reports_line(self) -> None:
        """Field type errors keep their type and gain the line number."""
        text = '{"id": "a"}\n\n{"samples": [{"value": false}]}\n'
        with pytest.raises(TypeMismatch) as exc_info:
            list(decode_measurements(text))
        assert exc_info.value.line == 3
        assert exc_info.value.field == "value"

    @pytest.mark.encoding
    def test_decoding_is_lazy(self) -> None:
        """Records before a bad line are still delivered."""
        records = decode_measurements('{"samples": [{}]}\nnot json\n')
        assert next(records).samples == (Sample(),)
        with pytest.raises(MalformedInput):
            next(records)
