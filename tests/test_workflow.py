"""
Tests for the record builders and the RecordPreparer workflow.
"""

from datetime import datetime, timezone

import pytest

from influxprep.enums import MessageFormat
from influxprep.models import Message
from influxprep.workflow import (
    PrepResult,
    RecordPreparer,
    build_format21_points,
    build_format22_points,
    init_fields_and_tags,
)
from influxprep.workflow.builders import to_epoch_ms, to_hex_buffer

from conftest import BASE_TIME, BASE_TIME_MS, make_metadata

EXPECTED_TAGS = {
    "devEUI": "0002CC01000004A1",
    "devID": "catena4430-01",
    "displayName": "Lab feeder 1",
    "displayKey": "lab-feeder-1",
    "nodeType": "Catena 4430",
    "platformType": "Model4430",
    "radioType": "LoRaWAN",
    "applicationName": "mouse-lab",
}


class TestConversions:
    """Tests for builder helper conversions."""

    def test_hex_buffer(self):
        """Bytes become lower-case, zero-padded hex."""
        assert to_hex_buffer(bytes([0x0A, 0xFF])) == "0aff"
        assert to_hex_buffer([0, 1, 16]) == "000110"
        assert to_hex_buffer(b"") == ""

    def test_epoch_ms_from_aware_datetime(self):
        """Aware datetimes convert to epoch milliseconds."""
        assert to_epoch_ms(BASE_TIME) == BASE_TIME_MS

    def test_epoch_ms_from_naive_datetime(self):
        """Naive datetimes are taken as UTC."""
        naive = datetime(2022, 3, 15, 12, 0, 0, 250000)
        assert to_epoch_ms(naive) == BASE_TIME_MS + 250

    def test_epoch_ms_from_number(self):
        """Numbers are already epoch milliseconds."""
        assert to_epoch_ms(1000000) == 1000000

    def test_init_fields_and_tags_scales_time(self, format22_message):
        """Epoch ms input is stored as epoch ns."""
        point = init_fields_and_tags(format22_message, 1000000)
        assert point.fields == {"msgID": "msg-22", "time": 1000000 * 10**6}
        assert point.fields["time"] == 1e12
        assert point.tags == EXPECTED_TAGS


class TestFormat21Builder:
    """Tests for the format 0x21 builder."""

    def test_single_point(self, format21_message):
        """Exactly one point is produced."""
        result = build_format21_points(format21_message)
        assert isinstance(result, PrepResult)
        assert len(result.payload) == 1
        assert result.message_format == "0x21"

    def test_fixed_fields_and_tags(self, format21_message):
        """Message id, counter and the metadata tags are always present."""
        point = build_format21_points(format21_message).payload[0]
        assert point.fields["msgID"] == "msg-21"
        assert point.fields["counter"] == 42
        assert point.tags == EXPECTED_TAGS

    def test_allow_listed_fields_flattened_with_dots(self, format21_message):
        """Nested values and arrays use dotted keys."""
        fields = build_format21_points(format21_message).payload[0].fields
        assert fields["vBat"] == 3.91
        assert fields["p.inside"] == 1012.5
        assert fields["p.outside"] == 1011.0
        assert fields["activity.0"] == 0.5
        assert fields["activity.1"] == 0.25
        assert "activity" not in fields

    def test_unlisted_and_absent_keys_skipped(self, format21_message):
        """Only allow-listed keys present in the payload appear."""
        fields = build_format21_points(format21_message).payload[0].fields
        assert "unlisted" not in fields
        for absent in ("vBus", "vSys", "tDewC", "tHeatIndexC", "p0", "irradiance"):
            assert absent not in fields

    def test_no_timestamp(self, format21_message):
        """Format 0x21 points carry no time field."""
        point = build_format21_points(format21_message).payload[0]
        assert point.timestamp is None

    def test_empty_payload(self):
        """A bare message still yields one point."""
        message = Message(id="bare", counter=1, metadata=make_metadata())
        result = build_format21_points(message)
        assert len(result.payload) == 1
        assert result.payload[0].fields == {"msgID": "bare", "counter": 1}


class TestFormat22Builder:
    """Tests for the format 0x22 builder."""

    def test_one_point_per_activity_sample(self, format22_message):
        """Three samples give three points."""
        result = build_format22_points(format22_message)
        assert len(result.payload) == 3
        assert result.message_format == "0x22"

    def test_points_ascending_with_backdated_samples(self, format22_message):
        """Oldest sample first, one minute apart."""
        points = build_format22_points(format22_message).payload
        ns = 10**6
        assert [p.timestamp for p in points] == [
            (BASE_TIME_MS - 120000) * ns,
            (BASE_TIME_MS - 60000) * ns,
            BASE_TIME_MS * ns,
        ]
        assert [p.fields["activity"] for p in points] == [30, 20, 10]

    def test_latest_point_has_measurements(self, format22_message):
        """Only the most recent point carries the payload values."""
        points = build_format22_points(format22_message).payload
        latest = points[-1]
        assert latest.fields["message_raw"] == "220aff"
        assert latest.fields["counter"] == 7
        assert latest.fields["Vbat"] == 3.88
        assert latest.fields["pellets[0].Total"] == 120
        assert latest.fields["pellets[1].Delta"] == 0

        for older in points[:-1]:
            assert set(older.fields) == {"msgID", "time", "activity"}

    def test_every_point_shares_tags(self, format22_message):
        """Tags are identical across the result."""
        points = build_format22_points(format22_message).payload
        for point in points:
            assert point.tags == EXPECTED_TAGS

    def test_empty_activity(self, format22_message):
        """No samples means one point without an activity field."""
        format22_message.payload["activity"] = []
        points = build_format22_points(format22_message).payload
        assert len(points) == 1
        assert "activity" not in points[0].fields
        assert points[0].timestamp == BASE_TIME_MS * 10**6

    def test_missing_activity(self, format22_message):
        """No activity key means one point."""
        del format22_message.payload["activity"]
        points = build_format22_points(format22_message).payload
        assert len(points) == 1
        assert "activity" not in points[0].fields

    def test_single_activity_sample(self, format22_message):
        """One sample is stored as a scalar on the only point."""
        format22_message.payload["activity"] = [0.75]
        points = build_format22_points(format22_message).payload
        assert len(points) == 1
        assert points[0].fields["activity"] == 0.75

    def test_hex_dump(self, format22_message):
        """The raw payload is dumped in hex."""
        format22_message.payload_raw = bytes([0x0A, 0xFF])
        latest = build_format22_points(format22_message).payload[-1]
        assert latest.fields["message_raw"] == "0aff"

    def test_epoch_ms_time(self, format22_message):
        """Integer payload time is treated as epoch ms."""
        format22_message.payload["time"] = 1000000
        format22_message.payload["activity"] = []
        point = build_format22_points(format22_message).payload[0]
        assert point.fields["time"] == 10**12


class TestRecordPreparer:
    """Tests for the RecordPreparer orchestrator."""

    def test_detects_format_from_raw_byte(self, format21_message, format22_message):
        """The leading raw byte picks the builder."""
        preparer = RecordPreparer()
        assert preparer.prepare(format21_message).message_format == "0x21"
        assert preparer.prepare(format22_message).message_format == "0x22"

    def test_explicit_format_overrides_detection(self, format22_message):
        """A forced format wins over the raw byte."""
        format22_message.counter = 3
        result = RecordPreparer().prepare(format22_message, MessageFormat.FORMAT_21)
        assert result.message_format == "0x21"
        assert len(result.payload) == 1
        assert result.payload[0].fields["counter"] == 3

    def test_format_inferred_from_payload(self, format22_message):
        """Without a raw payload, a time value means format 0x22."""
        format22_message.payload_raw = b""
        result = RecordPreparer().prepare(format22_message)
        assert result.message_format == "0x22"
        assert any("inferred" in w for w in result.warnings)

    def test_unknown_format_byte_warns(self, format21_message):
        """An unknown raw byte falls back to payload inference."""
        format21_message.payload_raw = bytes([0x14])
        result = RecordPreparer().prepare(format21_message)
        assert result.message_format == "0x21"
        assert any("0x14" in w for w in result.warnings)

    def test_unsupported_explicit_format(self, format21_message):
        """An unknown forced format is an error."""
        result = RecordPreparer().prepare(format21_message, "0x99")
        assert result.has_errors
        assert result.payload == []

    def test_builder_failure_recorded(self, format22_message):
        """Missing time in a format 0x22 message is reported, not raised."""
        del format22_message.payload["time"]
        result = RecordPreparer().prepare(format22_message)
        assert result.has_errors
        assert "0x22" in result.errors[0]
        assert not result.is_complete

    def test_prepare_many(self, format21_message, format22_message):
        """Each message is prepared independently."""
        results = RecordPreparer().prepare_many([format21_message, format22_message])
        assert [len(r.payload) for r in results] == [1, 3]


class TestPrepResult:
    """Tests for the PrepResult container."""

    def test_to_payload_shape(self, format22_message):
        """Payload is a list of [fields, tags] pairs."""
        output = build_format22_points(format22_message).to_payload()
        assert list(output) == ["payload"]
        assert len(output["payload"]) == 3
        fields, tags = output["payload"][0]
        assert fields["activity"] == 30
        assert tags == EXPECTED_TAGS

    def test_timestamps(self, format22_message):
        """Timestamps come back as an int64 array."""
        stamps = build_format22_points(format22_message).timestamps()
        assert stamps.dtype.name == "int64"
        assert list(stamps) == sorted(stamps)

    def test_summary(self, format22_message):
        """Summary mentions the message and point count."""
        summary = build_format22_points(format22_message).summary()
        assert "msg-22" in summary
        assert "Points: 3" in summary


class TestTagCopy:
    """Tests for copying metadata into tags."""

    def test_numeric_metadata_reaches_tags_unchanged(self, format21_message):
        """Tag values are copied without conversion."""
        format21_message.metadata.display_key = 17
        point = build_format21_points(format21_message).payload[0]
        assert point.tags["displayKey"] == 17
