"""
Tests for the influxprep models.
"""

import pytest

from influxprep.enums import MessageFormat
from influxprep.models import Message, MessageMetadata, Point


class TestMessageFormat:
    """Tests for MessageFormat enum."""

    def test_format_byte(self):
        """Enum values map to their format bytes."""
        assert MessageFormat.FORMAT_21.format_byte == 0x21
        assert MessageFormat.FORMAT_22.format_byte == 0x22

    def test_from_byte(self):
        """Format bytes map back to enum members."""
        assert MessageFormat.from_byte(0x22) is MessageFormat.FORMAT_22

    def test_from_unknown_byte(self):
        """Unknown bytes raise ValueError."""
        with pytest.raises(ValueError):
            MessageFormat.from_byte(0x14)


class TestMessageMetadata:
    """Tests for MessageMetadata model."""

    def test_create_by_alias(self):
        """The camelCase local keys are accepted as aliases."""
        meta = MessageMetadata(nodeType="Catena 4430", applicationName="lab")
        assert meta.node_type == "Catena 4430"
        assert meta.application_name == "lab"

    def test_defaults_are_none(self):
        """Every attribute is optional."""
        meta = MessageMetadata()
        assert meta.hardware_serial is None
        assert meta.radio_type is None


class TestMessage:
    """Tests for Message model."""

    def test_create_by_alias(self):
        """The Node-RED _msgid key populates id."""
        message = Message(_msgid="abc", counter=3)
        assert message.id == "abc"
        assert message.counter == 3
        assert message.payload == {}
        assert message.payload_raw == b""

    def test_format_byte(self):
        """The first raw byte is exposed."""
        assert Message(id="a", payload_raw=b"\x22\x01").format_byte == 0x22
        assert Message(id="a").format_byte is None

    def test_activity(self):
        """Activity samples default to an empty list."""
        assert Message(id="a").activity == []
        assert Message(id="a", payload={"activity": [1, 2]}).activity == [1, 2]

    def test_str(self, format21_message):
        """String form names the device."""
        assert "catena4430-01" in str(format21_message)


class TestPoint:
    """Tests for Point model."""

    def test_empty_point(self):
        """A new point has empty maps and no timestamp."""
        point = Point()
        assert point.fields == {}
        assert point.tags == {}
        assert point.timestamp is None

    def test_as_pair(self):
        """as_pair returns [fields, tags]."""
        point = Point(fields={"time": 5, "rh": 40.0}, tags={"devID": "d"})
        assert point.as_pair() == [{"time": 5, "rh": 40.0}, {"devID": "d"}]
        assert point.timestamp == 5

    def test_fields_are_mutable(self):
        """Builders fill fields in place."""
        point = Point()
        point.fields["msgID"] = "m"
        assert point.as_pair()[0] == {"msgID": "m"}
