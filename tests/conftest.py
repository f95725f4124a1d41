"""
Shared fixtures for influxprep tests.
"""

from datetime import datetime, timezone

import pytest

from influxprep.models import Message, MessageMetadata

BASE_TIME = datetime(2022, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
BASE_TIME_MS = 1647345600000


def make_metadata() -> MessageMetadata:
    return MessageMetadata(
        hardware_serial="0002CC01000004A1",
        dev_id="catena4430-01",
        display_id="Lab feeder 1",
        display_key="lab-feeder-1",
        node_type="Catena 4430",
        platform_type="Model4430",
        radio_type="LoRaWAN",
        application_name="mouse-lab",
    )


@pytest.fixture
def metadata() -> MessageMetadata:
    """Device metadata shared by every sample message."""
    return make_metadata()


@pytest.fixture
def format21_message() -> Message:
    """A format 0x21 message with nested values."""
    return Message(
        id="msg-21",
        counter=42,
        payload={
            "vBat": 3.91,
            "boot": 7,
            "tempC": 21.5,
            "rh": 48.0,
            "p": {"inside": 1012.5, "outside": 1011.0},
            "activity": [0.5, 0.25],
            "unlisted": 99,
        },
        payload_raw=bytes([0x21, 0x01, 0x02]),
        metadata=make_metadata(),
    )


@pytest.fixture
def format22_message() -> Message:
    """A format 0x22 message with three activity samples."""
    return Message(
        id="msg-22",
        counter=7,
        payload={
            "time": BASE_TIME,
            "counter": 7,
            "Vbat": 3.88,
            "tempC": 22.25,
            "pellets": [{"Total": 120, "Delta": 3}, {"Total": 80, "Delta": 0}],
            "activity": [10, 20, 30],
        },
        payload_raw=bytes([0x22, 0x0A, 0xFF]),
        metadata=make_metadata(),
    )
