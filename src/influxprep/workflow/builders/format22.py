"""
Record builder for port 1 format 0x22 messages.

These messages carry a timestamp and up to sixteen activity samples, the
most recent first, each taken one minute before the previous. The builder
emits one point per sample and returns them oldest first.
"""

import logging

from influxprep.enums import FlattenStyle, MessageFormat
from influxprep.models.message import Message
from influxprep.models.point import Point
from influxprep.workflow.flatten import insert_value
from influxprep.workflow.result import PrepResult

from .common import (
    MS_PER_MINUTE,
    TAG_KEYS,
    copy_tags,
    init_fields_and_tags,
    to_epoch_ms,
    to_hex_buffer,
)

logger = logging.getLogger(__name__)

# Payload keys copied into the fields map of the most recent point
FIELD_KEYS = (
    "counter", "Vbat", "Vbus", "Vsys", "boot", "tempC", "tDewC", "tHeatIndexC",
    "p", "p0", "rh", "irradiance", "pellets", "activity",
)

ACTIVITY_KEY = "activity"


def build_format22_points(message: Message) -> PrepResult:
    """
    Build the points for a format 0x22 message.

    The payload ``time`` is required. Point 0 gets the raw hex dump and all
    allow-listed values; each later activity sample ``i`` gets its own point
    backdated by ``i`` minutes.

    Args:
        message: Decoded uplink message

    Returns:
        PrepResult with points ascending by time
    """
    payload = message.payload
    base_ms = to_epoch_ms(payload["time"])

    latest = init_fields_and_tags(message, base_ms)
    fields = latest.fields
    fields["message_raw"] = to_hex_buffer(message.payload_raw)

    for key in FIELD_KEYS:
        if key not in payload:
            continue
        if key == ACTIVITY_KEY and len(payload[key]) > 0:
            fields[ACTIVITY_KEY] = payload[key][0]
        else:
            insert_value(fields, key, payload[key], FlattenStyle.BRACKETED)

    copy_tags(latest.tags, payload, TAG_KEYS)

    points: list[Point] = [latest]
    if ACTIVITY_KEY in payload:
        samples = payload[ACTIVITY_KEY]
        for i in range(1, len(samples)):
            point = init_fields_and_tags(message, base_ms - i * MS_PER_MINUTE)
            insert_value(point.fields, ACTIVITY_KEY, samples[i], FlattenStyle.BRACKETED)
            points.append(point)

    # Ascending timestamps ingest better
    points.reverse()

    logger.debug(f"Built {len(points)} format 0x22 points for message {message.id}")

    return PrepResult(
        payload=points,
        message_id=message.id,
        message_format=MessageFormat.FORMAT_22.value,
    )
