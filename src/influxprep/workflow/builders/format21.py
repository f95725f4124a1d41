"""
Record builder for port 1 format 0x21 messages.

Produces a single point: message id and counter as fields, the device
metadata as tags, and the allow-listed payload values flattened with dotted
keys.
"""

import logging

from influxprep.enums import FlattenStyle, MessageFormat
from influxprep.models.message import Message
from influxprep.models.point import Point
from influxprep.workflow.flatten import insert_value
from influxprep.workflow.result import PrepResult

from .common import TAG_KEYS, copy_tags, metadata_tags

logger = logging.getLogger(__name__)

# Payload keys copied into the fields map
FIELD_KEYS = (
    "vBat", "vBus", "vSys", "boot", "tempC", "tDewC", "tHeatIndexC",
    "p", "p0", "rh", "irradiance", "activity",
)


def build_format21_points(message: Message) -> PrepResult:
    """
    Build the point for a format 0x21 message.

    Arrays are flattened as mappings from index to element
    (``activity.0``), not with bracket notation.

    Args:
        message: Decoded uplink message

    Returns:
        PrepResult holding exactly one point
    """
    point = Point()
    point.fields["msgID"] = message.id
    point.fields["counter"] = message.counter
    point.tags.update(metadata_tags(message))

    payload = message.payload
    for key in FIELD_KEYS:
        if key in payload:
            insert_value(point.fields, key, payload[key], FlattenStyle.DOTTED)

    copy_tags(point.tags, payload, TAG_KEYS)

    logger.debug(f"Built format 0x21 point with {len(point.fields)} fields")

    return PrepResult(
        payload=[point],
        message_id=message.id,
        message_format=MessageFormat.FORMAT_21.value,
    )
