"""
Shared pieces of the record builders: tag set, key lists and conversions.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Union

from influxprep.models.message import Message
from influxprep.models.point import TIME_FIELD, Point

# Tag name -> MessageMetadata attribute, copied verbatim onto every point
TAG_ATTRIBUTES = {
    "devEUI": "hardware_serial",
    "devID": "dev_id",
    "displayName": "display_id",
    "displayKey": "display_key",
    "nodeType": "node_type",
    "platformType": "platform_type",
    "radioType": "radio_type",
    "applicationName": "application_name",
}

# Payload keys copied as tags (none for either format)
TAG_KEYS: tuple[str, ...] = ()

NS_PER_MS = 1_000_000
MS_PER_MINUTE = 60 * 1000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def metadata_tags(message: Message) -> dict[str, Any]:
    """Build the fixed tag map from message metadata."""
    meta = message.metadata
    return {tag: getattr(meta, attr) for tag, attr in TAG_ATTRIBUTES.items()}


def copy_tags(tags: dict[str, Any], payload: dict[str, Any], tag_keys: Iterable[str]) -> None:
    """Copy allow-listed payload values verbatim into ``tags``."""
    for key in tag_keys:
        if key in payload:
            tags[key] = payload[key]


def to_hex_buffer(data: Union[bytes, bytearray, Iterable[int]]) -> str:
    """Lower-case hex dump, two digits per byte."""
    return "".join(f"{b:02x}" for b in data)


def to_epoch_ms(value: Union[datetime, int, float]) -> int:
    """
    Convert a payload time to epoch milliseconds.

    Naive datetimes are taken as UTC. Numbers are already epoch-ms.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
    return int(value)


def init_fields_and_tags(message: Message, time_ms: int) -> Point:
    """
    Create a point at the given time.

    Args:
        message: Source message (id and metadata)
        time_ms: Point time in epoch milliseconds

    Returns:
        Point with ``msgID`` and ``time`` (epoch ns) fields and the fixed tags
    """
    point = Point()
    point.fields["msgID"] = message.id
    point.fields[TIME_FIELD] = time_ms * NS_PER_MS
    point.tags.update(metadata_tags(message))
    return point
