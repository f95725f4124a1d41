"""
Record builders for the prep workflow.

Each builder converts one decoded message into an ordered list of points.
"""

from influxprep.workflow.builders.common import (
    TAG_ATTRIBUTES,
    init_fields_and_tags,
    metadata_tags,
    to_epoch_ms,
    to_hex_buffer,
)
from influxprep.workflow.builders.format21 import build_format21_points
from influxprep.workflow.builders.format22 import build_format22_points

__all__ = [
    "build_format21_points",
    "build_format22_points",
    "init_fields_and_tags",
    "metadata_tags",
    "to_epoch_ms",
    "to_hex_buffer",
    "TAG_ATTRIBUTES",
]
