"""
Serialization utilities for converting points to output records.

This module turns Point models into InfluxDB line protocol and into flat
rows for Parquet tables.
"""

from typing import Any, Optional

from influxdb_client_3 import Point as InfluxPoint
from influxdb_client_3 import WritePrecision

from influxprep.models.point import TIME_FIELD, Point
from influxprep.workflow import PrepResult

DEFAULT_MEASUREMENT = "catena4430"


def point_to_influx(point: Point, measurement: str = DEFAULT_MEASUREMENT) -> InfluxPoint:
    """
    Convert a point to an InfluxDB client point.

    The ``time`` field becomes the point timestamp (ns precision) and is not
    written as a field. ``None`` values are skipped.

    Args:
        point: The point to convert
        measurement: InfluxDB measurement name

    Returns:
        influxdb_client_3 Point
    """
    influx = InfluxPoint(measurement)

    for key, value in point.tags.items():
        if value is not None:
            influx.tag(key, value)

    for key, value in point.fields.items():
        if key == TIME_FIELD or value is None:
            continue
        influx.field(key, value)

    if point.timestamp is not None:
        influx.time(point.timestamp, write_precision=WritePrecision.NS)

    return influx


def point_to_line(point: Point, measurement: str = DEFAULT_MEASUREMENT) -> str:
    """Render a point as one line of line protocol."""
    return point_to_influx(point, measurement).to_line_protocol()


def points_to_line_protocol(result: PrepResult, measurement: str = DEFAULT_MEASUREMENT) -> str:
    """
    Render all points of a result as line protocol, one line per point.

    Args:
        result: The PrepResult to render
        measurement: InfluxDB measurement name

    Returns:
        Line protocol text with a trailing newline (empty for no points)
    """
    lines = [point_to_line(point, measurement) for point in result.payload]
    lines = [line for line in lines if line]
    return "\n".join(lines) + "\n" if lines else ""


def point_to_record(point: Point) -> dict[str, Any]:
    """
    Convert a point to a flat row for Parquet.

    Args:
        point: The point

    Returns:
        Dict of tag and field columns; ``time`` is None when absent
    """
    record: dict[str, Optional[Any]] = {TIME_FIELD: point.timestamp}
    record.update(point.tags)
    for key, value in point.fields.items():
        if key != TIME_FIELD:
            record[key] = value
    return record
