"""
PyArrow schema definitions for point tables.

The tag columns and the base fields are fixed; measurement fields vary with
the message format and are appended from the data.
"""

from typing import Any

import pyarrow as pa

from influxprep.models.point import TIME_FIELD
from influxprep.workflow.builders.common import TAG_ATTRIBUTES

# Fixed leading columns of every point table
BASE_SCHEMA = pa.schema(
    [
        pa.field(TIME_FIELD, pa.int64(), metadata={b"description": b"Epoch nanoseconds"}),
        ("msgID", pa.string()),
    ]
    + [(tag, pa.string()) for tag in TAG_ATTRIBUTES]
)


def build_point_schema(records: list[dict[str, Any]]) -> pa.Schema:
    """
    Build the schema for a point table.

    Measurement columns follow BASE_SCHEMA in first-seen order. A column
    holding both integers and floats is stored as float64; any other mix is
    stored as string.

    Args:
        records: Flat point rows (see serializers.point_to_record)

    Returns:
        The table schema
    """
    columns: dict[str, set[pa.DataType]] = {}
    for record in records:
        for name, value in record.items():
            if name in BASE_SCHEMA.names:
                continue
            types = columns.setdefault(name, set())
            if value is not None:
                types.add(_infer_type(value))

    extra = [pa.field(name, _merge_types(types)) for name, types in columns.items()]
    return pa.schema(list(BASE_SCHEMA) + extra)


def _infer_type(value: Any) -> pa.DataType:
    """Arrow type for a field value."""
    if isinstance(value, bool):
        return pa.bool_()
    if isinstance(value, int):
        return pa.int64()
    if isinstance(value, float):
        return pa.float64()
    return pa.string()


def _merge_types(types: set[pa.DataType]) -> pa.DataType:
    """Single column type for the value types seen."""
    if len(types) == 1:
        return next(iter(types))
    if types == {pa.int64(), pa.float64()}:
        return pa.float64()
    return pa.string()
