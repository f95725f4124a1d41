"""
Pydantic models for gateway messages and database points.

- Message / MessageMetadata: decoded uplink input
- Point: one (fields, tags) row of output
"""

from influxprep.enums import FlattenStyle, MessageFormat, ValueKind
from influxprep.models.base import DataModel
from influxprep.models.message import Message, MessageMetadata
from influxprep.models.point import TIME_FIELD, Point

__all__ = [
    "DataModel",
    "Message",
    "MessageMetadata",
    "Point",
    "TIME_FIELD",
    "MessageFormat",
    "ValueKind",
    "FlattenStyle",
]
