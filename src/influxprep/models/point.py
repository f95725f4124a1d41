"""
Output point model.

A Point is one row for the time-series database: a fields map holding the
aggregatable values and a tags map holding the indexed identity values.
"""

from typing import Any, Optional

from pydantic import Field

from influxprep.models.base import DataModel

# Name of the field holding the point timestamp in epoch nanoseconds
TIME_FIELD = "time"


class Point(DataModel):
    """
    One (fields, tags) pair.

    Attributes:
        fields: Measurements, counters, message id, raw dump and timestamp
        tags: Device identity and classification values
    """

    fields: dict[str, Any] = Field(default_factory=dict)
    tags: dict[str, Any] = Field(default_factory=dict)

    @property
    def timestamp(self) -> Optional[int]:
        """Timestamp in epoch nanoseconds, if the point carries one."""
        return self.fields.get(TIME_FIELD)

    def as_pair(self) -> list[dict[str, Any]]:
        """Return the ``[fields, tags]`` pair expected by the ingester."""
        return [self.fields, self.tags]

    def __str__(self) -> str:
        """String representation."""
        return f"Point(t={self.timestamp}, {len(self.fields)} fields, {len(self.tags)} tags)"
