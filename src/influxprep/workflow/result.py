"""
Prep result dataclass.

Holds the output of preparing one message for the database.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from influxprep.models.point import Point


@dataclass
class PrepResult:
    """
    Result of preparing a message.

    Contains the ordered points and any issues encountered by the preparer.

    Attributes:
        payload: Points, ascending by time
        message_id: Identifier of the source message
        message_format: Format the message was prepared as ("0x21"/"0x22")
        warnings: Non-fatal issues encountered
        errors: Fatal issues that prevented preparation
    """

    payload: list[Point] = field(default_factory=list)

    # Source message
    message_id: Optional[str] = None
    message_format: Optional[str] = None

    # Issues and warnings
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Check if at least one point was built."""
        return len(self.payload) > 0

    @property
    def has_errors(self) -> bool:
        """Check if there were any errors."""
        return len(self.errors) > 0

    def to_payload(self) -> dict[str, Any]:
        """Return ``{"payload": [[fields, tags], ...]}`` for the ingester."""
        return {"payload": [point.as_pair() for point in self.payload]}

    def timestamps(self) -> NDArray[np.int64]:
        """Timestamps of the points that carry one, in payload order."""
        stamps = [point.timestamp for point in self.payload if point.timestamp is not None]
        return np.asarray(stamps, dtype=np.int64)

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = ["Prep Summary:"]
        lines.append(f"  Message: {self.message_id or 'Unknown'}")
        lines.append(f"  Format: {self.message_format or 'Unknown'}")
        lines.append(f"  Points: {len(self.payload)}")

        if self.payload:
            tags = self.payload[0].tags
            lines.append(f"    Device: {tags.get('devID') or tags.get('devEUI') or 'Unknown'}")
            stamps = self.timestamps()
            if stamps.size:
                lines.append(f"    Time range (ns): {stamps.min()} - {stamps.max()}")
            lines.append(f"    Fields in latest point: {len(self.payload[-1].fields)}")

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for w in self.warnings[:5]:  # Limit to first 5
                lines.append(f"  - {w}")

        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  - {e}")

        return "\n".join(lines)
