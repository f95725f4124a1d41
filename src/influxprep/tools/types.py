"""
Type definitions for message detection tools.
"""

from dataclasses import dataclass, field
from typing import Optional

from influxprep.enums import MessageFormat


@dataclass
class MessageInfo:
    """Information about a message file."""

    path: str
    filename: str
    message_count: int = 0
    message_id: Optional[str] = None
    device: Optional[str] = None
    message_format: Optional[MessageFormat] = None
    port: Optional[int] = None
    payload_keys: list[str] = field(default_factory=list)
    activity_samples: int = 0

    @property
    def expected_points(self) -> int:
        """Points the first message should produce."""
        if self.message_format == MessageFormat.FORMAT_22:
            return max(1, self.activity_samples)
        return 1
