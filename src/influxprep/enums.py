"""
Enums for message and value classification.

These enums define the message formats handled by the record builders
and the value kinds recognised by the flattening rule.
"""

from enum import Enum


class MessageFormat(str, Enum):
    """Catena uplink message formats, keyed by the leading format byte."""

    FORMAT_21 = "0x21"
    FORMAT_22 = "0x22"

    @property
    def format_byte(self) -> int:
        """Numeric value of the format byte."""
        return int(self.value, 16)

    @classmethod
    def from_byte(cls, value: int) -> "MessageFormat":
        """Look up a format by its byte value."""
        for fmt in cls:
            if fmt.format_byte == value:
                return fmt
        raise ValueError(f"Unknown message format byte: 0x{value:02x}")


class ValueKind(str, Enum):
    """Shape of a payload value as seen by the flattening rule."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class FlattenStyle(str, Enum):
    """How array elements are named when flattened."""

    DOTTED = "dotted"  # activity.0
    BRACKETED = "bracketed"  # activity[0]
