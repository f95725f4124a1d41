"""
Workflow module for preparing messages for the time-series database.

Module structure:
- flatten.py: Flattening of nested payload values
- builders/: Record builders for formats 0x21 and 0x22
- result.py: PrepResult dataclass
- preparer.py: Main RecordPreparer orchestrator class
"""

from typing import Optional

# Re-export preparer
from .preparer import RecordPreparer

# Re-export builders for advanced use
from .builders import (
    build_format21_points,
    build_format22_points,
    init_fields_and_tags,
)
from .flatten import flatten, insert_value, kind_of

# Re-export result types
from .result import PrepResult

__all__ = [
    # Main classes
    "PrepResult",
    "RecordPreparer",
    # Record builders (for custom workflows)
    "build_format21_points",
    "build_format22_points",
    "init_fields_and_tags",
    # Flattening
    "flatten",
    "insert_value",
    "kind_of",
    # Convenience function
    "prepare_from_file",
]


def prepare_from_file(
    message_path: str,
    message_format: Optional[str] = None,
) -> list[PrepResult]:
    """
    Convenience function to prepare every message in a JSON file.

    Args:
        message_path: Path to a message JSON file (object or array of objects)
        message_format: Force a format ("0x21" or "0x22")

    Returns:
        One PrepResult per message

    Example:
        results = prepare_from_file("/data/uplink.json")
        for result in results:
            print(result.summary())
    """
    from influxprep.parsers import MessageParser

    messages = MessageParser().parse_many(message_path)
    return RecordPreparer().prepare_many(messages, message_format)
