"""
Tools module for message detection.

Module structure:
- types.py: MessageInfo dataclass
- detection.py: Message format detection and file summaries
"""

from .detection import detect_file, detect_message_format
from .types import MessageInfo

__all__ = [
    # Types
    "MessageInfo",
    # Detection functions
    "detect_message_format",
    "detect_file",
]
