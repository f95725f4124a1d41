"""
Message detection utilities.

Functions for detecting the format of a message and summarising message
files.
"""

import logging
from pathlib import Path
from typing import Optional

from influxprep.enums import MessageFormat
from influxprep.models.message import Message

from .types import MessageInfo

logger = logging.getLogger(__name__)


def detect_message_format(message: Message) -> Optional[MessageFormat]:
    """
    Detect the format of a message from its leading raw byte.

    Args:
        message: Decoded uplink message

    Returns:
        MessageFormat, or None if there is no raw payload or the byte is unknown

    Example:
        >>> detect_message_format(Message(_msgid="m", payload_raw=b"\\x22..."))
        MessageFormat.FORMAT_22
    """
    format_byte = message.format_byte
    if format_byte is None:
        return None
    try:
        return MessageFormat.from_byte(format_byte)
    except ValueError:
        logger.debug(f"Message {message.id} has unknown format byte 0x{format_byte:02x}")
        return None


def detect_file(file_path: str | Path) -> MessageInfo:
    """
    Summarise a message file.

    Only the first message of a multi-message file is described in detail.

    Args:
        file_path: Path to the message JSON file

    Returns:
        MessageInfo

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a valid message document
    """
    from influxprep.parsers import MessageParser

    path = Path(file_path)
    messages = MessageParser().parse_many(path)

    info = MessageInfo(
        path=str(path.absolute()),
        filename=path.name,
        message_count=len(messages),
    )

    if messages:
        first = messages[0]
        info.message_id = first.id
        info.device = first.metadata.dev_id or first.metadata.hardware_serial
        info.message_format = detect_message_format(first)
        info.port = first.port
        info.payload_keys = sorted(first.payload.keys())
        info.activity_samples = len(first.activity)

    return info
