"""
Parser for decoded uplink message JSON documents.

Parses the message objects emitted by the Node-RED decoder stage, mapping
the network server's top-level metadata into a Message model.
"""

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Optional

from dateutil import parser as date_parser
from pydantic import ValidationError

from influxprep.models.message import Message, MessageMetadata

logger = logging.getLogger(__name__)

# Top-level message keys that describe the device
METADATA_KEYS = ("hardware_serial", "dev_id", "display_id", "display_key")

# Keys under "local" that classify the device
LOCAL_KEYS = ("nodeType", "platformType", "radioType", "applicationName")


def decode_payload_raw(raw: Any) -> bytes:
    """
    Decode the raw uplink bytes.

    Accepts a base64 string (network server style), a list of byte values,
    or a Node-RED Buffer object (``{"type": "Buffer", "data": [...]}``).

    Raises:
        ValueError: If the value is not one of the accepted encodings
    """
    if raw is None:
        return b""
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    if isinstance(raw, dict) and raw.get("type") == "Buffer":
        raw = raw.get("data", [])
    if isinstance(raw, str):
        try:
            return base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            raise ValueError(f"payload_raw is not valid base64: {e}") from e
    if isinstance(raw, list):
        return bytes(raw)
    raise ValueError(f"Unsupported payload_raw type: {type(raw).__name__}")


def parse_time(value: Any) -> Any:
    """Parse a payload time string; other values pass through."""
    if isinstance(value, str):
        return date_parser.isoparse(value)
    return value


class MessageParser:
    """
    Parser for decoded uplink message JSON.

    Handles the Node-RED message shape with:
    - ``_msgid``, ``counter``, ``port`` at the top level
    - device metadata at the top level and under ``local``
    - decoded values under ``payload``, raw bytes under ``payload_raw``

    A document already carrying a ``metadata`` object is accepted as is.

    Usage:
        parser = MessageParser()
        message = parser.parse("/path/to/uplink.json")

        print(f"{message.id}: {sorted(message.payload)}")
    """

    def parse(self, file_path: str | Path) -> Message:
        """
        Parse a message JSON file holding a single message.

        Args:
            file_path: Path to the JSON file

        Returns:
            Message

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the document is not a message object
        """
        document = self._load(file_path)
        if not isinstance(document, dict):
            raise ValueError(f"Expected a message object in {file_path}")
        return self.parse_dict(document)

    def parse_many(self, file_path: str | Path) -> list[Message]:
        """
        Parse a message JSON file holding one message or an array of them.

        Args:
            file_path: Path to the JSON file

        Returns:
            List of messages in file order
        """
        document = self._load(file_path)
        if isinstance(document, dict):
            return [self.parse_dict(document)]
        if isinstance(document, list):
            return [self.parse_dict(item) for item in document]
        raise ValueError(f"Expected a message object or array in {file_path}")

    def parse_content(self, content: str) -> Message:
        """
        Parse a message from string content.

        Args:
            content: JSON text of one message

        Returns:
            Message
        """
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid message JSON: {e}") from e
        if not isinstance(document, dict):
            raise ValueError("Expected a message object")
        return self.parse_dict(document)

    def parse_dict(self, document: dict[str, Any]) -> Message:
        """
        Build a Message from a decoded JSON object.

        Args:
            document: Message object

        Returns:
            Message

        Raises:
            ValueError: If required keys are missing or malformed
        """
        payload = dict(document.get("payload") or {})
        if "time" in payload:
            payload["time"] = parse_time(payload["time"])

        data = {
            "_msgid": document.get("_msgid", document.get("id")),
            "counter": document.get("counter"),
            "port": document.get("port"),
            "payload": payload,
            "payload_raw": decode_payload_raw(document.get("payload_raw")),
            "metadata": self._extract_metadata(document),
        }

        try:
            message = Message.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid message: {e}") from e

        logger.debug(f"Parsed {message}")
        return message

    @staticmethod
    def _extract_metadata(document: dict[str, Any]) -> MessageMetadata:
        """
        Collect device metadata from the top level and ``local``.

        A nested ``metadata`` object only fills keys missing from those
        places; network server gateway metadata carries none of them.
        """
        local = document.get("local") or {}
        values: dict[str, Optional[Any]] = {key: document.get(key) for key in METADATA_KEYS}
        values.update({key: local.get(key) for key in LOCAL_KEYS})

        nested = document.get("metadata")
        if isinstance(nested, dict):
            for key in METADATA_KEYS + LOCAL_KEYS:
                if values.get(key) is None and nested.get(key) is not None:
                    values[key] = nested[key]

        missing = [key for key in METADATA_KEYS if values.get(key) is None]
        if missing:
            logger.warning(f"Message {document.get('_msgid')} has no {', '.join(missing)}")
        return MessageMetadata.model_validate(values)

    @staticmethod
    def _load(file_path: str | Path) -> Any:
        """Read and decode a JSON file."""
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        with open(file_path, "r") as f:
            content = f.read()

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid message JSON in {file_path}: {e}") from e
