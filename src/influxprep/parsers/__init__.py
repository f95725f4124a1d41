"""
Parsers for message input.

Provides a parser for the decoded uplink JSON emitted by the Node-RED
decoder stage.
"""

from influxprep.parsers.message_parser import (
    MessageParser,
    decode_payload_raw,
    parse_time,
)

__all__ = [
    "MessageParser",
    "decode_payload_raw",
    "parse_time",
]
