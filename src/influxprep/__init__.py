"""
Influx Prep - Catena sensor message preparation for InfluxDB.

This package reshapes decoded Catena 4430 uplink messages into flattened
(fields, tags) points for ingestion by a time-series database.
"""

__version__ = "0.1.0"

from influxprep.enums import MessageFormat
from influxprep.models import Message, MessageMetadata, Point
from influxprep.parsers import MessageParser
from influxprep.tools import MessageInfo, detect_file, detect_message_format
from influxprep.validation import PointValidator, ValidationResult
from influxprep.workflow import PrepResult, RecordPreparer, prepare_from_file
from influxprep.writers import JSONWriter, LineProtocolWriter, ParquetWriter, write_result

__all__ = [
    # Models
    "Message",
    "MessageMetadata",
    "Point",
    "MessageFormat",
    # Parsing
    "MessageParser",
    # Detection tools
    "MessageInfo",
    "detect_file",
    "detect_message_format",
    # Workflow
    "RecordPreparer",
    "PrepResult",
    "prepare_from_file",
    # Validation
    "PointValidator",
    "ValidationResult",
    # Writers
    "JSONWriter",
    "LineProtocolWriter",
    "ParquetWriter",
    "write_result",
]
