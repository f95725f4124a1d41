"""
Record preparer for turning messages into database points.

The main orchestrator for the prep workflow.
"""

import logging
from typing import Callable, Optional, Union

from influxprep.enums import MessageFormat
from influxprep.models.message import Message
from influxprep.tools.detection import detect_message_format

from .builders import build_format21_points, build_format22_points
from .result import PrepResult

logger = logging.getLogger(__name__)

# Builder for each supported message format
BUILDERS: dict[MessageFormat, Callable[[Message], PrepResult]] = {
    MessageFormat.FORMAT_21: build_format21_points,
    MessageFormat.FORMAT_22: build_format22_points,
}


class RecordPreparer:
    """
    Prepares decoded messages as (fields, tags) points.

    Workflow:
    1. Determine the message format (explicit, raw format byte, or payload shape)
    2. Run the matching record builder
    3. Collect builder failures into the result

    Example:
        preparer = RecordPreparer()
        result = preparer.prepare(message)

        if result.is_complete:
            for fields, tags in result.to_payload()["payload"]:
                print(fields.get("time"), fields.get("activity"))
    """

    def prepare(
        self,
        message: Message,
        message_format: Optional[Union[MessageFormat, str]] = None,
    ) -> PrepResult:
        """
        Prepare one message.

        Args:
            message: Decoded uplink message
            message_format: Force a format instead of detecting it

        Returns:
            PrepResult with points and any issues
        """
        fmt, warnings = self._resolve_format(message, message_format)
        if fmt is None:
            result = PrepResult(message_id=message.id, warnings=warnings)
            result.errors.append(
                f"Could not determine message format for message {message.id}"
            )
            return result

        builder = BUILDERS[fmt]
        logger.debug(f"Preparing message {message.id} as format {fmt.value}")

        try:
            result = builder(message)
        except Exception as e:
            result = PrepResult(message_id=message.id, message_format=fmt.value)
            result.errors.append(f"Failed to build format {fmt.value} points: {e}")
            logger.exception("Error building points")

        result.warnings[:0] = warnings
        logger.info(f"Prepared message {message.id}: {len(result.payload)} point(s)")
        return result

    def prepare_many(
        self,
        messages: list[Message],
        message_format: Optional[Union[MessageFormat, str]] = None,
    ) -> list[PrepResult]:
        """Prepare several messages independently."""
        return [self.prepare(message, message_format) for message in messages]

    @staticmethod
    def _resolve_format(
        message: Message,
        message_format: Optional[Union[MessageFormat, str]],
    ) -> tuple[Optional[MessageFormat], list[str]]:
        """
        Choose the format for a message.

        Order of precedence: explicit argument, raw format byte, payload shape
        (a ``time`` value means format 0x22).
        """
        warnings: list[str] = []

        if message_format is not None:
            try:
                return MessageFormat(message_format), warnings
            except ValueError:
                warnings.append(f"Unsupported message format: {message_format}")
                return None, warnings

        detected = detect_message_format(message)
        if detected is not None:
            return detected, warnings

        if message.format_byte is not None:
            warnings.append(f"Unknown format byte 0x{message.format_byte:02x}")

        inferred = MessageFormat.FORMAT_22 if "time" in message.payload else MessageFormat.FORMAT_21
        warnings.append(f"Format inferred from payload shape: {inferred.value}")
        return inferred, warnings
