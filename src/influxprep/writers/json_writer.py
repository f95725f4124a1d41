"""
JSON writer for prepared points.

Writes the ``{"payload": [[fields, tags], ...]}`` object that the database
ingestion stage consumes.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from influxprep.workflow import PrepResult

from .utils import unique_output_path


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime, bytes and Path objects."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, (bytes, bytearray)):
            return obj.hex()
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


class JSONWriter:
    """
    Writes prep results to JSON files.

    One file per message, named after the message id. A repeated id gets
    a numeric suffix instead of overwriting the earlier file.
    """

    def __init__(self, output_dir: str | Path):
        """
        Initialize the JSON writer.

        Args:
            output_dir: Base directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, result: PrepResult) -> Path:
        """
        Write a prep result to JSON.

        Args:
            result: The PrepResult to write

        Returns:
            Path to the written JSON file
        """
        output_path = unique_output_path(self.output_dir, result.message_id or "points", ".json")

        with open(output_path, "w") as f:
            json.dump(result.to_payload(), f, cls=JSONEncoder, indent=2)

        return output_path
