"""
Parquet file writer for prepared points.

One row per point: timestamp, tag columns, then the measurement fields.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq

from influxprep.workflow import PrepResult

from .schemas import build_point_schema
from .serializers import point_to_record
from .utils import unique_output_path


class ParquetWriter:
    """
    Writes prep results to Parquet files.

    Supports partitioned output by device for lakehouse-style layouts.

    Example:
        writer = ParquetWriter("/data/points")
        path = writer.write(result)
    """

    def __init__(self, output_dir: str | Path, partition_by_device: bool = True):
        """
        Initialize the writer with an output directory.

        Args:
            output_dir: Base directory for output files
            partition_by_device: Whether to partition by devID (default True)
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.partition_by_device = partition_by_device

    def _get_partition_path(self, device: str | None = None) -> Path:
        """Build the partition directory for a device."""
        parts = [self.output_dir, "points"]
        if device and self.partition_by_device:
            parts.append(f"device={device}")
        return Path(*parts)

    def to_table(self, result: PrepResult) -> pa.Table:
        """
        Convert a prep result to an Arrow table.

        Args:
            result: The PrepResult to convert

        Returns:
            Table with one row per point
        """
        records = [point_to_record(point) for point in result.payload]
        schema = build_point_schema(records)
        string_columns = {f.name for f in schema if pa.types.is_string(f.type)}
        rows = [_coerce_strings(record, string_columns) for record in records]
        return pa.Table.from_pylist(rows, schema=schema)

    def write(self, result: PrepResult) -> Path:
        """
        Write a prep result to Parquet.

        Args:
            result: The PrepResult to write

        Returns:
            Path to the written file
        """
        device = result.payload[0].tags.get("devID") if result.payload else None
        partition_dir = self._get_partition_path(device)
        partition_dir.mkdir(parents=True, exist_ok=True)

        output_path = unique_output_path(partition_dir, result.message_id or "points", ".parquet")
        pq.write_table(self.to_table(result), output_path)
        return output_path


def _coerce_strings(record: dict[str, Any], string_columns: set[str]) -> dict[str, Any]:
    """Stringify non-string values bound for string columns."""
    return {
        key: str(value) if key in string_columns and value is not None and not isinstance(value, str) else value
        for key, value in record.items()
    }
