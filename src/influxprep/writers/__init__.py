"""
Writers module for outputting prepared points.

Module structure:
- schemas.py: PyArrow schema definitions for point tables
- serializers.py: Point-to-line-protocol and point-to-row conversion
- json_writer.py: JSONWriter for the ingester's payload shape
- line_writer.py: LineProtocolWriter for InfluxDB line protocol
- parquet_writer.py: ParquetWriter for Arrow/Parquet tables
"""

from pathlib import Path
from typing import Iterable

from influxprep.workflow import PrepResult

# Re-export writer classes
from .json_writer import JSONWriter
from .line_writer import LineProtocolWriter
from .parquet_writer import ParquetWriter

# Re-export schemas
from .schemas import BASE_SCHEMA, build_point_schema

# Re-export serializers
from .serializers import (
    DEFAULT_MEASUREMENT,
    point_to_influx,
    point_to_line,
    point_to_record,
    points_to_line_protocol,
)

__all__ = [
    # Schemas
    "BASE_SCHEMA",
    "build_point_schema",
    # Serializers
    "DEFAULT_MEASUREMENT",
    "point_to_influx",
    "point_to_line",
    "point_to_record",
    "points_to_line_protocol",
    # Writers
    "JSONWriter",
    "LineProtocolWriter",
    "ParquetWriter",
    # Convenience functions
    "WRITER_NAMES",
    "write_result",
]

WRITER_NAMES = ("json", "line", "parquet")


def write_result(
    result: PrepResult,
    output_dir: str | Path,
    writers: Iterable[str] = ("json",),
    measurement: str = DEFAULT_MEASUREMENT,
) -> dict[str, Path]:
    """
    Convenience function to write a result with several writers.

    Args:
        result: The PrepResult to write
        output_dir: Directory for output files
        writers: Any of "json", "line", "parquet"
        measurement: Measurement name for line protocol output

    Returns:
        Dict mapping writer names to written file paths

    Example:
        paths = write_result(result, "/data/out", writers=["json", "line"])
        print(f"Wrote line protocol to: {paths['line']}")
    """
    output_dir = Path(output_dir)
    paths: dict[str, Path] = {}

    for name in writers:
        if name == "json":
            paths["json"] = JSONWriter(output_dir / "json").write(result)
        elif name == "line":
            paths["line"] = LineProtocolWriter(output_dir / "line", measurement).write(result)
        elif name == "parquet":
            paths["parquet"] = ParquetWriter(output_dir / "parquet").write(result)
        else:
            raise ValueError(f"Unknown writer: {name}. Expected one of {list(WRITER_NAMES)}")

    return paths
