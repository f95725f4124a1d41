"""
Line protocol writer for prepared points.

Writes InfluxDB line protocol files that can be loaded with any InfluxDB
client or the ``influx write`` command.
"""

from __future__ import annotations

from pathlib import Path

from influxprep.workflow import PrepResult

from .serializers import DEFAULT_MEASUREMENT, points_to_line_protocol
from .utils import unique_output_path


class LineProtocolWriter:
    """
    Writes prep results as line protocol.

    Example:
        writer = LineProtocolWriter("/data/out", measurement="catena4430")
        path = writer.write(result)
    """

    def __init__(self, output_dir: str | Path, measurement: str = DEFAULT_MEASUREMENT):
        """
        Initialize the writer.

        Args:
            output_dir: Base directory for output files
            measurement: InfluxDB measurement name for every line
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.measurement = measurement

    def write(self, result: PrepResult) -> Path:
        """
        Write a prep result to a ``.lp`` file.

        Args:
            result: The PrepResult to write

        Returns:
            Path to the written file
        """
        output_path = unique_output_path(self.output_dir, result.message_id or "points", ".lp")
        output_path.write_text(points_to_line_protocol(result, self.measurement))
        return output_path
