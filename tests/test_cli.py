"""
Tests for the CLI module.
"""

import json

import pytest

from influxprep.cli.main import app

FORMAT22_MESSAGE = {
    "_msgid": "cli-22",
    "counter": 9,
    "port": 1,
    "hardware_serial": "0002CC01000004A1",
    "dev_id": "catena4430-01",
    "display_id": "Lab feeder 1",
    "display_key": "lab-feeder-1",
    "local": {
        "nodeType": "Catena 4430",
        "platformType": "Model4430",
        "radioType": "LoRaWAN",
        "applicationName": "mouse-lab",
    },
    "payload": {
        "time": "2022-03-15T12:00:00Z",
        "Vbat": 3.88,
        "activity": [10, 20, 30],
    },
    "payload_raw": [0x22, 0x0A, 0xFF],
}


@pytest.fixture
def message_file(tmp_path):
    """A format 0x22 message written to disk."""
    path = tmp_path / "uplink.json"
    path.write_text(json.dumps(FORMAT22_MESSAGE))
    return path


class TestCLIDetect:
    """Tests for the detect command."""

    def test_detect_message(self, message_file):
        """Test detecting a message file."""
        assert app(["detect", str(message_file)]) == 0

    def test_detect_json_output(self, message_file, capsys):
        """Test JSON output from detect."""
        assert app(["detect", "--json", str(message_file)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["message_format"] == "0x22"
        assert output["activity_samples"] == 3
        assert output["expected_points"] == 3

    def test_detect_nonexistent_file(self):
        """Test detecting a file that doesn't exist."""
        assert app(["detect", "/nonexistent/uplink.json"]) == 1

    def test_detect_invalid_json(self, tmp_path):
        """Test detecting a file that isn't JSON."""
        path = tmp_path / "bad.json"
        path.write_text("{nope")
        assert app(["detect", str(path)]) == 1


class TestCLIValidate:
    """Tests for the validate command."""

    def test_validate_passes(self, message_file):
        """Test validating a well-formed message."""
        assert app(["validate", str(message_file)]) == 0

    def test_validate_fails_without_time(self, tmp_path):
        """A format 0x22 message without time fails."""
        document = dict(FORMAT22_MESSAGE, payload={"activity": [1]})
        path = tmp_path / "uplink.json"
        path.write_text(json.dumps(document))
        assert app(["validate", str(path)]) == 1

    def test_validate_json(self, message_file, capsys):
        """Test JSON output from validate."""
        assert app(["validate", "--json", str(message_file)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output[0]["is_valid"] is True
        assert output[0]["points"] == 3


class TestCLIPrep:
    """Tests for the prep command."""

    def test_prep_dry_run(self, message_file, tmp_path):
        """Test prep with --dry-run."""
        output_dir = tmp_path / "output"
        result = app(["prep", str(message_file), "--output", str(output_dir), "--dry-run"])
        assert result == 0
        assert not output_dir.exists()

    def test_prep_writes_json(self, message_file, tmp_path):
        """Test prep writes the payload JSON by default."""
        output_dir = tmp_path / "output"
        assert app(["prep", str(message_file), "--output", str(output_dir)]) == 0

        data = json.loads((output_dir / "json" / "cli-22.json").read_text())
        assert len(data["payload"]) == 3
        assert [pair[0]["activity"] for pair in data["payload"]] == [30, 20, 10]

    def test_prep_multiple_writers(self, message_file, tmp_path):
        """Test prep with line protocol and parquet writers."""
        output_dir = tmp_path / "output"
        result = app([
            "prep", str(message_file),
            "--output", str(output_dir),
            "-w", "line",
            "-w", "parquet",
            "--measurement", "feeder",
        ])
        assert result == 0
        lines = (output_dir / "line" / "cli-22.lp").read_text().strip().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("feeder,")
        assert list(output_dir.glob("parquet/**/*.parquet"))

    def test_prep_forced_format(self, message_file, tmp_path):
        """Test prep with --format overriding detection."""
        output_dir = tmp_path / "output"
        result = app([
            "prep", str(message_file),
            "--output", str(output_dir),
            "--format", "0x21",
        ])
        assert result == 0
        data = json.loads((output_dir / "json" / "cli-22.json").read_text())
        assert len(data["payload"]) == 1
        assert data["payload"][0][0]["counter"] == 9

    def test_prep_invalid_format(self, message_file, tmp_path):
        """Unknown formats are rejected by the option."""
        result = app([
            "prep", str(message_file),
            "--output", str(tmp_path / "output"),
            "--format", "0x99",
        ])
        assert result == 1


class TestCLIHelp:
    """Tests for CLI help."""

    def test_help_returns_zero(self):
        """Test that --help exits cleanly."""
        assert app(["--help"]) == 0

    def test_command_help(self):
        """Test command-level help."""
        assert app(["prep", "--help"]) == 0
