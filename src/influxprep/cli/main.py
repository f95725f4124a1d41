"""
Main CLI entry point for influx-prep using Click.

Usage:
    influx-prep detect FILE
    influx-prep prep FILE --output DIR [--format 0x21|0x22] [--writer json|line|parquet]...
    influx-prep validate FILE [--format 0x21|0x22]
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from influxprep import __version__
from influxprep.enums import MessageFormat
from influxprep.models.message import Message
from influxprep.parsers import MessageParser
from influxprep.tools import detect_file
from influxprep.validation import PointValidator
from influxprep.workflow import PrepResult, RecordPreparer
from influxprep.writers import DEFAULT_MEASUREMENT, WRITER_NAMES, write_result

FORMAT_CHOICES = [fmt.value for fmt in MessageFormat]


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version=__version__, prog_name="influx-prep")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Prepare Catena sensor messages for InfluxDB ingestion."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def detect(config: Config, file: str, as_json: bool) -> None:
    """Detect message format and summarise a message file.

    Example:
        influx-prep detect uplink.json
    """
    try:
        info = detect_file(file)
    except ValueError as e:
        raise click.ClickException(f"Error parsing message file: {e}")

    fmt = info.message_format.value if info.message_format else None

    if as_json:
        output = {
            "path": info.path,
            "filename": info.filename,
            "message_count": info.message_count,
            "message_id": info.message_id,
            "device": info.device,
            "message_format": fmt,
            "port": info.port,
            "payload_keys": info.payload_keys,
            "activity_samples": info.activity_samples,
            "expected_points": info.expected_points,
        }
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(f"File: {info.filename}")
        click.echo(f"Messages: {info.message_count}")
        click.echo(f"Message ID: {info.message_id or 'Not found'}")
        click.echo(f"Device: {info.device or 'Not found'}")
        click.echo(f"Format: {fmt or 'Unknown'}")
        click.echo(f"Payload keys: {', '.join(info.payload_keys) or 'None'}")
        click.echo(f"Activity samples: {info.activity_samples}")


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--format",
    "-f",
    "message_format",
    type=click.Choice(FORMAT_CHOICES),
    help="Force the message format instead of detecting it",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def validate(
    config: Config,
    file: str,
    message_format: Optional[str],
    as_json: bool,
) -> None:
    """Prepare and validate points without writing.

    Example:
        influx-prep validate uplink.json --format 0x22
    """
    logger = logging.getLogger("validate")

    results = _prepare_file(file, message_format)

    logger.info("Validating...")
    validator = PointValidator()
    validations = [validator.validate(result) for result in results]
    all_valid = all(v.is_valid for v in validations)

    if as_json:
        output = [
            {
                "message_id": result.message_id,
                "message_format": result.message_format,
                "points": len(result.payload),
                "is_valid": validation.is_valid,
                "errors": [
                    {"field": i.field, "message": i.message, "severity": i.severity}
                    for i in validation.errors
                ],
                "warnings": [
                    {"field": i.field, "message": i.message, "severity": i.severity}
                    for i in validation.warnings
                ],
                "prep_warnings": result.warnings,
            }
            for result, validation in zip(results, validations)
        ]
        click.echo(json.dumps(output, indent=2))
    else:
        for result, validation in zip(results, validations):
            status = (
                click.style("PASSED", fg="green")
                if validation.is_valid
                else click.style("FAILED", fg="red")
            )
            click.echo(f"Validation of {result.message_id}: {status}")

            if validation.errors:
                click.echo(click.style("Errors:", fg="red"))
                for issue in validation.errors:
                    click.echo(f"  ✗ {issue.field}: {issue.message}")

            if validation.warnings:
                click.echo(click.style("Warnings:", fg="yellow"))
                for issue in validation.warnings:
                    click.echo(f"  ⚠ {issue.field}: {issue.message}")

            click.echo()
            click.echo(result.summary())

    if not all_valid:
        sys.exit(1)


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output directory for prepared points",
)
@click.option(
    "--format",
    "-f",
    "message_format",
    type=click.Choice(FORMAT_CHOICES),
    help="Force the message format instead of detecting it",
)
@click.option(
    "--writer",
    "-w",
    "writers",
    multiple=True,
    type=click.Choice(list(WRITER_NAMES)),
    help="Output writer (can be specified multiple times, default json)",
)
@click.option(
    "--measurement",
    default=DEFAULT_MEASUREMENT,
    show_default=True,
    help="Measurement name for line protocol output",
)
@click.option("--skip-validation", is_flag=True, help="Skip validation step")
@click.option("--dry-run", is_flag=True, help="Prepare and validate but don't write output")
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON")
@pass_config
def prep(
    config: Config,
    file: str,
    output: str,
    message_format: Optional[str],
    writers: tuple[str, ...],
    measurement: str,
    skip_validation: bool,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Prepare messages and write the points.

    Example:
        influx-prep prep uplink.json --output ./points/ -w json -w line
    """
    logger = logging.getLogger("prep")

    results = _prepare_file(file, message_format)

    failed = [result for result in results if result.has_errors]
    if failed:
        click.echo(click.style("Prep errors:", fg="red"), err=True)
        for result in failed:
            for error in result.errors:
                click.echo(f"  - {result.message_id}: {error}", err=True)
        sys.exit(1)

    # Validate
    if not skip_validation:
        logger.info("Validating points...")
        validator = PointValidator()
        for result in results:
            validation = validator.validate(result)

            if not validation.is_valid:
                click.echo(click.style("Validation failed:", fg="red"), err=True)
                for issue in validation.issues:
                    click.echo(f"  [{issue.severity}] {issue.field}: {issue.message}", err=True)
                sys.exit(1)

            for issue in validation.warnings:
                click.echo(
                    click.style(f"Warning: {issue.field}: {issue.message}", fg="yellow"),
                    err=True,
                )

    # Report prep result
    if as_json:
        click.echo(json.dumps([_result_summary(result) for result in results], indent=2))
    else:
        for result in results:
            click.echo(result.summary())

    if dry_run:
        logger.info("Dry run - skipping output")
        click.echo(click.style("\nDry run - no files written", fg="cyan"))
        return

    logger.info(f"Writing to: {output}")
    output_path = Path(output)
    output_path.mkdir(parents=True, exist_ok=True)

    try:
        click.echo(click.style("\nOutput files:", fg="green"))
        for result in results:
            paths = write_result(result, output_path, writers or ("json",), measurement)
            for writer_name, path in paths.items():
                click.echo(f"  {writer_name}: {path}")
    except Exception as e:
        raise click.ClickException(f"Error writing output: {e}")


def _prepare_file(file: str, message_format: Optional[str]) -> list[PrepResult]:
    """Parse a message file and prepare every message in it."""
    logger = logging.getLogger("prep")

    logger.info(f"Parsing message file: {file}")
    try:
        messages: list[Message] = MessageParser().parse_many(file)
    except ValueError as e:
        raise click.ClickException(f"Error parsing message file: {e}")

    logger.info(f"Preparing {len(messages)} message(s)...")
    return RecordPreparer().prepare_many(messages, message_format)


def _result_summary(result: PrepResult) -> dict:
    """Summary of a prep result as a JSON-able dict."""
    stamps = result.timestamps()
    return {
        "message_id": result.message_id,
        "message_format": result.message_format,
        "points": len(result.payload),
        "time_range": [int(stamps.min()), int(stamps.max())] if stamps.size else None,
        "warnings": result.warnings,
    }


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
