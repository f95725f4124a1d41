"""
Validation utilities for prepared points.

Checks the structural invariants of a PrepResult before it is handed to
the database: shared tags, scalar values and ascending timestamps.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from influxprep.workflow import PrepResult

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)


@dataclass
class ValidationIssue:
    """A single validation issue."""

    field: str
    message: str
    severity: str  # "error", "warning", "info"
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Result of validating prepared points."""

    is_valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        """Get only error-level issues."""
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        """Get only warning-level issues."""
        return [i for i in self.issues if i.severity == "warning"]

    def add_error(self, field: str, message: str, value: Any = None) -> None:
        """Add an error issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="error", value=value)
        )
        self.is_valid = False

    def add_warning(self, field: str, message: str, value: Any = None) -> None:
        """Add a warning issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="warning", value=value)
        )

    def add_info(self, field: str, message: str, value: Any = None) -> None:
        """Add an info issue."""
        self.issues.append(
            ValidationIssue(field=field, message=message, severity="info", value=value)
        )


class PointValidator:
    """
    Validates prepared points against the ingestion rules.

    Checks:
    1. Preparation errors and empty results
    2. Tag consistency - every point carries the same tags
    3. Value shapes - fields and tags are scalars
    4. Ordering - timestamps never decrease

    Usage:
        validator = PointValidator()
        result = validator.validate(prep_result)

        if not result.is_valid:
            for issue in result.errors:
                print(f"ERROR: {issue.field}: {issue.message}")
    """

    def __init__(self, allow_missing_tags: bool = True):
        """
        Initialize the validator.

        Args:
            allow_missing_tags: Report ``None`` tag values as info instead of warnings
        """
        self.allow_missing_tags = allow_missing_tags

    def validate(self, prepared: PrepResult) -> ValidationResult:
        """
        Validate a prep result.

        Args:
            prepared: The prep result to validate

        Returns:
            ValidationResult with issues found
        """
        result = ValidationResult(is_valid=True)

        for error in prepared.errors:
            result.add_error("prep", error)

        if not prepared.payload:
            result.add_error("payload", "No points were prepared")
            return result

        self._validate_tags(prepared, result)
        self._validate_fields(prepared, result)
        self._validate_ordering(prepared, result)

        logger.debug(
            f"Validated {len(prepared.payload)} point(s): "
            f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
        return result

    def _validate_tags(self, prepared: PrepResult, result: ValidationResult) -> None:
        """All points share the first point's tags, and tags are scalars."""
        reference = prepared.payload[0].tags

        for key, value in reference.items():
            if value is None:
                if self.allow_missing_tags:
                    result.add_info(f"tags.{key}", "Tag has no value and will be dropped")
                else:
                    result.add_warning(f"tags.{key}", "Tag has no value", value)
            elif not isinstance(value, SCALAR_TYPES):
                result.add_error(f"tags.{key}", "Tag value is not a scalar", value)

        for index, point in enumerate(prepared.payload[1:], start=1):
            if point.tags != reference:
                result.add_error(
                    f"payload[{index}].tags",
                    "Tags differ from the first point",
                    point.tags,
                )

    def _validate_fields(self, prepared: PrepResult, result: ValidationResult) -> None:
        """Fields must be fully flattened."""
        for index, point in enumerate(prepared.payload):
            if not point.fields:
                result.add_error(f"payload[{index}].fields", "Point has no fields")
            for key, value in point.fields.items():
                if isinstance(value, (Mapping, list, tuple)):
                    result.add_error(
                        f"payload[{index}].fields.{key}",
                        "Field value is not flattened",
                        value,
                    )

    def _validate_ordering(self, prepared: PrepResult, result: ValidationResult) -> None:
        """Timestamps, where present, are non-decreasing."""
        stamped = sum(1 for point in prepared.payload if point.timestamp is not None)
        if 0 < stamped < len(prepared.payload):
            result.add_warning(
                "payload",
                f"Only {stamped} of {len(prepared.payload)} points carry a timestamp",
            )

        stamps = prepared.timestamps()
        if stamps.size > 1 and not bool(np.all(np.diff(stamps) >= 0)):
            result.add_error("payload", "Timestamps are not in ascending order")
