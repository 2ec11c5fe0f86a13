"""Validation module for engine arguments and input data quality."""

from shiftinsights.domain.models import InvalidArgumentError
from shiftinsights.validation.validator import (
    DataIssue,
    DataIssueType,
    InputValidator,
    ValidationResult,
    check_arguments,
)

__all__ = [
    "DataIssue",
    "DataIssueType",
    "InputValidator",
    "InvalidArgumentError",
    "ValidationResult",
    "check_arguments",
]
