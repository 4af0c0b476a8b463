"""Validation, mapping and error types for the resume wizard."""

from .errors import ServerValidationError, SubmissionError, parse_error_response
from .validation import ValidationReport, validate_all

__all__ = [
    "ServerValidationError",
    "SubmissionError",
    "ValidationReport",
    "parse_error_response",
    "validate_all",
]
