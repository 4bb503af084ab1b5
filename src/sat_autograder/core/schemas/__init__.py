"""
Schemas Package

Structural validation of grading inputs and serialized reports.
"""

from .validator import (
    validate_answer_key,
    validate_submission,
    validate_flag,
    validate_report,
    ValidationError,
    REPORT_SCHEMA_VERSION,
)

__all__ = [
    "validate_answer_key",
    "validate_submission",
    "validate_flag",
    "validate_report",
    "ValidationError",
    "REPORT_SCHEMA_VERSION",
]
