"""
Schema Validation Utilities

Validates grading inputs and serialized reports.

Grading inputs are checked with fail-fast structural rules: a key must
be a question -> letter mapping and a submission must be the reconciler's
StudentSubmission, never raw text. A bad argument is a programmer error
and raises ValidationError, which callers can always tell apart from a
report with zero correct answers.

Serialized reports get basic field checks, plus full JSON Schema
validation with jsonschema in strict mode.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema

from sat_autograder.common.answers import is_valid_choice
from sat_autograder.core.models.answer_key import AnswerKey
from sat_autograder.core.models.submission import StudentSubmission


# Schema version constants
REPORT_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when an argument or payload has the wrong structure."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_answer_key(key: Any) -> AnswerKey:
    """
    Check that key is a proper question -> letter mapping.

    An AnswerKey passes through unchanged. Any other Mapping is checked
    entry by entry and frozen into an AnswerKey.

    Args:
        key: Candidate answer key

    Returns:
        The key as an AnswerKey

    Raises:
        ValidationError: If key is not a mapping, or any entry is not
            a positive int -> A..E letter
    """
    if isinstance(key, AnswerKey):
        return key
    if not isinstance(key, Mapping):
        raise ValidationError(
            f"grade expected key to be a mapping of question -> letter, got {type(key).__name__}",
            path="key",
        )

    errors: list[str] = []
    for question, letter in key.items():
        if isinstance(question, bool) or not isinstance(question, int) or question < 1:
            errors.append(f"Invalid question number: {question!r}")
        elif not is_valid_choice(letter):
            errors.append(f"Invalid answer for question {question}: {letter!r}")
    if errors:
        raise ValidationError(
            f"Answer key has {len(errors)} invalid entr{'y' if len(errors) == 1 else 'ies'}",
            path="key",
            errors=errors,
        )
    return AnswerKey(key)


def validate_submission(submission: Any) -> StudentSubmission:
    """
    Check that submission is the structured output of the reconciler.

    Raises:
        ValidationError: If submission is raw text, a dict, or anything
            other than a StudentSubmission
    """
    if isinstance(submission, str):
        raise ValidationError(
            "grade expected a parsed StudentSubmission, got raw text; "
            "call parse_student_submission() first",
            path="submission",
        )
    if not isinstance(submission, StudentSubmission):
        raise ValidationError(
            f"grade expected a StudentSubmission, got {type(submission).__name__}",
            path="submission",
        )
    return submission


def validate_flag(value: Any, name: str) -> bool:
    """Reject non-bool option flags (e.g. the string "false")."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{name} must be a bool, got {type(value).__name__}",
            path=name,
        )
    return value


def validate_report(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a serialized grade report.

    Args:
        data: Report dictionary (as written by serialize_report)
        strict: If True, also validate against grade_report.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    required = [
        "schema_version", "total", "correct", "incorrect", "missing",
        "manual_review", "denominator", "percent", "attempted_questions",
    ]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("schema_version")
    if version != REPORT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported report schema version: {version} (expected {REPORT_SCHEMA_VERSION})",
            path="schema_version"
        )

    for name in ("total", "correct", "denominator"):
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(
                f"Invalid {name}: {value!r} (must be non-negative integer)",
                path=name
            )

    for i, item in enumerate(data.get("manual_review", [])):
        _validate_review_entry(item, f"manual_review[{i}]")

    if strict:
        schema = _load_schema("grade_report")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def _validate_review_entry(data: Any, path: str) -> None:
    """Validate one serialized manual review entry."""
    if not isinstance(data, dict):
        raise ValidationError("manual review entry must be a dict", path=path)
    required = ["question", "answers", "reasons"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Manual review entry missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )
    if not data["reasons"]:
        raise ValidationError("Manual review entry has no reasons", path=f"{path}.reasons")
