"""
Serialization Utilities

Provides to/from JSON utilities for the grading models.

- `serialize_*` / `deserialize_*` work on plain dicts
- `save_*` / `load_*` work on files
- Reports carry a schema_version and are validated before loading
- Counts are written for readers but recalculated on load
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.answer_key import AnswerKey
from ..models.report import GradeReport
from ..models.submission import StudentSubmission
from ..schemas.validator import REPORT_SCHEMA_VERSION, ValidationError, validate_report


# ─────────────────────────────────────────────────────────────────────────────
# Report Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_report(report: GradeReport, *, key_name: str | None = None) -> dict[str, Any]:
    """
    Serialize a GradeReport to a dictionary.

    The output can be written to JSON and will pass schema validation.

    Args:
        report: GradeReport instance to serialize
        key_name: Optional worksheet name stored alongside the report

    Returns:
        Dictionary suitable for JSON serialization
    """
    data: dict[str, Any] = {"schema_version": REPORT_SCHEMA_VERSION}
    if key_name is not None:
        data["key_name"] = key_name
    data.update(report.to_dict())
    return data


def deserialize_report(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> GradeReport:
    """
    Deserialize a GradeReport from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against schema first
        strict: Also validate against grade_report.schema.json

    Returns:
        GradeReport instance

    Raises:
        ValidationError: If data is invalid or cannot be parsed
    """
    if validate:
        validate_report(data, strict=strict)
    try:
        return GradeReport.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValidationError(
            f"Invalid report payload: {e}",
            path="report",
            errors=[str(e)]
        ) from e


# ─────────────────────────────────────────────────────────────────────────────
# Submission / Key Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_submission(submission: StudentSubmission) -> dict[str, Any]:
    """Serialize a StudentSubmission (question numbers become string keys)."""
    return submission.to_dict()


def deserialize_submission(data: dict[str, Any]) -> StudentSubmission:
    """
    Deserialize a StudentSubmission from a dictionary.

    Raises:
        ValidationError: If the payload does not describe a valid submission
    """
    try:
        return StudentSubmission.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValidationError(
            f"Invalid submission payload: {e}",
            path="submission",
            errors=[str(e)]
        ) from e


def serialize_key(key: AnswerKey) -> dict[str, str]:
    return key.to_dict()


def deserialize_key(data: dict[str, Any]) -> AnswerKey:
    """
    Deserialize an AnswerKey from a dictionary.

    Raises:
        ValidationError: If any entry is not a question -> A..E letter
    """
    try:
        return AnswerKey.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ValidationError(
            f"Invalid answer key payload: {e}",
            path="key",
            errors=[str(e)]
        ) from e


# ─────────────────────────────────────────────────────────────────────────────
# Files
# ─────────────────────────────────────────────────────────────────────────────

def save_report_json(report: GradeReport, path: Path, *, key_name: str | None = None) -> None:
    """
    Save a report to a JSON file.

    Args:
        report: Report to save
        path: Output path
        key_name: Optional worksheet name stored in the file
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    data = serialize_report(report, key_name=key_name)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _read_report_data(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Report file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Error parsing report: {e}",
                path=str(path),
                errors=[str(e)]
            ) from e

    if not isinstance(data, dict):
        raise ValidationError("Report file must contain a JSON object", path=str(path))
    return data


def load_report_json(path: Path, *, validate: bool = True, strict: bool = False) -> GradeReport:
    """
    Load a report from a JSON file.

    Args:
        path: Report file written by save_report_json
        validate: Check required fields and schema version first
        strict: Also validate against grade_report.schema.json

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not valid JSON or not a valid report
    """
    return deserialize_report(_read_report_data(path), validate=validate, strict=strict)


def load_named_report_json(path: Path, *, strict: bool = False) -> tuple[GradeReport, str | None]:
    """
    Load a validated report together with its stored worksheet name.

    Returns:
        (report, key_name or None when the file has no name)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not valid JSON or not a valid report
    """
    data = _read_report_data(path)
    report = deserialize_report(data, validate=True, strict=strict)
    key_name = data.get("key_name")
    return report, key_name if isinstance(key_name, str) else None
