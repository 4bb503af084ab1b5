"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from sat_autograder.core.models import AnswerKey, StudentSubmission
from sat_autograder.core.schemas.validator import (
    REPORT_SCHEMA_VERSION,
    ValidationError,
    validate_answer_key,
    validate_flag,
    validate_report,
    validate_submission,
)
from sat_autograder.core.utils.serialization import serialize_report
from sat_autograder.grading import grade_submission, parse_student_submission


class TestValidateAnswerKey:
    """Tests for validate_answer_key function."""

    def test_validate_when_answer_key_then_returned_as_is(self):
        key = AnswerKey({1: "A"})
        assert validate_answer_key(key) is key

    def test_validate_when_plain_mapping_then_converted(self):
        result = validate_answer_key({2: "B", 1: "A"})

        assert isinstance(result, AnswerKey)
        assert result.questions == (1, 2)

    @pytest.mark.parametrize("value", ["1. A", ["A"], None, 5])
    def test_validate_when_not_mapping_then_raises(self, value):
        with pytest.raises(ValidationError, match="mapping"):
            validate_answer_key(value)

    def test_validate_when_bad_entries_then_collects_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_answer_key({"1": "A", 2: "b", 3: "C"})

        assert exc_info.value.path == "key"
        assert len(exc_info.value.errors) == 2


class TestValidateSubmission:
    """Tests for validate_submission function."""

    def test_validate_when_submission_then_returned(self):
        submission = StudentSubmission()
        assert validate_submission(submission) is submission

    def test_validate_when_raw_text_then_points_at_parser(self):
        with pytest.raises(ValidationError, match="parse_student_submission"):
            validate_submission("1) a")

    def test_validate_when_dict_then_raises(self):
        with pytest.raises(ValidationError, match="dict"):
            validate_submission({"answers": {}})


class TestValidateFlag:
    """Tests for validate_flag function."""

    def test_validate_when_bool_then_returned(self):
        assert validate_flag(True, "skip_missing") is True

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_validate_when_not_bool_then_raises(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_flag(value, "skip_missing")
        assert exc_info.value.path == "skip_missing"


class TestValidateReport:
    """Tests for validate_report function."""

    @pytest.fixture
    def report_data(self, five_question_key) -> dict:
        """A serialized report with every bucket populated."""
        report = grade_submission(
            five_question_key,
            parse_student_submission("1) a\n2) c\n3) ?\n9) b"),
        )
        return serialize_report(report, key_name="Math 204")

    def test_validate_when_serialized_report_then_passes_strict(self, report_data):
        validate_report(report_data, strict=True)

    def test_validate_when_missing_fields_then_lists_them(self, report_data):
        del report_data["total"]
        del report_data["percent"]

        with pytest.raises(ValidationError) as exc_info:
            validate_report(report_data)

        assert "Missing field: total" in exc_info.value.errors
        assert "Missing field: percent" in exc_info.value.errors

    def test_validate_when_wrong_version_then_raises(self, report_data):
        report_data["schema_version"] = REPORT_SCHEMA_VERSION + 1
        with pytest.raises(ValidationError, match="Unsupported report schema version"):
            validate_report(report_data)

    @pytest.mark.parametrize("value", [-1, "5", True, 2.5])
    def test_validate_when_total_not_count_then_raises(self, report_data, value):
        report_data["total"] = value
        with pytest.raises(ValidationError) as exc_info:
            validate_report(report_data)
        assert exc_info.value.path == "total"

    def test_validate_when_review_entry_has_no_reasons_then_raises(self, report_data):
        report_data["manual_review"][0]["reasons"] = []
        with pytest.raises(ValidationError, match="no reasons"):
            validate_report(report_data)

    def test_validate_when_strict_and_unknown_reason_then_raises(self, report_data):
        report_data["manual_review"][0]["reasons"] = ["Looks odd"]

        validate_report(report_data)
        with pytest.raises(ValidationError, match="Schema validation failed"):
            validate_report(report_data, strict=True)

    def test_validate_when_strict_and_extra_field_then_raises(self, report_data):
        report_data["grader"] = "someone"
        with pytest.raises(ValidationError):
            validate_report(report_data, strict=True)
