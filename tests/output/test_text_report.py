"""Unit tests for the plain text grade report."""

from sat_autograder.core.models import AnswerKey
from sat_autograder.grading import grade_submission, parse_student_submission
from sat_autograder.output import format_report, report_lines


class TestFormatReport:
    """Tests for format_report()."""

    def test_format_when_partial_answers_then_lists_each_section(self, five_question_key):
        report = grade_submission(five_question_key, parse_student_submission("1) a 2) c 4) d"))

        assert format_report(report, "Math 204") == "\n".join([
            "Worksheet: Math 204",
            "2 / 5 correct (40%)",
            "",
            "Incorrect:",
            "  2: student C -> key B",
            "",
            "Manual review: none",
            "",
            "Missing: 3, 5",
        ])

    def test_format_when_skip_missing_then_score_line_says_so(self, five_question_key):
        report = grade_submission(
            five_question_key, parse_student_submission("1) a 2) c 4) d"), skip_missing=True
        )
        assert format_report(report, "Math 204").splitlines()[1] == (
            "2 / 3 correct (66.7%) - missing skipped"
        )

    def test_format_when_review_entries_then_answers_and_reasons_shown(self, five_question_key):
        report = grade_submission(
            five_question_key,
            parse_student_submission("1) a 1) b\n2) b\n3) c\n4) d\n5) ?"),
        )
        text = format_report(report, "Math 204")

        assert "Incorrect: none" in text
        assert "  1: A, B (Duplicate answers provided)" in text
        assert "  5: ? (Non-standard answer format)" in text
        assert text.endswith("Missing: none")

    def test_lines_when_rendered_then_header_first(self, five_question_key):
        report = grade_submission(five_question_key, parse_student_submission(""))
        lines = report_lines(report, "English 101")

        assert lines[0] == "Worksheet: English 101"
        assert lines[-1] == "Missing: 1, 2, 3, 4, 5"

    def test_format_when_percent_ends_in_half_then_rounds_up(self):
        """1 of 16 is 6.25%, shown as 6.3%."""
        key = AnswerKey({q: "A" for q in range(1, 17)})
        student = "\n".join(["1) a"] + [f"{q}) b" for q in range(2, 17)])

        report = grade_submission(key, parse_student_submission(student))

        assert format_report(report, "Math 201").splitlines()[1] == "1 / 16 correct (6.3%)"
