"""
Unit Tests for the PDF grade report.

Generated files are read back with PyMuPDF.
"""

import fitz
import pytest

from sat_autograder.core.models import AnswerKey
from sat_autograder.grading import grade_submission, parse_student_submission
from sat_autograder.output import render_report_pdf


class TestRenderReportPdf:
    """Tests for render_report_pdf()."""

    def test_render_when_small_report_then_single_page_pdf(self, tmp_path, five_question_key):
        report = grade_submission(five_question_key, parse_student_submission("1) a 2) c 4) d"))
        path = tmp_path / "out" / "report.pdf"

        result = render_report_pdf(report, path, "Math 204")

        assert result == path
        assert path.read_bytes().startswith(b"%PDF")
        with fitz.open(path) as doc:
            assert doc.page_count == 1
            text = doc[0].get_text("text")
        assert "Worksheet: Math 204" in text
        assert "2 / 5 correct (40%)" in text
        assert "Page 1" in text

    def test_render_when_long_report_then_spans_pages(self, tmp_path):
        """Reports longer than one page flow onto more pages."""
        key = AnswerKey({q: "A" for q in range(1, 121)})
        student = "\n".join(f"{q}) b" for q in range(1, 121))
        report = grade_submission(key, parse_student_submission(student))
        path = tmp_path / "long.pdf"

        render_report_pdf(report, path, "Long Worksheet")

        with fitz.open(path) as doc:
            page_count = doc.page_count
            last_page = doc[page_count - 1].get_text("text")
        assert page_count > 1
        assert "Missing: none" in last_page
        assert f"Page {page_count}" in last_page

    @pytest.mark.parametrize("skip_missing", [True, False])
    def test_render_when_skip_option_then_score_line_drawn(self, tmp_path, five_question_key, skip_missing):
        report = grade_submission(
            five_question_key, parse_student_submission("1) a"), skip_missing=skip_missing
        )
        path = render_report_pdf(report, tmp_path / "r.pdf", "Math 204")

        with fitz.open(path) as doc:
            assert report.score_line in doc[0].get_text("text")
