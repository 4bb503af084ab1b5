"""
Module: output.text_report

Purpose:
    Plain text grade report, suitable for pasting into a message or
    printing to a terminal.

Key Functions:
    - report_lines(): Report as a list of lines
    - format_report(): Report as one string

Example output:
    Worksheet: Math 204
    2 / 5 correct (40%)

    Incorrect:
      2: student C -> key B

    Manual review: none

    Missing: 3, 5
"""

from __future__ import annotations

from typing import List

from sat_autograder.core.models.report import GradeReport


def report_lines(report: GradeReport, key_name: str) -> List[str]:
    """Build the report line by line (blank lines separate sections)."""
    lines = [f"Worksheet: {key_name}", report.score_line, ""]

    if report.incorrect:
        lines.append("Incorrect:")
        lines.extend(
            f"  {item.question}: student {item.student_answer} -> key {item.correct_answer}"
            for item in report.incorrect
        )
        lines.append("")
    else:
        lines.extend(["Incorrect: none", ""])

    if report.manual_review:
        lines.append("Manual review:")
        lines.extend(
            f"  {entry.question}: {', '.join(entry.answers)} ({'; '.join(entry.reasons)})"
            for entry in report.manual_review
        )
        lines.append("")
    else:
        lines.extend(["Manual review: none", ""])

    if report.missing:
        lines.append(f"Missing: {', '.join(str(q) for q in report.missing)}")
    else:
        lines.append("Missing: none")

    return lines


def format_report(report: GradeReport, key_name: str) -> str:
    """
    Format a grade report as plain text.

    Args:
        report: Report to format
        key_name: Worksheet name shown in the header

    Returns:
        Multi-line report without trailing whitespace
    """
    return "\n".join(report_lines(report, key_name)).strip()
