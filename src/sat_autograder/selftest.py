"""
Built-in sanity checks for the scanner and grading pipeline.

Runs in a fraction of a second without files, so the CLI can offer it
as a quick "is this install working" command.
"""

from __future__ import annotations

import logging

from sat_autograder.common.answers import ReviewReason
from sat_autograder.core.models.answer_key import AnswerKey
from sat_autograder.grading import grade_submission, parse_student_submission

logger = logging.getLogger(__name__)

SEPARATOR_CASES = (
    ("1) b", 1, "B"),
    ("2.D", 2, "D"),
    ("(3) c", 3, "C"),
    ("5- a", 5, "A"),
    ("27.)C", 27, "C"),
    ("32.c", 32, "C"),
    ("6d", 6, "D"),
)


class SelfTestError(AssertionError):
    """Raised when a built-in check fails."""


def run_self_tests() -> str:
    """
    Check common answer formats, duplicate detection and invalid choices.

    Returns:
        "All self-tests passed"

    Raises:
        SelfTestError: On the first failing check
    """
    for text, question, letter in SEPARATOR_CASES:
        parsed = parse_student_submission(text)
        if question not in parsed.answers:
            raise SelfTestError(f'Parser failed to locate question in "{text}"')
        if parsed.answers[question] != letter:
            raise SelfTestError(f"Parser mismatch for question {question}")

    key = AnswerKey({1: "A", 2: "B", 3: "C", 4: "D"})
    student = parse_student_submission("1) a\n2) c\n2) b\n4) g")
    graded = grade_submission(key, student, skip_missing=False)

    if graded.correct != 1:
        raise SelfTestError("Grader failed to count correct answers")

    reviewed = {entry.question: entry for entry in graded.manual_review}
    if 2 not in reviewed or not reviewed[2].has_reason(ReviewReason.DUPLICATE):
        raise SelfTestError("Duplicate detection failed")

    if 4 not in reviewed or not reviewed[4].has_reason(ReviewReason.OUT_OF_RANGE):
        raise SelfTestError("Invalid answer value should flag manual review")

    if graded.missing != (3,):
        raise SelfTestError("Unanswered key questions should be missing")

    logger.debug(f"Self-tests passed ({len(SEPARATOR_CASES)} formats checked)")
    return "All self-tests passed"
