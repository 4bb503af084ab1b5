"""
Module: grading.engine

Purpose:
    Compare a reconciled StudentSubmission against an AnswerKey and build
    the GradeReport.

Key Functions:
    - grade_submission(): Key + submission + options -> GradeReport

Key Classes:
    - GradeOptions: Grading switches (skip_missing)

Algorithm:
    1. Clean answers for questions not in the key move to manual review
       ("No answer key entry for this question").
    2. Each key question, ascending: skipped if under review, missing if
       unanswered, otherwise correct or incorrect.
    3. denominator = total - missing when skip_missing, else total;
       percent = correct / denominator * 100, or 0.0 when denominator is 0.

Used By:
    - cli: grade command
    - selftest: built-in checks
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sat_autograder.common.answers import ReviewReason
from sat_autograder.core.models.manual_review import ReviewBook
from sat_autograder.core.models.report import GradeReport, IncorrectAnswer
from sat_autograder.core.schemas.validator import (
    ValidationError,
    validate_answer_key,
    validate_flag,
    validate_submission,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeOptions:
    """
    Grading switches.

    Attributes:
        skip_missing: Drop unanswered questions from the denominator (default False)
    """
    skip_missing: bool = False

    def __post_init__(self) -> None:
        """Validate options on construction."""
        validate_flag(self.skip_missing, "skip_missing")


def _resolve_options(options: Optional[GradeOptions], skip_missing: Optional[bool]) -> GradeOptions:
    if options is not None and skip_missing is not None:
        raise ValidationError(
            "Pass either options or skip_missing, not both",
            path="options",
        )
    if skip_missing is not None:
        return GradeOptions(skip_missing=skip_missing)
    if options is None:
        return GradeOptions()
    if not isinstance(options, GradeOptions):
        raise ValidationError(
            f"options must be GradeOptions, got {type(options).__name__}",
            path="options",
        )
    return options


def grade_submission(
    key: Any,
    submission: Any,
    options: Optional[GradeOptions] = None,
    *,
    skip_missing: Optional[bool] = None,
) -> GradeReport:
    """
    Grade a reconciled submission against an answer key.

    Args:
        key: AnswerKey, or any mapping of question number -> letter A..E
        submission: Output of parse_student_submission()
        options: Grading switches. Defaults to GradeOptions().
        skip_missing: Shortcut for GradeOptions(skip_missing=...)

    Returns:
        GradeReport accounting for every key question exactly once
        (correct, incorrect, missing or manual review)

    Raises:
        ValidationError: If key, submission or options have the wrong shape.
            Never raised for content problems; those go to manual review.

    Example:
        >>> key = build_answer_key("1. A\\n2. B\\n3. C\\n4. D\\n5. E")
        >>> sub = parse_student_submission("1) a 2) c 4) d")
        >>> report = grade_submission(key, sub, skip_missing=True)
        >>> (report.correct, report.missing_count, report.denominator)
        (2, 2, 3)
    """
    answer_key = validate_answer_key(key)
    student = validate_submission(submission)
    opts = _resolve_options(options, skip_missing)

    answers: Dict[int, str] = dict(student.answers)
    review = ReviewBook.from_entries(student.manual_review)

    for question in sorted(answers):
        if question not in answer_key:
            review.flag(question, ReviewReason.NOT_IN_KEY, answers.pop(question))
            logger.debug(f"Question {question} has no key entry; moved to manual review")

    correct = 0
    incorrect: List[IncorrectAnswer] = []
    missing: List[int] = []

    for question, correct_answer in answer_key.items():
        if question in review:
            continue
        student_answer = answers.get(question)
        if student_answer is None:
            missing.append(question)
        elif student_answer == correct_answer:
            correct += 1
        else:
            incorrect.append(IncorrectAnswer(question, correct_answer, student_answer))

    total = answer_key.total
    denominator = total - len(missing) if opts.skip_missing else total
    percent = correct / denominator * 100 if denominator > 0 else 0.0

    report = GradeReport(
        total=total,
        correct=correct,
        incorrect=tuple(incorrect),
        missing=tuple(missing),
        manual_review=review.entries(),
        denominator=denominator,
        percent=percent,
        attempted_questions=tuple(sorted(set(answers) | set(review))),
        skip_missing=opts.skip_missing,
    )
    logger.info(f"Graded submission: {report.score_line}")
    return report
