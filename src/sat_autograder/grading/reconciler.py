"""
Module: grading.reconciler

Purpose:
    Turn scanned student text into a StudentSubmission: a clean map of
    one valid letter per question, plus manual review entries for every
    question that could not be resolved.

Key Functions:
    - parse_student_submission(): Student text -> StudentSubmission
    - reconcile_pairs(): Scanned pairs -> StudentSubmission

Algorithm (scan order):
    1. Token is not a letter            -> review, "Non-standard answer format"
    2. Letter outside A..E              -> review, "Answer outside A-E"
    3. Question already under review    -> add answer to its entry
    4. Question already answered        -> move both answers to review,
                                           "Duplicate answers provided"
    5. Otherwise                        -> record the clean answer

    When 1 or 2 fires for a question that already has a clean answer, the
    clean answer moves into the review entry, so no question ends up in
    both buckets.

Used By:
    - grading.engine (callers pass its output to grade_submission)
    - cli: parse / grade commands
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from sat_autograder.common.answers import ReviewReason, is_valid_choice
from sat_autograder.core.models.manual_review import ReviewBook
from sat_autograder.core.models.pairs import ScannedPair
from sat_autograder.core.models.submission import StudentSubmission
from sat_autograder.scanner import ScannerConfig, iter_answer_pairs

logger = logging.getLogger(__name__)


def _flag(answers: Dict[int, str], review: ReviewBook, pair: ScannedPair, reason: str) -> None:
    """Route a pair to review, pulling any clean answer for the question along."""
    previous = answers.pop(pair.question, None)
    if previous is not None:
        review.add(pair.question, previous)
    review.flag(pair.question, reason, pair.answer)


def reconcile_pairs(pairs: Iterable[ScannedPair]) -> StudentSubmission:
    """
    Reconcile scanned pairs into clean answers and manual review entries.

    Args:
        pairs: Scanned pairs in text order

    Returns:
        StudentSubmission where every scanned question is either answered
        or under review, never both
    """
    answers: Dict[int, str] = {}
    review = ReviewBook()

    for pair in pairs:
        question = pair.question

        if pair.needs_manual_review:
            _flag(answers, review, pair, ReviewReason.NON_STANDARD)
            continue

        if not is_valid_choice(pair.answer):
            _flag(answers, review, pair, ReviewReason.OUT_OF_RANGE)
            continue

        if question in review:
            review.add(question, pair.answer)
            continue

        if question in answers:
            review.flag(question, ReviewReason.DUPLICATE, answers.pop(question), pair.answer)
            continue

        answers[question] = pair.answer

    submission = StudentSubmission(answers=answers, manual_review=review.entries())
    logger.debug(
        f"Reconciled {len(submission.answers)} clean answers, "
        f"{len(submission.manual_review)} for manual review"
    )
    return submission


def parse_student_submission(
    text: Optional[str],
    config: Optional[ScannerConfig] = None,
) -> StudentSubmission:
    """
    Parse a student's free-text answers.

    Args:
        text: Student text (typed, pasted, or extracted from a PDF)
        config: Optional scanner limits

    Returns:
        StudentSubmission with clean answers and sorted manual review entries

    Example:
        >>> sub = parse_student_submission("1) a 1) b\\n2) c")
        >>> dict(sub.answers)
        {2: 'C'}
        >>> sub.manual_review[0].answers
        ('A', 'B')
    """
    return reconcile_pairs(iter_answer_pairs(text, config))
