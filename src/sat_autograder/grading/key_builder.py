"""
Module: grading.key_builder

Purpose:
    Build the immutable AnswerKey from answer-key text such as
    "1. A\\n2) B\\n34. D".

Key Functions:
    - build_answer_key(): Key text -> AnswerKey (first valid entry wins)
    - diagnose_key_text(): Report the entries build_answer_key skipped

Design:
    Key text is treated as authoritative. Entries that are not a letter
    in A..E, and later entries for an already keyed question, are dropped
    from the key and not returned to the caller; they are logged at
    WARNING level. diagnose_key_text() exposes the same skips as manual
    review entries for callers that want to show a malformed key.

Used By:
    - loading.key_bank: Builds one key per worksheet file
    - cli: --key FILE
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from sat_autograder.common.answers import ReviewReason, is_valid_choice
from sat_autograder.core.models.answer_key import AnswerKey
from sat_autograder.core.models.manual_review import ManualReviewEntry, ReviewBook
from sat_autograder.core.models.pairs import ScannedPair
from sat_autograder.scanner import ScannerConfig, iter_answer_pairs

logger = logging.getLogger(__name__)


def _walk_key_pairs(
    pairs: Iterable[ScannedPair],
) -> Tuple[Dict[int, str], ReviewBook]:
    """Split key pairs into accepted entries and skipped ones."""
    answers: Dict[int, str] = {}
    skipped = ReviewBook()

    for pair in pairs:
        if pair.needs_manual_review:
            skipped.flag(pair.question, ReviewReason.NON_STANDARD, pair.answer)
            continue
        if not is_valid_choice(pair.answer):
            skipped.flag(pair.question, ReviewReason.OUT_OF_RANGE, pair.answer)
            continue
        if pair.question in answers:
            if pair.answer != answers[pair.question]:
                skipped.flag(
                    pair.question,
                    ReviewReason.DUPLICATE,
                    answers[pair.question],
                    pair.answer,
                )
            continue
        answers[pair.question] = pair.answer

    return answers, skipped


def build_answer_key(key_text: Optional[str], config: Optional[ScannerConfig] = None) -> AnswerKey:
    """
    Parse answer-key text into an AnswerKey.

    For each scanned pair with a single letter in A..E, the first entry for
    a question is kept. Invalid choices and later duplicates are ignored.

    Args:
        key_text: Key text, e.g. "1. A\\n2. B"
        config: Optional scanner limits

    Returns:
        AnswerKey; its total is the number of distinct keyed questions

    Example:
        >>> key = build_answer_key("1. A\\n2. B\\n2. C\\n3. Z")
        >>> dict(key)
        {1: 'A', 2: 'B'}
    """
    answers, skipped = _walk_key_pairs(iter_answer_pairs(key_text, config))

    for entry in skipped.entries():
        logger.warning(
            f"Key entry for question {entry.question} ignored "
            f"({'; '.join(entry.reasons)}): {', '.join(entry.answers)}"
        )

    key = AnswerKey(answers)
    logger.debug(f"Built answer key with {key.total} questions")
    return key


def diagnose_key_text(
    key_text: Optional[str],
    config: Optional[ScannerConfig] = None,
) -> Tuple[ManualReviewEntry, ...]:
    """
    List the key entries that build_answer_key() would skip.

    A repeated entry with the same letter is harmless and not reported.
    A question can appear here and still be keyed (its first valid entry
    was kept).

    Returns:
        Manual review entries sorted by question number

    Example:
        >>> [e.reasons for e in diagnose_key_text("1. A\\n1. B\\n2. ?")]
        [('Duplicate answers provided',), ('Non-standard answer format',)]
    """
    _, skipped = _walk_key_pairs(iter_answer_pairs(key_text, config))
    return skipped.entries()
