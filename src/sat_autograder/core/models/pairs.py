"""
Module: pairs

Purpose:
    Provides the ScannedPair dataclass - one question/answer candidate
    found by the scanner in a block of free text. Pairs are ephemeral:
    they are consumed by the key builder or the student reconciler and
    never stored in a report.

Key Classes:
    - ScannedPair: Immutable scan candidate with diagnostics

Used By:
    - scanner.pairs: Produces pairs
    - grading.key_builder: Builds an AnswerKey from pairs
    - grading.reconciler: Builds a StudentSubmission from pairs
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScannedPair:
    """
    A question number and the answer token that followed it.

    Attributes:
        question: Question number read from the text (1-999)
        answer: Upper-cased letter for single-letter tokens, otherwise
            the trimmed raw token ("blank" when nothing followed)
        raw: Full matched span, marker included, for diagnostics
        needs_manual_review: True when the token is not a single letter
        offset: Character offset of the marker in the scanned text

    Invariants:
        - question >= 1
        - answer is never empty

    Example:
        >>> pair = ScannedPair(question=27, answer="C", raw="27.)C")
        >>> pair.is_letter
        True
    """

    question: int
    answer: str
    raw: str = ""
    needs_manual_review: bool = False
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate pair on construction."""
        if self.question < 1:
            raise ValueError(f"Question number must be positive: {self.question}")
        if not self.answer:
            raise ValueError(f"Answer token cannot be empty for question {self.question}")

    @property
    def is_letter(self) -> bool:
        """True if the scanner read a single letter for this question."""
        return not self.needs_manual_review

    def __repr__(self) -> str:
        flag = ", review" if self.needs_manual_review else ""
        return f"ScannedPair({self.question}: {self.answer!r}{flag})"
