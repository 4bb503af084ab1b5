"""
Module: submission

Purpose:
    Provides StudentSubmission - the reconciled form of a student's text:
    a clean question -> letter map plus the manual review entries for
    everything that could not be resolved. This is the only structure
    the grading engine accepts as a student argument.

Key Classes:
    - StudentSubmission: Frozen clean answers + manual review list

Used By:
    - grading.reconciler: Produces submissions
    - grading.engine: Grades submissions
    - core.utils.serialization: JSON round trips for the CLI
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from sat_autograder.common.answers import is_valid_choice

from .manual_review import ManualReviewEntry


@dataclass(frozen=True, eq=False)
class StudentSubmission:
    """
    Clean answers and manual review entries for one student's text.

    Attributes:
        answers: Question -> single valid letter (A..E)
        manual_review: Entries sorted by question number

    Invariants:
        - every clean answer is one of A..E
        - a question is never both answered and under manual review
        - manual_review is sorted by question

    Example:
        >>> sub = StudentSubmission({1: "A"}, ())
        >>> sub.attempted_questions
        (1,)
    """

    answers: Mapping[int, str] = field(default_factory=dict)
    manual_review: Tuple[ManualReviewEntry, ...] = ()

    def __post_init__(self) -> None:
        """Validate the partition between clean answers and manual review."""
        for question, letter in self.answers.items():
            if not is_valid_choice(letter):
                raise ValueError(f"Invalid clean answer for question {question}: {letter!r}")
        review = tuple(sorted(self.manual_review, key=lambda entry: entry.question))
        flagged = [entry.question for entry in review]
        if len(flagged) != len(set(flagged)):
            raise ValueError(f"Duplicate manual review entries: {flagged}")
        overlap = set(flagged) & set(self.answers)
        if overlap:
            raise ValueError(f"Questions both answered and under manual review: {sorted(overlap)}")
        object.__setattr__(self, "answers", MappingProxyType(dict(sorted(self.answers.items()))))
        object.__setattr__(self, "manual_review", review)

    @property
    def review_questions(self) -> Tuple[int, ...]:
        """Question numbers under manual review, ascending."""
        return tuple(entry.question for entry in self.manual_review)

    @property
    def attempted_questions(self) -> Tuple[int, ...]:
        """Every question number referenced in the text, ascending."""
        return tuple(sorted(set(self.answers) | set(self.review_questions)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StudentSubmission):
            return NotImplemented
        return dict(self.answers) == dict(other.answers) and self.manual_review == other.manual_review

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "answers": {str(question): letter for question, letter in self.answers.items()},
            "manual_review": [entry.to_dict() for entry in self.manual_review],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StudentSubmission:
        return cls(
            answers={int(question): letter for question, letter in data.get("answers", {}).items()},
            manual_review=tuple(
                ManualReviewEntry.from_dict(item) for item in data.get("manual_review", [])
            ),
        )

    def __repr__(self) -> str:
        return (
            f"StudentSubmission(answers={len(self.answers)}, "
            f"manual_review={len(self.manual_review)})"
        )
