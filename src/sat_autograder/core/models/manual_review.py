"""
Module: manual_review

Purpose:
    Provides ManualReviewEntry - a question whose answer could not be
    resolved to a single valid letter - and ReviewBook, the mutable
    accumulator used while entries are being collected.

Key Classes:
    - ManualReviewEntry: Frozen entry with sorted answers and reasons
    - ReviewBook: Dict-of-sets accumulator, frozen into entries at the end

Used By:
    - grading.reconciler: Routes ambiguous student answers here
    - grading.engine: Adds orphan questions, sorts the final list
    - grading.key_builder: Reports skipped key entries
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Mapping, Set, Tuple

from sat_autograder.common.answers import ReviewReason


@dataclass(frozen=True, slots=True)
class ManualReviewEntry:
    """
    A question that needs a human to decide the answer.

    Attributes:
        question: Question number
        answers: Distinct answers seen for the question, sorted
        reasons: Distinct reason codes (see ReviewReason), sorted

    Invariants:
        - question >= 1
        - answers and reasons are sorted and de-duplicated
        - at least one reason is present

    Example:
        >>> entry = ManualReviewEntry(1, ("B", "A"), ("Duplicate answers provided",))
        >>> entry.answers
        ('A', 'B')
    """

    question: int
    answers: Tuple[str, ...] = ()
    reasons: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Normalize ordering and validate on construction."""
        if self.question < 1:
            raise ValueError(f"Question number must be positive: {self.question}")
        if not self.reasons:
            raise ValueError(f"Manual review entry for question {self.question} has no reason")
        object.__setattr__(self, "answers", tuple(sorted(set(self.answers))))
        object.__setattr__(self, "reasons", tuple(sorted(set(self.reasons))))

    def has_reason(self, reason: str) -> bool:
        return reason in self.reasons

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "answers": list(self.answers),
            "reasons": list(self.reasons),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ManualReviewEntry:
        return cls(
            question=int(data["question"]),
            answers=tuple(data.get("answers", ())),
            reasons=tuple(data.get("reasons", ())),
        )


@dataclass
class ReviewBook:
    """
    Mutable accumulator of manual review answers and reasons per question.

    Insert order does not matter; ``entries()`` sorts everything once at
    the end so output is stable across runs.
    """

    _answers: Dict[int, Set[str]] = field(default_factory=dict)
    _reasons: Dict[int, Set[str]] = field(default_factory=dict)

    @classmethod
    def from_entries(cls, entries: Iterable[ManualReviewEntry]) -> ReviewBook:
        book = cls()
        for entry in entries:
            book.add(entry.question, *entry.answers, reasons=entry.reasons)
        return book

    def add(self, question: int, *answers: str, reasons: Iterable[str] = ()) -> None:
        """Record answers and reasons for a question, creating the entry if needed."""
        self._answers.setdefault(question, set()).update(answers)
        self._reasons.setdefault(question, set()).update(reasons)

    def flag(self, question: int, reason: str, *answers: str) -> None:
        """Record a single reason along with the answers that caused it."""
        if reason not in ReviewReason.ALL:
            raise ValueError(f"Unknown manual review reason: {reason!r}")
        self.add(question, *answers, reasons=(reason,))

    def __contains__(self, question: object) -> bool:
        return question in self._answers

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._answers))

    def __len__(self) -> int:
        return len(self._answers)

    def entries(self) -> Tuple[ManualReviewEntry, ...]:
        """Freeze into entries sorted by question number."""
        return tuple(
            ManualReviewEntry(
                question=question,
                answers=tuple(self._answers[question]),
                reasons=tuple(self._reasons[question]),
            )
            for question in sorted(self._answers)
        )
