"""
Module: report

Purpose:
    Provides GradeReport and IncorrectAnswer - the derived, stateless
    result of grading one submission against one key. Counts are always
    calculated from the itemized lists, never stored separately.

Key Classes:
    - IncorrectAnswer: One wrong answer with the key's letter
    - GradeReport: Totals, itemized lists and the percentage score

Used By:
    - grading.engine: Builds reports
    - output.text_report / output.pdf_report: Renders reports
    - core.utils.serialization: JSON round trips
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Tuple

from .manual_review import ManualReviewEntry


@dataclass(frozen=True, slots=True)
class IncorrectAnswer:
    """A keyed question the student answered with the wrong letter."""

    question: int
    correct_answer: str
    student_answer: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "correct_answer": self.correct_answer,
            "student_answer": self.student_answer,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IncorrectAnswer:
        return cls(
            question=int(data["question"]),
            correct_answer=data["correct_answer"],
            student_answer=data["student_answer"],
        )


@dataclass(frozen=True)
class GradeReport:
    """
    Result of grading a submission.

    Attributes:
        total: Number of keyed questions
        correct: Number of keyed questions answered correctly
        incorrect: Wrong answers, ascending by question
        missing: Keyed questions with no answer, ascending
        manual_review: Entries excluded from scoring, ascending
        denominator: total, or total - missing when skip_missing
        percent: correct / denominator * 100 (0.0 when denominator is 0)
        attempted_questions: Every question the student referenced
        skip_missing: Whether missing answers were dropped from the denominator

    Invariants:
        - correct + incorrect_count + missing_count
          + (manual review entries in the key) == total
        - 0 <= percent <= 100

    Example:
        >>> report.score_line
        '2 / 5 correct (40%)'
    """

    total: int
    correct: int
    incorrect: Tuple[IncorrectAnswer, ...]
    missing: Tuple[int, ...]
    manual_review: Tuple[ManualReviewEntry, ...]
    denominator: int
    percent: float
    attempted_questions: Tuple[int, ...]
    skip_missing: bool = False

    def __post_init__(self) -> None:
        """Validate counts on construction."""
        if self.total < 0 or self.correct < 0:
            raise ValueError(f"Counts cannot be negative: total={self.total}, correct={self.correct}")
        if self.correct + len(self.incorrect) + len(self.missing) > self.total:
            raise ValueError(
                f"Scored questions exceed total: {self.correct} correct, "
                f"{len(self.incorrect)} incorrect, {len(self.missing)} missing, total {self.total}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def incorrect_count(self) -> int:
        return len(self.incorrect)

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def manual_review_count(self) -> int:
        return len(self.manual_review)

    @property
    def scored_out_of(self) -> int:
        """Number shown after the slash in the score line."""
        return self.denominator if self.skip_missing else self.total

    @property
    def score_line(self) -> str:
        """
        One-line summary, e.g. ``"2 / 3 correct (66.7%) - missing skipped"``.
        """
        line = f"{self.correct} / {self.scored_out_of} correct ({format_percent(self.percent)}%)"
        if self.skip_missing:
            line += " - missing skipped"
        return line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "correct": self.correct,
            "incorrect": [item.to_dict() for item in self.incorrect],
            "incorrect_count": self.incorrect_count,
            "missing": list(self.missing),
            "missing_count": self.missing_count,
            "manual_review": [entry.to_dict() for entry in self.manual_review],
            "manual_review_count": self.manual_review_count,
            "denominator": self.denominator,
            "percent": self.percent,
            "attempted_questions": list(self.attempted_questions),
            "skip_missing": self.skip_missing,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GradeReport:
        return cls(
            total=data["total"],
            correct=data["correct"],
            incorrect=tuple(IncorrectAnswer.from_dict(item) for item in data.get("incorrect", [])),
            missing=tuple(data.get("missing", [])),
            manual_review=tuple(
                ManualReviewEntry.from_dict(item) for item in data.get("manual_review", [])
            ),
            denominator=data["denominator"],
            percent=float(data["percent"]),
            attempted_questions=tuple(data.get("attempted_questions", [])),
            skip_missing=bool(data.get("skip_missing", False)),
        )

    def __repr__(self) -> str:
        return f"GradeReport({self.score_line})"


def format_percent(value: float) -> str:
    """
    Format a percentage with at most one fraction digit, halves rounded up.

    Example:
        >>> format_percent(66.666)
        '66.7'
        >>> format_percent(6.25)
        '6.3'
        >>> format_percent(40.0)
        '40'
    """
    text = str(Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    if text.endswith(".0"):
        text = text[:-2]
    return text
