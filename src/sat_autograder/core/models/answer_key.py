"""
Module: answer_key

Purpose:
    Provides the AnswerKey - the immutable mapping from question number
    to the correct letter choice. Built once from key text and never
    mutated afterwards; its size is the grading total.

Key Functions:
    - AnswerKey(answers): Validate and freeze a question -> letter mapping
    - AnswerKey.from_dict(data): Rebuild from JSON (string keys)
    - AnswerKey.to_dict(): JSON-ready dict

Dependencies:
    - dataclasses (std)
    - types.MappingProxyType (std): read-only view of the entries

Used By:
    - grading.key_builder: Produces keys
    - grading.engine: Grades submissions against a key
    - loading.key_bank: Holds one key per worksheet
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sat_autograder.common.answers import is_valid_choice


@dataclass(frozen=True, eq=False)
class AnswerKey(Mapping[int, str]):
    """
    Immutable question -> letter mapping.

    Behaves as a read-only ``Mapping[int, str]``. Iteration is always in
    ascending question order, regardless of the order entries were given.

    Attributes:
        answers: Question number -> letter in A..E

    Invariants:
        - every question is an int >= 1
        - every letter is one of A, B, C, D, E
        - entries cannot be changed after construction

    Example:
        >>> key = AnswerKey({2: "B", 1: "A"})
        >>> list(key)
        [1, 2]
        >>> key.total
        2
    """

    answers: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate and freeze entries on construction."""
        if not isinstance(self.answers, Mapping):
            raise ValueError(f"AnswerKey expects a mapping, got {type(self.answers).__name__}")
        for question, letter in self.answers.items():
            if isinstance(question, bool) or not isinstance(question, int) or question < 1:
                raise ValueError(f"Invalid question number in key: {question!r}")
            if not is_valid_choice(letter):
                raise ValueError(f"Invalid key answer for question {question}: {letter!r}")
        ordered = dict(sorted(self.answers.items()))
        object.__setattr__(self, "answers", MappingProxyType(ordered))

    # ─────────────────────────────────────────────────────────────────────────
    # Mapping protocol
    # ─────────────────────────────────────────────────────────────────────────

    def __getitem__(self, question: int) -> str:
        return self.answers[question]

    def __iter__(self) -> Iterator[int]:
        return iter(self.answers)

    def __len__(self) -> int:
        return len(self.answers)

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def total(self) -> int:
        """Number of keyed questions (the grading total)."""
        return len(self.answers)

    @property
    def questions(self) -> tuple[int, ...]:
        """Keyed question numbers in ascending order."""
        return tuple(self.answers)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, str]:
        """JSON-ready dict; question numbers become string keys."""
        return {str(question): letter for question, letter in self.answers.items()}

    @classmethod
    def from_dict(cls, data: Mapping[Any, Any]) -> AnswerKey:
        """
        Rebuild a key from a JSON object.

        Args:
            data: Mapping of question number (int or digit string) -> letter

        Returns:
            AnswerKey with int question numbers

        Raises:
            ValueError: If a question number is not numeric or a letter is invalid
        """
        answers: dict[int, str] = {}
        for question, letter in data.items():
            try:
                number = int(question)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid question number in key: {question!r}") from None
            answers[number] = letter
        return cls(answers)

    def __repr__(self) -> str:
        return f"AnswerKey({self.total} questions)"
