"""
Module: scanner.config

Purpose:
    Configuration dataclass for the answer-pair scanner. Bounds the work
    a single scan can do: the scanned text length and the number of
    digits a question number may have.

Key Classes:
    - ScannerConfig: Immutable scanner limits

Used By:
    - scanner.answer_pairs: Reads limits for each scan
"""

from dataclasses import dataclass

DEFAULT_MAX_INPUT_CHARS = 200_000
DEFAULT_MAX_QUESTION_DIGITS = 3


@dataclass(frozen=True)
class ScannerConfig:
    """
    Limits for one scan.

    Attributes:
        max_input_chars: Longer text is truncated before scanning (default 200,000)
        max_question_digits: Longest question number, in digits (default 3)
    """
    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS
    max_question_digits: int = DEFAULT_MAX_QUESTION_DIGITS

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_input_chars <= 0:
            raise ValueError(f"max_input_chars must be positive: {self.max_input_chars}")
        if not 1 <= self.max_question_digits <= 6:
            raise ValueError(f"max_question_digits must be 1-6: {self.max_question_digits}")
