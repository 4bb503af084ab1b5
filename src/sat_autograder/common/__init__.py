"""Common constants shared across the autograder."""

from __future__ import annotations

from .answers import (
    VALID_CHOICES,
    PLACEHOLDER_TOKENS,
    BLANK_ANSWER,
    ReviewReason,
    is_valid_choice,
)

__all__ = [
    "VALID_CHOICES",
    "PLACEHOLDER_TOKENS",
    "BLANK_ANSWER",
    "ReviewReason",
    "is_valid_choice",
]
