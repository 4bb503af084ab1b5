"""Centralized answer alphabet and manual review reason codes.

Every module that validates a letter choice or records a manual review
reason reads it from here, so the strings stay identical between the key
path, the student path and serialized reports.
"""

from __future__ import annotations

from typing import FrozenSet

# Letters accepted as an answer key entry or a clean student answer
VALID_CHOICES: FrozenSet[str] = frozenset("ABCDE")

# Tokens that mean "no answer given" rather than a letter choice
PLACEHOLDER_TOKENS: FrozenSet[str] = frozenset({"X", "?", "BLANK", "SKIP"})

# Stand-in answer recorded when the token after a marker is empty
BLANK_ANSWER = "blank"


class ReviewReason:
    """Machine-readable reason codes attached to manual review entries."""

    NON_STANDARD = "Non-standard answer format"
    OUT_OF_RANGE = "Answer outside A-E"
    DUPLICATE = "Duplicate answers provided"
    NOT_IN_KEY = "No answer key entry for this question"

    ALL: FrozenSet[str] = frozenset({NON_STANDARD, OUT_OF_RANGE, DUPLICATE, NOT_IN_KEY})


def is_valid_choice(letter: object) -> bool:
    """True if letter is one of the five canonical choices."""
    return isinstance(letter, str) and letter in VALID_CHOICES
