"""
Core Models Package

Immutable, validated data models shared by the scanner, the grading
pipeline and the report writers.

All public models are frozen dataclasses. ReviewBook is the one mutable
helper; it only lives inside a single reconcile or grade call.
"""

from .pairs import ScannedPair
from .answer_key import AnswerKey
from .manual_review import ManualReviewEntry, ReviewBook
from .submission import StudentSubmission
from .report import GradeReport, IncorrectAnswer, format_percent

__all__ = [
    "ScannedPair",
    "AnswerKey",
    "ManualReviewEntry",
    "ReviewBook",
    "StudentSubmission",
    "GradeReport",
    "IncorrectAnswer",
    "format_percent",
]
