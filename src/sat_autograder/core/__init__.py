"""
SAT Autograder Core Package

Data models, input validation and serialization shared by every other
subpackage. Nothing in here performs I/O except the JSON helpers in
``core.utils``.
"""

from .models import (
    AnswerKey,
    GradeReport,
    IncorrectAnswer,
    ManualReviewEntry,
    ScannedPair,
    StudentSubmission,
)
from .schemas import ValidationError

__all__ = [
    "AnswerKey",
    "GradeReport",
    "IncorrectAnswer",
    "ManualReviewEntry",
    "ScannedPair",
    "StudentSubmission",
    "ValidationError",
]
