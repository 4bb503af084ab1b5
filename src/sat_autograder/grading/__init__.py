"""
Module: grading

Purpose:
    Key building, student reconciliation and grading. The three public
    entry points are pure functions; nothing here keeps state between
    calls.

Key Functions:
    - build_answer_key(): Key text -> AnswerKey
    - parse_student_submission(): Student text -> StudentSubmission
    - grade_submission(): AnswerKey + StudentSubmission -> GradeReport
"""

from .key_builder import build_answer_key, diagnose_key_text
from .reconciler import parse_student_submission, reconcile_pairs
from .engine import GradeOptions, grade_submission

__all__ = [
    "build_answer_key",
    "diagnose_key_text",
    "parse_student_submission",
    "reconcile_pairs",
    "GradeOptions",
    "grade_submission",
]
