"""
Module: scanner

Purpose:
    Free-text answer extraction. Turns an arbitrary text blob into
    question/answer candidates for the grading pipeline.

Key Functions:
    - iter_answer_pairs(): Lazy scan
    - scan_answer_pairs(): Materialized scan

Key Classes:
    - ScannerConfig: Input length and question-number width limits
"""

from .config import ScannerConfig
from .answer_pairs import iter_answer_pairs, scan_answer_pairs

__all__ = [
    "ScannerConfig",
    "iter_answer_pairs",
    "scan_answer_pairs",
]
