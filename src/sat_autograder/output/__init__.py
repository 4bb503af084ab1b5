"""
Module: output

Purpose:
    Grade report rendering.

Key Functions:
    - format_report(): Plain text report
    - render_report_pdf(): A4 PDF report

Dependencies:
    - reportlab: PDF generation
"""

from .text_report import format_report, report_lines
from .pdf_report import render_report_pdf

__all__ = [
    "format_report",
    "report_lines",
    "render_report_pdf",
]
