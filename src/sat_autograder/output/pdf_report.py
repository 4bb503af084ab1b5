"""
Module: output.pdf_report

Purpose:
    Render a grade report to a printable A4 PDF.

Key Functions:
    - render_report_pdf(): Write the text report onto A4 pages

Dependencies:
    - reportlab: PDF generation
    - output.text_report: Report lines
"""

from __future__ import annotations

import logging
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from sat_autograder import __version__
from sat_autograder.core.models.report import GradeReport

from .text_report import report_lines

logger = logging.getLogger(__name__)

# Constants
A4_WIDTH, A4_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 18
TITLE_FONT = ("Helvetica-Bold", 16)
BODY_FONT = ("Helvetica", 11)
FOOTER_FONT = ("Helvetica", 8)


def _draw_footer(c: canvas.Canvas, page_number: int) -> None:
    c.setFont(*FOOTER_FONT)
    c.drawString(MARGIN, MARGIN / 2, f"sat-autograder {__version__}")
    c.drawRightString(A4_WIDTH - MARGIN, MARGIN / 2, f"Page {page_number}")


def render_report_pdf(report: GradeReport, output_path: Path, key_name: str) -> Path:
    """
    Render a grade report to a PDF file.

    The first line (worksheet name) is drawn as a title; every other
    line of the text report follows, flowing onto new pages as needed.

    Args:
        report: Report to render
        output_path: Path to write the PDF
        key_name: Worksheet name shown in the title

    Returns:
        output_path

    Example:
        >>> render_report_pdf(report, Path("out/report.pdf"), "Math 204")
        PosixPath('out/report.pdf')
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(output_path), pagesize=A4)
    c.setTitle(f"Grade report - {key_name}")

    title, *body = report_lines(report, key_name)
    page_number = 1
    y = A4_HEIGHT - MARGIN

    c.setFont(*TITLE_FONT)
    c.drawString(MARGIN, y, title)
    y -= LINE_HEIGHT * 1.5
    c.setFont(*BODY_FONT)

    for line in body:
        if y < MARGIN + LINE_HEIGHT:
            _draw_footer(c, page_number)
            c.showPage()
            page_number += 1
            y = A4_HEIGHT - MARGIN
            c.setFont(*BODY_FONT)
        c.drawString(MARGIN, y, line)
        y -= LINE_HEIGHT

    _draw_footer(c, page_number)
    c.showPage()
    c.save()
    logger.info(f"Wrote grade report ({page_number} page(s)) to {output_path}")
    return output_path
