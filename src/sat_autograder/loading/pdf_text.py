"""
Module: loading.pdf_text

Purpose:
    Pull plain text out of submission files so the scanner can read it.
    PDF text comes from PyMuPDF's text layer; there is no OCR.

Key Functions:
    - extract_pdf_text(): All page text of a PDF, one page per line block
    - read_submission_text(): .pdf via extract_pdf_text, anything else as UTF-8
    - read_submission_files(): Several files joined in order

Dependencies:
    - fitz (pymupdf): PDF text extraction
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

import fitz

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


def extract_pdf_text(pdf_path: Path) -> str:
    """
    Extract the text layer of every page in a PDF.

    Args:
        pdf_path: Path to the PDF

    Returns:
        Page texts joined with newlines, stripped

    Raises:
        FileNotFoundError: If the file does not exist
        fitz.FileDataError: If the file is not a readable PDF
    """
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    pages: List[str] = []
    with fitz.open(pdf_path) as doc:
        for page in doc:
            pages.append((page.get_text("text") or "").strip())
        logger.debug(f"Extracted text from {doc.page_count} page(s) of {pdf_path.name}")

    return "\n".join(pages).strip()


def read_submission_text(path: Path) -> str:
    """
    Read one submission file as text.

    Example:
        >>> read_submission_text(Path("answers.txt"))
        '1) b\\n2) d'
    """
    if path.suffix.lower() == PDF_SUFFIX:
        return extract_pdf_text(path)
    return path.read_text(encoding="utf-8").strip()


def read_submission_files(paths: Iterable[Path]) -> str:
    """Read several submission files and join their text with newlines."""
    texts = [read_submission_text(path) for path in paths]
    return "\n".join(text for text in texts if text)
