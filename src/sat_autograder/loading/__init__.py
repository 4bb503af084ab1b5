"""
Module: loading

Purpose:
    File input for the command line: submission text (plain text or
    PDF text layer) and the worksheet key bank.

Dependencies:
    - fitz (pymupdf): PDF text extraction
"""

from .pdf_text import extract_pdf_text, read_submission_text, read_submission_files
from .key_bank import (
    KeyBank,
    KeyEntry,
    key_label,
    load_key_bank,
    load_key_entry,
    read_key_file,
    split_key_header,
)

__all__ = [
    "extract_pdf_text",
    "read_submission_text",
    "read_submission_files",
    "KeyBank",
    "KeyEntry",
    "key_label",
    "load_key_bank",
    "load_key_entry",
    "read_key_file",
    "split_key_header",
]
