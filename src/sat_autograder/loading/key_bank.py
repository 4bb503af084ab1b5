"""
Module: loading.key_bank

Purpose:
    Load a directory of answer-key text files into a bank of worksheet
    keys, one per file.

Key Functions:
    - load_key_bank(): Directory of *.txt keys -> KeyBank
    - read_key_file(): Header fields and key text of one file
    - key_label(): "math-204" -> "Math 204"

Key Classes:
    - KeyEntry: One worksheet key with its id, display label and subject
    - KeyBank: Read-only lookup of entries by id

Key file format:
    Optional "# Name: value" header lines, then the key itself:

        # Subject: Math (Calculator)
        1. A
        2. C

    Recognized header fields are "label" and "subject"; others are ignored.
    Header lines are never scanned for answers.

Used By:
    - cli: --key, --key-id and the keys command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Tuple

from sat_autograder.core.models.answer_key import AnswerKey
from sat_autograder.grading.key_builder import build_answer_key

logger = logging.getLogger(__name__)

KEY_FILE_PATTERN = "*.txt"
HEADER_PREFIX = "#"


def key_label(key_id: str) -> str:
    """
    Display label for a key id.

    Example:
        >>> key_label("english-101")
        'English 101'
    """
    return " ".join(word.capitalize() for word in key_id.replace("_", "-").split("-") if word)


def split_key_header(text: str) -> Tuple[Dict[str, str], str]:
    """
    Split leading "# Name: value" lines from key text.

    Blank lines before the key are skipped. Field names are lower-cased;
    unknown fields are kept and ignored by callers.

    Returns:
        (header fields, remaining key text)

    Example:
        >>> split_key_header("# Subject: Reading & Writing\\n1. A")
        ({'subject': 'Reading & Writing'}, '1. A')
    """
    fields: Dict[str, str] = {}
    lines = text.splitlines()
    body_start = 0

    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith(HEADER_PREFIX):
            break
        body_start += 1
        if not stripped:
            continue
        name, sep, value = stripped[len(HEADER_PREFIX):].partition(":")
        if sep and name.strip():
            fields[name.strip().lower()] = value.strip()
        else:
            logger.debug(f"Ignoring key comment line: {stripped!r}")

    return fields, "\n".join(lines[body_start:])


def read_key_file(path: Path) -> Tuple[Dict[str, str], str]:
    """Header fields and key text of one key file."""
    return split_key_header(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class KeyEntry:
    """
    One worksheet answer key.

    Attributes:
        id: File stem, e.g. "math-204"
        label: Display name, e.g. "Math 204"
        key: Parsed answer key
        source: File the key was read from
        subject: Worksheet subject, e.g. "Math (Calculator)" ("" if unknown)
    """
    id: str
    label: str
    key: AnswerKey
    source: Path
    subject: str = ""

    @property
    def total(self) -> int:
        return self.key.total

    @property
    def description(self) -> str:
        """Display text, e.g. "Math 204 - Math (Non-Calculator) (5 questions)"."""
        text = self.label
        if self.subject:
            text += f" - {self.subject}"
        return f"{text} ({self.total} questions)"


@dataclass(frozen=True)
class KeyBank:
    """Worksheet keys by id, iterated in id order."""

    entries: Tuple[KeyEntry, ...] = ()

    def __post_init__(self) -> None:
        ids = [entry.id for entry in self.entries]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate key ids in bank: {sorted(ids)}")
        object.__setattr__(self, "entries", tuple(sorted(self.entries, key=lambda e: e.id)))

    @property
    def _by_id(self) -> Dict[str, KeyEntry]:
        return {entry.id: entry for entry in self.entries}

    def get(self, key_id: str) -> KeyEntry:
        """
        Look up a key by id.

        Raises:
            KeyError: If no key has this id
        """
        try:
            return self._by_id[key_id]
        except KeyError:
            known = ", ".join(entry.id for entry in self.entries) or "none"
            raise KeyError(f"Unknown key id {key_id!r} (available: {known})") from None

    def __iter__(self) -> Iterator[KeyEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key_id: object) -> bool:
        return key_id in self._by_id


def load_key_entry(path: Path) -> KeyEntry:
    """Build a KeyEntry from one key text file."""
    fields, body = read_key_file(path)
    key = build_answer_key(body)
    if key.total == 0:
        logger.warning(f"Key file {path.name} has no questions")
    return KeyEntry(
        id=path.stem,
        label=fields.get("label") or key_label(path.stem),
        key=key,
        source=path,
        subject=fields.get("subject", ""),
    )


def load_key_bank(directory: Path) -> KeyBank:
    """
    Load every *.txt key file in a directory.

    Args:
        directory: Folder of key files named like "math-204.txt"

    Returns:
        KeyBank sorted by id

    Raises:
        FileNotFoundError: If directory does not exist
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Key directory not found: {directory}")

    entries = tuple(load_key_entry(path) for path in sorted(directory.glob(KEY_FILE_PATTERN)))
    logger.info(f"Loaded {len(entries)} answer key(s) from {directory}")
    return KeyBank(entries)
