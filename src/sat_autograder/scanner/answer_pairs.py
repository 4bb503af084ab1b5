"""
Module: scanner.answer_pairs

Purpose:
    Scan loosely formatted text (typed answers, pasted sheets, text pulled
    out of a PDF) for question-number / answer-token pairs. The scan is a
    single regex pass with no state kept between calls.

Key Functions:
    - iter_answer_pairs(): Lazily yield ScannedPair candidates in text order
    - scan_answer_pairs(): Same, materialized as a list

Recognized markers:
    "1) b"   "2.D"   "(3) c"   "5- a"   "27.)C"   "32.c"   "6d"   "7 b"

    A question number (1-3 digits) followed by one or more of
    ``: . ) ] - – —`` (optionally padded with spaces), or by nothing /
    plain spaces when a lone letter follows. The answer token runs to the
    next marker or the end of the line.

Used By:
    - grading.key_builder: Scans key text
    - grading.reconciler: Scans student text
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterator, List, Optional

from sat_autograder.common.answers import BLANK_ANSWER, PLACEHOLDER_TOKENS
from sat_autograder.core.models.pairs import ScannedPair

from .config import ScannerConfig

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ScannerConfig()

LINE_BREAK = re.compile(r"[\r\n]")
LEADING_NOISE = re.compile(r"^[\s).:,\]\-–—]+")
TRAILING_PUNCTUATION = frozenset(").,;:-–—([]")


@lru_cache(maxsize=8)
def _marker_pattern(max_digits: int) -> re.Pattern[str]:
    """Build the marker regex for a given question-number width."""
    return re.compile(
        rf"""
        (?P<open>[(\[])?                            # "(3) c"
        (?<!\d)(?P<number>\d{{1,{max_digits}}})(?!\d)
        (?:
            [ \t]*(?P<sep>[:.)\]\-–—]+)[ \t]*       # "1) b", "27.)C", "5 - a"
          |
            (?P<loose>[ \t]*)(?=[A-Za-z](?![A-Za-z0-9]))   # "6d", "7 b"
        )
        """,
        re.VERBOSE,
    )


def _is_word_char_before(text: str, index: int) -> bool:
    return index > 0 and text[index - 1].isalnum()


def _iter_markers(text: str, pattern: re.Pattern[str]) -> Iterator[re.Match[str]]:
    """
    Yield accepted markers in text order.

    Markers without punctuation are only accepted when the number starts a
    word, so "abc6d" or "item3 a" never produce a pair.
    """
    for match in pattern.finditer(text):
        if match.group("sep") is None and _is_word_char_before(text, match.start()):
            logger.debug(f"Skipped mid-word marker {match.group(0)!r} at {match.start()}")
            continue
        yield match


def _strip_trailing_noise(token: str) -> str:
    """Drop trailing whitespace and separator punctuation in one backward pass."""
    end = len(token)
    while end and (token[end - 1].isspace() or token[end - 1] in TRAILING_PUNCTUATION):
        end -= 1
    return token[:end]


def _clean_token(segment: str) -> str:
    """First line of segment with separator noise trimmed from both ends."""
    token = LINE_BREAK.split(segment, maxsplit=1)[0]
    token = LEADING_NOISE.sub("", token)
    token = _strip_trailing_noise(token)
    return token.strip()


def _is_letter_token(token: str) -> bool:
    return (
        len(token) == 1
        and token.isascii()
        and token.isalpha()
        and token.upper() not in PLACEHOLDER_TOKENS
    )


def _pair_from_marker(text: str, marker: re.Match[str], end: int) -> Optional[ScannedPair]:
    question = int(marker.group("number"))
    if question < 1:
        logger.debug(f"Skipped question number 0 at {marker.start()}")
        return None

    token = _clean_token(text[marker.end():end])
    raw = (marker.group(0) + LINE_BREAK.split(text[marker.end():end], maxsplit=1)[0]).strip()

    if _is_letter_token(token):
        return ScannedPair(
            question=question,
            answer=token.upper(),
            raw=raw,
            needs_manual_review=False,
            offset=marker.start(),
        )
    return ScannedPair(
        question=question,
        answer=token or BLANK_ANSWER,
        raw=raw,
        needs_manual_review=True,
        offset=marker.start(),
    )


def iter_answer_pairs(
    text: Optional[str],
    config: Optional[ScannerConfig] = None,
) -> Iterator[ScannedPair]:
    """
    Lazily scan text for question/answer pairs.

    Never raises on string input: unmatched or malformed text simply yields
    fewer pairs. A token that is not a single letter (blank, "?", "X",
    "skip", "ab", ...) is still yielded, flagged needs_manual_review.

    Args:
        text: Text to scan. None is treated as empty.
        config: Scan limits. Defaults to ScannerConfig().

    Yields:
        ScannedPair in the order markers appear in the text

    Example:
        >>> [(p.question, p.answer) for p in iter_answer_pairs("1) b\\n2.D\\n6d")]
        [(1, 'B'), (2, 'D'), (6, 'D')]
    """
    config = config or _DEFAULT_CONFIG
    source = "" if text is None else str(text)
    if not source.strip():
        return

    if len(source) > config.max_input_chars:
        logger.warning(
            f"Input is {len(source)} characters; scanning only the first {config.max_input_chars}"
        )
        source = source[:config.max_input_chars]

    markers = _iter_markers(source, _marker_pattern(config.max_question_digits))
    current = next(markers, None)
    while current is not None:
        following = next(markers, None)
        end = following.start() if following is not None else len(source)
        pair = _pair_from_marker(source, current, end)
        if pair is not None:
            yield pair
        current = following


def scan_answer_pairs(
    text: Optional[str],
    config: Optional[ScannerConfig] = None,
) -> List[ScannedPair]:
    """
    Scan text and return every candidate pair in text order.

    See iter_answer_pairs() for the recognized formats.
    """
    pairs = list(iter_answer_pairs(text, config))
    logger.debug(
        f"Scanned {len(pairs)} pairs "
        f"({sum(p.needs_manual_review for p in pairs)} flagged for review)"
    )
    return pairs
