"""
Command line entry point.

Usage:
    sat-autograder grade --key keys/math-204.txt student.pdf
    sat-autograder grade --key-id math-204 --key-dir keys student.txt --json out.json
    sat-autograder parse student.txt
    sat-autograder keys --key-dir keys --check
    sat-autograder report out.json --check
    sat-autograder selftest
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import fitz

from sat_autograder import __version__
from sat_autograder.config import AutograderSettings, load_settings
from sat_autograder.core.models.answer_key import AnswerKey
from sat_autograder.core.schemas.validator import ValidationError
from sat_autograder.core.utils.serialization import (
    deserialize_key,
    load_named_report_json,
    save_report_json,
    serialize_submission,
)
from sat_autograder.grading import (
    diagnose_key_text,
    grade_submission,
    parse_student_submission,
)
from sat_autograder.loading import (
    key_label,
    load_key_bank,
    load_key_entry,
    read_key_file,
    read_submission_files,
)
from sat_autograder.output import format_report, render_report_pdf
from sat_autograder.selftest import SelfTestError, run_self_tests

logger = logging.getLogger("sat_autograder.cli")

EXIT_OK = 0
EXIT_ERROR = 1


# ---------------------------------------------------------------------------
# Key resolution
# ---------------------------------------------------------------------------

def _load_key_file(path: Path) -> Tuple[AnswerKey, str]:
    """Key and label from a text key file, or from a JSON object written by serialize_key."""
    if path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Error parsing key file: {e}", path=str(path)) from e
        if not isinstance(data, dict):
            raise ValidationError("Key JSON must be an object of question -> letter", path=str(path))
        return deserialize_key(data), key_label(path.stem)
    entry = load_key_entry(path)
    return entry.key, entry.label


def _resolve_key(args: argparse.Namespace, settings: AutograderSettings) -> Tuple[AnswerKey, str]:
    if args.key is not None:
        key, label = _load_key_file(args.key)
        return key, args.name or label

    key_dir = args.key_dir or (Path(settings.key_dir) if settings.key_dir else None)
    if key_dir is None:
        raise ValidationError("--key-id needs --key-dir (or key_dir in settings)", path="key_dir")
    entry = load_key_bank(key_dir).get(args.key_id)
    return entry.key, args.name or entry.label


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_grade(args: argparse.Namespace, settings: AutograderSettings) -> int:
    key, key_name = _resolve_key(args, settings)
    if key.total == 0:
        logger.error("Selected key has no questions.")
        return EXIT_ERROR

    skip_missing = settings.skip_missing if args.skip_missing is None else args.skip_missing
    submission = parse_student_submission(read_submission_files(args.submissions))
    report = grade_submission(key, submission, skip_missing=skip_missing)

    print(format_report(report, key_name))

    if args.json is not None:
        save_report_json(report, args.json, key_name=key_name)
        logger.info(f"Saved JSON report to {args.json}")
    if args.pdf is not None:
        render_report_pdf(report, args.pdf, key_name)
    return EXIT_OK


def _cmd_parse(args: argparse.Namespace, settings: AutograderSettings) -> int:
    submission = parse_student_submission(read_submission_files(args.submissions))
    print(json.dumps(serialize_submission(submission), indent=2))
    return EXIT_OK


def _cmd_keys(args: argparse.Namespace, settings: AutograderSettings) -> int:
    key_dir = args.key_dir or (Path(settings.key_dir) if settings.key_dir else None)
    if key_dir is None:
        raise ValidationError("keys needs --key-dir (or key_dir in settings)", path="key_dir")

    bank = load_key_bank(key_dir)
    if not len(bank):
        print(f"No answer keys found in {key_dir}")
        return EXIT_OK

    for entry in bank:
        print(f"{entry.id:<24} {entry.description}")
        if args.check:
            _, body = read_key_file(entry.source)
            for issue in diagnose_key_text(body):
                print(f"    {issue.question}: {', '.join(issue.answers)} ({'; '.join(issue.reasons)})")
    return EXIT_OK


def _cmd_report(args: argparse.Namespace, settings: AutograderSettings) -> int:
    report, stored_name = load_named_report_json(args.report, strict=args.check)
    key_name = args.name or stored_name or args.report.stem

    print(format_report(report, key_name))
    if args.check:
        logger.info(f"{args.report} passed schema validation")
    if args.pdf is not None:
        render_report_pdf(report, args.pdf, key_name)
    return EXIT_OK


def _cmd_selftest(args: argparse.Namespace, settings: AutograderSettings) -> int:
    try:
        print(run_self_tests())
    except SelfTestError as e:
        print(f"Self-test failed: {e}")
        return EXIT_ERROR
    return EXIT_OK


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sat-autograder",
        description="Score multiple-choice worksheet answers against an answer key.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--settings", type=Path, help="Settings JSON (default: ~/.sat_autograder/settings.json)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    grade = sub.add_parser("grade", help="Grade submission files against a key")
    key_group = grade.add_mutually_exclusive_group(required=True)
    key_group.add_argument("--key", type=Path, help="Answer key file (.txt or .json)")
    key_group.add_argument("--key-id", help="Key id from the key directory, e.g. math-204")
    grade.add_argument("--key-dir", type=Path, help="Folder of *.txt answer keys")
    grade.add_argument("--name", help="Worksheet name for the report header")
    grade.add_argument("submissions", type=Path, nargs="+", help="Student .txt/.pdf files (joined in order)")
    missing_group = grade.add_mutually_exclusive_group()
    missing_group.add_argument("--skip-missing", dest="skip_missing", action="store_true", default=None,
                               help="Leave unanswered questions out of the denominator")
    missing_group.add_argument("--count-missing", dest="skip_missing", action="store_false",
                               help="Count unanswered questions in the denominator")
    grade.add_argument("--json", type=Path, help="Also write the report as JSON")
    grade.add_argument("--pdf", type=Path, help="Also write the report as PDF")
    grade.set_defaults(handler=_cmd_grade)

    parse = sub.add_parser("parse", help="Show parsed answers and manual review entries as JSON")
    parse.add_argument("submissions", type=Path, nargs="+", help="Student .txt/.pdf files")
    parse.set_defaults(handler=_cmd_parse)

    keys = sub.add_parser("keys", help="List answer keys in a folder")
    keys.add_argument("--key-dir", type=Path, help="Folder of *.txt answer keys")
    keys.add_argument("--check", action="store_true", help="Also list key entries that were skipped")
    keys.set_defaults(handler=_cmd_keys)

    report = sub.add_parser("report", help="Show a saved JSON grade report")
    report.add_argument("report", type=Path, help="Report written by grade --json")
    report.add_argument("--check", action="store_true", help="Validate against the report JSON schema")
    report.add_argument("--name", help="Worksheet name (default: name stored in the report)")
    report.add_argument("--pdf", type=Path, help="Also write the report as PDF")
    report.set_defaults(handler=_cmd_report)

    selftest = sub.add_parser("selftest", help="Run built-in parser and grader checks")
    selftest.set_defaults(handler=_cmd_selftest)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.settings)
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)

    try:
        return args.handler(args, settings)
    except ValidationError as e:
        details: List[str] = [str(e), *e.errors]
        logger.error("\n  ".join(details))
    except KeyError as e:
        logger.error(e.args[0] if e.args else str(e))
    except fitz.FileDataError as e:
        logger.error(f"Unable to read PDF: {e}")
    except OSError as e:
        logger.error(f"Unable to read file: {e}")
    return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
