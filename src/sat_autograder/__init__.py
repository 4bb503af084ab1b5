"""Top-level package for the SAT worksheet autograder.

Provides subpackages:
- sat_autograder.scanner – question/answer pair scanning of free text
- sat_autograder.grading – key building, student reconciliation, grading
- sat_autograder.output – plain text and PDF grade reports
- sat_autograder.loading – PDF/text submission loading and the key bank
- sat_autograder.cli – command line entry point
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text(encoding="utf-8")
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("sat-autograder")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()

from .grading import build_answer_key, parse_student_submission, grade_submission

__all__: list[str] = [
    "__version__",
    "build_answer_key",
    "parse_student_submission",
    "grade_submission",
]
