import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import sat_autograder
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from sat_autograder.core.models.answer_key import AnswerKey


# Common test fixtures
@pytest.fixture
def five_question_key_text():
    """Key text for questions 1-5 (A-E)."""
    return "\n1. A\n2. B\n3. C\n4. D\n5. E\n"


@pytest.fixture
def five_question_key():
    """AnswerKey for questions 1-5 (A-E)."""
    return AnswerKey({1: "A", 2: "B", 3: "C", 4: "D", 5: "E"})


@pytest.fixture
def key_dir(tmp_path: Path):
    """Folder with two worksheet key files."""
    directory = tmp_path / "keys"
    directory.mkdir()
    (directory / "math-204.txt").write_text("1. A\n2. B\n3. C\n4. D\n5. E\n", encoding="utf-8")
    (directory / "english-101.txt").write_text("1) C\n2) C\n3) A\n", encoding="utf-8")
    return directory
