"""
Unit Tests for the grading models.

Tests for AnswerKey, ManualReviewEntry, ReviewBook, StudentSubmission
and GradeReport.
"""

import pytest

from sat_autograder.common.answers import ReviewReason
from sat_autograder.core.models import (
    AnswerKey,
    GradeReport,
    IncorrectAnswer,
    ManualReviewEntry,
    ScannedPair,
    StudentSubmission,
)
from sat_autograder.core.models.manual_review import ReviewBook
from sat_autograder.core.models.report import format_percent


class TestAnswerKey:
    """Tests for AnswerKey."""

    def test_create_when_unordered_then_iterates_ascending(self):
        key = AnswerKey({3: "C", 1: "A", 2: "B"})

        assert list(key) == [1, 2, 3]
        assert key.questions == (1, 2, 3)
        assert key[2] == "B"
        assert key.total == 3

    @pytest.mark.parametrize(
        "answers",
        [{0: "A"}, {-1: "A"}, {True: "A"}, {"1": "A"}, {1: "F"}, {1: "a"}, {1: ["A"]}, {1: None}],
    )
    def test_create_when_invalid_entry_then_raises(self, answers):
        """Keys must map positive ints to upper-case A-E."""
        with pytest.raises(ValueError):
            AnswerKey(answers)

    def test_key_when_source_dict_changes_then_key_unchanged(self):
        """AnswerKey copies its input."""
        source = {1: "A"}
        key = AnswerKey(source)
        source[2] = "B"

        assert key.total == 1

    def test_key_when_assigning_item_then_raises(self):
        key = AnswerKey({1: "A"})
        with pytest.raises(TypeError):
            key.answers[1] = "B"

    def test_to_dict_when_called_then_string_keys(self):
        assert AnswerKey({2: "B", 1: "A"}).to_dict() == {"1": "A", "2": "B"}

    def test_from_dict_when_string_keys_then_int_questions(self):
        key = AnswerKey.from_dict({"10": "E", "2": "B"})
        assert dict(key) == {2: "B", 10: "E"}

    def test_from_dict_when_non_numeric_question_then_raises(self):
        with pytest.raises(ValueError, match="Invalid question number"):
            AnswerKey.from_dict({"one": "A"})

    def test_equality_when_same_entries_then_equal(self):
        assert AnswerKey({1: "A"}) == AnswerKey({1: "A"})
        assert AnswerKey({1: "A"}) == {1: "A"}


class TestScannedPair:
    """Tests for ScannedPair."""

    def test_create_when_question_zero_then_raises(self):
        with pytest.raises(ValueError, match="positive"):
            ScannedPair(0, "A")

    def test_create_when_empty_answer_then_raises(self):
        with pytest.raises(ValueError, match="empty"):
            ScannedPair(1, "")

    def test_is_letter_when_flagged_then_false(self):
        assert ScannedPair(1, "A").is_letter is True
        assert ScannedPair(1, "?", needs_manual_review=True).is_letter is False


class TestManualReviewEntry:
    """Tests for ManualReviewEntry."""

    def test_create_when_unsorted_duplicates_then_normalized(self):
        entry = ManualReviewEntry(4, ("C", "A", "C"), (ReviewReason.DUPLICATE, ReviewReason.DUPLICATE))

        assert entry.answers == ("A", "C")
        assert entry.reasons == (ReviewReason.DUPLICATE,)

    def test_create_when_no_reason_then_raises(self):
        with pytest.raises(ValueError, match="no reason"):
            ManualReviewEntry(1, ("A",), ())

    def test_dict_when_round_tripped_then_equal(self):
        entry = ManualReviewEntry(2, ("B", "Z"), (ReviewReason.OUT_OF_RANGE,))
        assert ManualReviewEntry.from_dict(entry.to_dict()) == entry


class TestReviewBook:
    """Tests for the ReviewBook accumulator."""

    def test_flag_when_unknown_reason_then_raises(self):
        with pytest.raises(ValueError, match="Unknown manual review reason"):
            ReviewBook().flag(1, "Looks odd", "A")

    def test_entries_when_added_out_of_order_then_sorted(self):
        book = ReviewBook()
        book.flag(9, ReviewReason.NON_STANDARD, "?")
        book.flag(2, ReviewReason.DUPLICATE, "A", "B")
        book.add(2, "C")

        entries = book.entries()

        assert [e.question for e in entries] == [2, 9]
        assert entries[0].answers == ("A", "B", "C")
        assert 9 in book and len(book) == 2

    def test_from_entries_when_rebuilt_then_same_entries(self):
        entries = (
            ManualReviewEntry(1, ("A", "B"), (ReviewReason.DUPLICATE,)),
            ManualReviewEntry(5, ("?",), (ReviewReason.NON_STANDARD,)),
        )
        assert ReviewBook.from_entries(entries).entries() == entries


class TestStudentSubmission:
    """Tests for StudentSubmission."""

    def test_create_when_question_in_both_buckets_then_raises(self):
        entry = ManualReviewEntry(1, ("B",), (ReviewReason.DUPLICATE,))
        with pytest.raises(ValueError, match="both answered"):
            StudentSubmission({1: "A"}, (entry,))

    def test_create_when_invalid_clean_letter_then_raises(self):
        with pytest.raises(ValueError, match="Invalid clean answer"):
            StudentSubmission({1: "G"}, ())

    def test_create_when_unhashable_clean_letter_then_value_error(self):
        with pytest.raises(ValueError, match="Invalid clean answer"):
            StudentSubmission({1: ["A"]}, ())

    def test_create_when_duplicate_review_entries_then_raises(self):
        entry = ManualReviewEntry(1, ("B",), (ReviewReason.NON_STANDARD,))
        with pytest.raises(ValueError, match="Duplicate manual review"):
            StudentSubmission({}, (entry, entry))

    def test_attempted_when_mixed_then_union_sorted(self):
        entry = ManualReviewEntry(2, ("?",), (ReviewReason.NON_STANDARD,))
        submission = StudentSubmission({5: "A", 1: "B"}, (entry,))

        assert submission.attempted_questions == (1, 2, 5)
        assert list(submission.answers) == [1, 5]

    def test_dict_when_round_tripped_then_equal(self):
        entry = ManualReviewEntry(2, ("?",), (ReviewReason.NON_STANDARD,))
        submission = StudentSubmission({1: "A"}, (entry,))

        assert StudentSubmission.from_dict(submission.to_dict()) == submission


class TestGradeReport:
    """Tests for GradeReport."""

    @pytest.fixture
    def report(self) -> GradeReport:
        return GradeReport(
            total=5,
            correct=2,
            incorrect=(IncorrectAnswer(2, "B", "C"),),
            missing=(3, 5),
            manual_review=(),
            denominator=3,
            percent=200 / 3,
            attempted_questions=(1, 2, 4),
            skip_missing=True,
        )

    def test_counts_when_calculated_then_match_lists(self, report):
        assert report.incorrect_count == 1
        assert report.missing_count == 2
        assert report.manual_review_count == 0

    def test_score_line_when_skip_missing_then_uses_denominator(self, report):
        assert report.score_line == "2 / 3 correct (66.7%) - missing skipped"

    def test_score_line_when_counting_missing_then_uses_total(self):
        report = GradeReport(5, 2, (), (3, 4, 5), (), 5, 40.0, (1, 2))
        assert report.score_line == "2 / 5 correct (40%)"

    def test_create_when_buckets_exceed_total_then_raises(self):
        with pytest.raises(ValueError, match="exceed total"):
            GradeReport(1, 1, (IncorrectAnswer(2, "B", "C"),), (), (), 1, 100.0, (1, 2))

    def test_create_when_negative_total_then_raises(self):
        with pytest.raises(ValueError, match="negative"):
            GradeReport(-1, 0, (), (), (), 0, 0.0, ())

    def test_dict_when_round_tripped_then_equal(self, report):
        assert GradeReport.from_dict(report.to_dict()) == report

    @pytest.mark.parametrize(
        "value, expected",
        [
            (66.666, "66.7"), (40.0, "40"), (0.0, "0"), (100.0, "100"), (12.34, "12.3"),
            (6.25, "6.3"), (0.25, "0.3"), (99.95, "100"),
        ],
    )
    def test_format_percent_when_value_then_one_decimal_max(self, value, expected):
        assert format_percent(value) == expected
