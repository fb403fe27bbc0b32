"""
Unit Tests for Exam and ExamSnapshot
"""

import pytest

from enem_toolkit.core.models import Exam, ExamSnapshot, Question


def _placeholders(*slots, year=2020):
    return tuple(Question.placeholder(slot, year) for slot in slots)


class TestExam:
    """Tests for Exam aggregate."""

    def test_empty_when_created_then_has_no_questions(self):
        exam = Exam.empty(2020, "ingles")
        assert len(exam) == 0
        assert exam.slots == ()
        assert exam.language == "ingles"

    def test_init_when_duplicate_slots_then_raises_error(self):
        with pytest.raises(ValueError, match="Duplicate slots"):
            Exam(year=2020, questions=_placeholders(1, 1))

    def test_init_when_out_of_order_then_raises_error(self):
        with pytest.raises(ValueError, match="slot order"):
            Exam(year=2020, questions=_placeholders(2, 1))

    def test_get_when_slot_loaded_then_returns_question(self):
        exam = Exam(year=2020, questions=_placeholders(1, 2, 3))
        assert exam.get(2).slot == 2
        assert exam.get(4) is None

    def test_canceled_count_when_all_placeholders_then_counts_all(self):
        exam = Exam(year=2020, questions=_placeholders(1, 2, 3))
        assert exam.canceled_count == 3

    def test_iter_when_called_then_yields_slot_order(self):
        exam = Exam(year=2020, questions=_placeholders(4, 9, 12))
        assert [q.slot for q in exam] == [4, 9, 12]


class TestExamSnapshot:
    """Tests for ExamSnapshot."""

    def test_progress_label_when_called_then_formats_n_of_total(self):
        snapshot = ExamSnapshot(exam=Exam.empty(2020), progress=30, total_slots=180)
        assert snapshot.progress_label == "30 de 180"
        assert snapshot.done is False
