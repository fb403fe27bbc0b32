"""
Unit Tests for Question and Alternative Models

Tests construction invariants, the canceled placeholder and serialization.
"""

import pytest

from enem_toolkit.core.models import Alternative, AlternativeKind, Question


def _alternatives(letters="ABCDE"):
    return tuple(Alternative.from_text(letter, f"Opção {letter}") for letter in letters)


class TestAlternative:
    """Tests for Alternative dataclass."""

    def test_from_text_when_called_then_kind_is_text(self):
        alt = Alternative.from_text("A", "Resposta")
        assert alt.kind is AlternativeKind.TEXT
        assert alt.content == "Resposta"
        assert alt.file is None

    def test_from_file_when_called_then_kind_is_image(self):
        alt = Alternative.from_file("B", "https://enem.dev/2020/questions/1/x.png")
        assert alt.kind is AlternativeKind.IMAGE
        assert alt.content.endswith("x.png")
        assert alt.text is None

    def test_init_when_letter_outside_alphabet_then_raises_error(self):
        with pytest.raises(ValueError, match="letter must be one of"):
            Alternative.from_text("F", "Resposta")

    def test_init_when_text_and_file_both_set_then_raises_error(self):
        with pytest.raises(ValueError, match="needs text and no file"):
            Alternative(letter="A", kind=AlternativeKind.TEXT, text="x", file="y.png")

    def test_init_when_image_without_file_then_raises_error(self):
        with pytest.raises(ValueError, match="needs a file"):
            Alternative(letter="A", kind=AlternativeKind.IMAGE)

    def test_init_when_frozen_then_immutable(self):
        alt = Alternative.from_text("A", "Resposta")
        with pytest.raises(AttributeError):
            alt.letter = "B"  # type: ignore


class TestQuestion:
    """Tests for Question dataclass."""

    def test_init_when_valid_then_letters_follow_alternatives(self):
        q = Question(
            title="Questão 7 - ENEM 2020",
            slot=7,
            year=2020,
            correct_alternative="C",
            alternatives=_alternatives(),
        )
        assert q.letters == ("A", "B", "C", "D", "E")
        assert q.offers("C")
        assert not q.offers("F")

    @pytest.mark.parametrize("slot", [0, 181, -3])
    def test_init_when_slot_out_of_range_then_raises_error(self, slot):
        with pytest.raises(ValueError, match="slot must be 1-180"):
            Question(title="x", slot=slot, year=2020, correct_alternative="A", alternatives=_alternatives())

    def test_init_when_correct_letter_not_offered_then_raises_error(self):
        with pytest.raises(ValueError, match="is not offered"):
            Question(title="x", slot=1, year=2020, correct_alternative="E", alternatives=_alternatives("ABCD"))

    def test_init_when_duplicate_letters_then_raises_error(self):
        with pytest.raises(ValueError, match="Duplicate alternative letters"):
            Question(title="x", slot=1, year=2020, correct_alternative="A", alternatives=_alternatives("AAB"))

    def test_init_when_live_question_without_alternatives_then_raises_error(self):
        with pytest.raises(ValueError, match="no alternatives"):
            Question(title="x", slot=1, year=2020, correct_alternative="A")

    def test_letters_when_canceled_then_empty(self):
        q = Question(
            title="x", slot=1, year=2020, correct_alternative="", alternatives=_alternatives(), canceled=True
        )
        assert q.letters == ()
        assert not q.offers("A")

    def test_placeholder_when_called_then_canceled_with_failure_notice(self):
        q = Question.placeholder(42, 2019, language=None)
        assert q.canceled is True
        assert q.slot == 42
        assert q.year == 2019
        assert q.title == "Questão 42"
        assert q.context == "Erro ao carregar esta questão"
        assert q.alternatives == ()
        assert q.correct_alternative == ""
        assert q.discipline == ""

    def test_to_dict_when_round_tripped_then_equal(self):
        q = Question(
            title="Questão 3 - ENEM 2021",
            slot=3,
            year=2021,
            discipline="linguagens",
            language="ingles",
            context="Texto",
            files=("a.png",),
            correct_alternative="B",
            alternatives_introduction="Marque:",
            alternatives=(Alternative.from_text("A", "um"), Alternative.from_file("B", "b.png", is_correct=True)),
        )
        data = q.to_dict()
        assert data["index"] == 3
        assert data["correctAlternative"] == "B"
        assert Question.from_dict(data) == q

    def test_repr_when_canceled_then_mentions_state(self):
        assert "canceled" in repr(Question.placeholder(5, 2020))
