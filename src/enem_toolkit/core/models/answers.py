"""
Module: answers

Purpose:
    Provides AnswerSelection (the user's answer sheet) and ScoreResult
    (the outcome of a submission). Both are immutable; changing an answer
    produces a new selection.

Key Classes:
    - AnswerSelection: slot -> chosen letter
    - ScoreResult: per-slot correctness plus raw counts

Used By:
    - scoring.scorer: Scoring
    - controller: Session state
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from enem_toolkit.common.exams import SelectionError

from .questions import Question


@dataclass(frozen=True)
class AnswerSelection:
    """
    User's chosen letter per slot (immutable).

    Invariants:
        - at most one letter per slot
        - no entry for a canceled question
    """

    answers: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))

    def choose(self, question: Question, letter: str) -> AnswerSelection:
        """
        Record a letter for a question, replacing any earlier choice.

        Args:
            question: Question being answered
            letter: Chosen letter

        Returns:
            New AnswerSelection with the choice applied

        Raises:
            SelectionError: If the question is canceled or does not offer letter
        """
        if question.canceled:
            raise SelectionError(f"Question {question.slot} is canceled and cannot be answered")
        if not question.offers(letter):
            raise SelectionError(
                f"Question {question.slot} has no alternative {letter!r} "
                f"(offers: {', '.join(question.letters)})"
            )
        updated = dict(self.answers)
        updated[question.slot] = letter
        return AnswerSelection(updated)

    def clear(self, slot: int) -> AnswerSelection:
        updated = dict(self.answers)
        updated.pop(slot, None)
        return AnswerSelection(updated)

    def get(self, slot: int) -> Optional[str]:
        return self.answers.get(slot)

    def __contains__(self, slot: object) -> bool:
        return slot in self.answers

    def __len__(self) -> int:
        return len(self.answers)


@dataclass(frozen=True)
class ScoreResult:
    """
    Outcome of scoring one submission (immutable).

    Stores raw counts only; ratio is derived for display.

    Attributes:
        correctness: slot -> True if the chosen letter was correct
        correct: Number of correct answers
        attempted: Number of answered, non-canceled questions
    """

    correctness: Mapping[int, bool] = field(default_factory=dict)
    correct: int = 0
    attempted: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "correctness", MappingProxyType(dict(self.correctness)))
        if not (0 <= self.correct <= self.attempted):
            raise ValueError(f"Invalid counts: correct={self.correct}, attempted={self.attempted}")

    @property
    def ratio(self) -> Optional[float]:
        """Fraction correct, or None when nothing was attempted."""
        if self.attempted == 0:
            return None
        return self.correct / self.attempted

    def is_correct(self, slot: int) -> Optional[bool]:
        return self.correctness.get(slot)

    def summary(self) -> str:
        return f"Você acertou {self.correct} de {self.attempted}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreResult):
            return NotImplemented
        return (
            dict(self.correctness) == dict(other.correctness)
            and self.correct == other.correct
            and self.attempted == other.attempted
        )

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.correctness.items())), self.correct, self.attempted))
