"""
Module: exam

Purpose:
    Provides the Exam aggregate and the ExamSnapshot published while an
    exam is loading. An Exam is keyed by slot; insertion order carries no
    meaning and questions are always held in slot order.

Key Classes:
    - Exam: Year, language and slot-ordered questions
    - ExamSnapshot: Exam state plus load progress

Used By:
    - loader.aggregator: Folding outcomes into an Exam
    - loader.scheduler: Snapshot publication
    - controller: Session state
    - scoring.scorer: Scoring
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Iterator, Optional

from .questions import MAX_SLOTS, Question


@dataclass(frozen=True)
class Exam:
    """
    Exam aggregate (immutable).

    Attributes:
        year: Exam year
        language: Chosen language code, or None
        questions: Questions sorted by slot

    Invariants:
        - slots are unique and within 1..MAX_SLOTS
    """

    year: int
    language: Optional[str] = None
    questions: tuple[Question, ...] = ()

    def __post_init__(self) -> None:
        """Validate exam on construction."""
        slots = [q.slot for q in self.questions]
        if len(slots) != len(set(slots)):
            raise ValueError(f"Duplicate slots in exam {self.year}")
        if slots != sorted(slots):
            raise ValueError(f"Questions of exam {self.year} are not in slot order")
        if slots and not (1 <= slots[0] and slots[-1] <= MAX_SLOTS):
            raise ValueError(f"Slots must be within 1-{MAX_SLOTS}")

    @classmethod
    def empty(cls, year: int, language: Optional[str] = None) -> Exam:
        return cls(year=year, language=language)

    @cached_property
    def by_slot(self) -> Dict[int, Question]:
        return {q.slot: q for q in self.questions}

    @property
    def slots(self) -> tuple[int, ...]:
        return tuple(q.slot for q in self.questions)

    @property
    def canceled_count(self) -> int:
        return sum(1 for q in self.questions if q.canceled)

    def get(self, slot: int) -> Optional[Question]:
        """Question in a slot, or None if not loaded."""
        return self.by_slot.get(slot)

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)

    def __repr__(self) -> str:
        return (
            f"Exam(year={self.year}, language={self.language!r}, "
            f"questions={len(self.questions)}, canceled={self.canceled_count})"
        )


@dataclass(frozen=True)
class ExamSnapshot:
    """
    One published state of a loading exam.

    Attributes:
        exam: Everything loaded so far, in slot order
        progress: Highest slot attempted so far
        total_slots: Slots the load will attempt
        done: True on the final snapshot only
        generation: Load generation that produced the snapshot
    """

    exam: Exam
    progress: int
    total_slots: int
    done: bool = False
    generation: int = 0

    @property
    def progress_label(self) -> str:
        return f"{self.progress} de {self.total_slots}"
