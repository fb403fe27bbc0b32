"""
Module: loader.aggregator

Purpose:
    Fold per-slot outcomes into an Exam. Pure functions; each insert
    returns a new Exam keyed by slot, whatever order outcomes arrive in.

Key Functions:
    - insert(): Merge outcomes into an exam
    - is_complete(): Whether every slot 1..total_slots is present
    - missing_slots(): Slots not loaded yet

Used By:
    - loader.scheduler: Snapshot building
    - controller: Load completion checks
"""

from __future__ import annotations

from typing import Iterable, List

from enem_toolkit.core.models import Exam, Question


def insert(exam: Exam, outcomes: Iterable[Question]) -> Exam:
    """
    Merge outcomes into an exam.

    A later outcome for a slot already present replaces it; the scheduler
    never produces one, so this only matters for hand-built inputs.

    Args:
        exam: Current exam state
        outcomes: Questions (fetched or placeholders) to add

    Returns:
        New Exam with questions in slot order

    Example:
        >>> exam = insert(Exam.empty(2020), [q3, q1, q2])
        >>> exam.slots
        (1, 2, 3)
    """
    merged = dict(exam.by_slot)
    for question in outcomes:
        merged[question.slot] = question
    return Exam(
        year=exam.year,
        language=exam.language,
        questions=tuple(merged[slot] for slot in sorted(merged)),
    )


def missing_slots(exam: Exam, total_slots: int) -> List[int]:
    present = set(exam.slots)
    return [slot for slot in range(1, total_slots + 1) if slot not in present]


def is_complete(exam: Exam, total_slots: int) -> bool:
    """True if the exam holds exactly slots 1..total_slots."""
    return exam.slots == tuple(range(1, total_slots + 1))
