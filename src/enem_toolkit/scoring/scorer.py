"""
Module: scoring.scorer

Purpose:
    Score an answer sheet against a loaded exam. Canceled questions are
    left out of both counts; unanswered questions count for nothing.

Key Functions:
    - score(): Exam + AnswerSelection -> ScoreResult

Used By:
    - controller: Submission
    - cli: Answer-file scoring
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Union

from enem_toolkit.core.models import AnswerSelection, Exam, ScoreResult

logger = logging.getLogger(__name__)


def score(exam: Exam, selections: Union[AnswerSelection, Mapping[int, str]]) -> ScoreResult:
    """
    Compute per-question correctness and the summary counts.

    For each non-canceled question with a selection, correctness is
    selected letter == correct_alternative. Selections for canceled or
    absent slots are ignored.

    Args:
        exam: Loaded exam
        selections: AnswerSelection or a plain slot -> letter mapping

    Returns:
        ScoreResult with the per-slot map and raw counts

    Example:
        >>> result = score(exam, {1: "A", 2: "C"})
        >>> result.summary()
        'Você acertou 1 de 2'
    """
    answers = selections.answers if isinstance(selections, AnswerSelection) else selections

    correctness: Dict[int, bool] = {}
    for question in exam:
        if question.canceled:
            continue
        chosen = answers.get(question.slot)
        if chosen is None:
            continue
        correctness[question.slot] = chosen == question.correct_alternative

    correct = sum(1 for ok in correctness.values() if ok)
    ignored = len(answers) - len(correctness)
    if ignored:
        logger.debug(f"Ignored {ignored} selections for canceled or missing slots")

    return ScoreResult(correctness=correctness, correct=correct, attempted=len(correctness))
