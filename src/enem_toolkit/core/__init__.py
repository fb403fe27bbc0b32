"""
ENEM Toolkit Core Package

Shared data models and the question payload schema. Models here are the
single source of truth for the loader, scorer and controller.
"""

from .models import (
    Alternative,
    AlternativeKind,
    AnswerSelection,
    Exam,
    ExamSnapshot,
    Question,
    ScoreResult,
)

__all__ = [
    "Alternative",
    "AlternativeKind",
    "AnswerSelection",
    "Exam",
    "ExamSnapshot",
    "Question",
    "ScoreResult",
]
