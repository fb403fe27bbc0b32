"""
Core Models Package

Immutable, validated data models shared by the loader, the scorer and the
controller. Every model is a frozen dataclass; any change produces a new
instance, so snapshots handed to a consumer never change underneath it.
"""

from .alternatives import ALTERNATIVE_LETTERS, Alternative, AlternativeKind
from .questions import MAX_SLOTS, Question
from .exam import Exam, ExamSnapshot
from .answers import AnswerSelection, ScoreResult

__all__ = [
    "ALTERNATIVE_LETTERS",
    "Alternative",
    "AlternativeKind",
    "MAX_SLOTS",
    "Question",
    "Exam",
    "ExamSnapshot",
    "AnswerSelection",
    "ScoreResult",
]
