"""
Module: questions

Purpose:
    Provides the Question dataclass - one exam question bound to its slot.
    Questions are immutable; a canceled question keeps its slot but its
    answer key and alternatives are never used.

Key Functions:
    - Question.placeholder(): Canceled stand-in for a slot that failed to load
    - Question.letters: Letters offered by the question
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .alternatives.Alternative

Used By:
    - core.models.exam.Exam
    - loader.parser: Payload ingestion
    - loader.scheduler: Placeholder substitution
    - scoring.scorer: Scoring
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .alternatives import Alternative


MAX_SLOTS = 180

PLACEHOLDER_TITLE = "Questão {slot}"
PLACEHOLDER_CONTEXT = "Erro ao carregar esta questão"


@dataclass(frozen=True)
class Question:
    """
    Exam question (immutable).

    Attributes:
        title: Question heading, e.g. "Questão 12 - ENEM 2020"
        slot: Fixed position 1..180 within the exam
        year: Exam year
        discipline: Subject tag like "linguagens"
        language: Language tag for variant slots, else None
        context: Raw passage text (may embed image references)
        files: Auxiliary file references
        correct_alternative: Letter of the correct choice ("" when canceled)
        alternatives_introduction: Optional lead-in for the choices
        alternatives: Ordered answer choices
        canceled: Annulled, or substituted after a load failure

    Invariants:
        - 1 <= slot <= MAX_SLOTS
        - letters are unique
        - a live question's correct_alternative is one of its letters
    """

    title: str
    slot: int
    year: int
    discipline: str = ""
    language: Optional[str] = None
    context: Optional[str] = None
    files: tuple[str, ...] = ()
    correct_alternative: str = ""
    alternatives_introduction: Optional[str] = None
    alternatives: tuple[Alternative, ...] = ()
    canceled: bool = False

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not (1 <= self.slot <= MAX_SLOTS):
            raise ValueError(f"slot must be 1-{MAX_SLOTS}: {self.slot}")

        letters = [alt.letter for alt in self.alternatives]
        if len(letters) != len(set(letters)):
            raise ValueError(f"Duplicate alternative letters in slot {self.slot}: {letters}")

        if not self.canceled:
            if not self.alternatives:
                raise ValueError(f"Question in slot {self.slot} has no alternatives")
            if self.correct_alternative not in letters:
                raise ValueError(
                    f"correct_alternative {self.correct_alternative!r} is not offered "
                    f"in slot {self.slot} (letters: {letters})"
                )

    @classmethod
    def placeholder(
        cls,
        slot: int,
        year: int,
        *,
        language: Optional[str] = None,
        discipline: str = "",
    ) -> Question:
        """
        Build the canceled stand-in for a slot whose record could not be loaded.

        Args:
            slot: Slot number being replaced
            year: Exam year of the load
            language: Language of the load, if any
            discipline: Discipline tag, usually unknown

        Returns:
            Canceled Question with no alternatives and no answer key
        """
        return cls(
            title=PLACEHOLDER_TITLE.format(slot=slot),
            slot=slot,
            year=year,
            discipline=discipline,
            language=language,
            context=PLACEHOLDER_CONTEXT,
            correct_alternative="",
            alternatives=(),
            canceled=True,
        )

    @property
    def letters(self) -> tuple[str, ...]:
        """Letters a user may pick; empty for canceled questions."""
        if self.canceled:
            return ()
        return tuple(alt.letter for alt in self.alternatives)

    def offers(self, letter: str) -> bool:
        return letter in self.letters

    def to_dict(self) -> dict:
        """
        Serialize to the toolkit's own format (camelCase keys, alternatives
        tagged with their kind). Not readable as a content-store record;
        records go through loader.parser.

        Returns:
            Dict representation with camelCase keys
        """
        return {
            "title": self.title,
            "index": self.slot,
            "year": self.year,
            "language": self.language,
            "discipline": self.discipline,
            "context": self.context,
            "files": list(self.files),
            "correctAlternative": self.correct_alternative,
            "alternativesIntroduction": self.alternatives_introduction,
            "alternatives": [alt.to_dict() for alt in self.alternatives],
            "canceled": self.canceled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """Deserialize from to_dict() output."""
        return cls(
            title=data["title"],
            slot=data["index"],
            year=data["year"],
            discipline=data.get("discipline", ""),
            language=data.get("language"),
            context=data.get("context"),
            files=tuple(data.get("files") or ()),
            correct_alternative=data.get("correctAlternative", ""),
            alternatives_introduction=data.get("alternativesIntroduction"),
            alternatives=tuple(Alternative.from_dict(a) for a in data.get("alternatives", [])),
            canceled=bool(data.get("canceled", False)),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        state = "canceled" if self.canceled else f"answer={self.correct_alternative}"
        return f"Question(slot={self.slot}, year={self.year}, {state})"
