"""
Module: alternatives

Purpose:
    Provides the Alternative dataclass - one answer choice of a question.
    An alternative is either a text choice or an image choice; the kind is
    decided once when the record is ingested and never re-inspected.

Key Classes:
    - AlternativeKind: TEXT or IMAGE
    - Alternative: Lettered answer choice

Used By:
    - core.models.questions.Question
    - loader.parser: Payload ingestion
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


ALTERNATIVE_LETTERS = ("A", "B", "C", "D", "E")


class AlternativeKind(str, Enum):
    """How an alternative is displayed."""
    TEXT = "text"
    IMAGE = "image"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Alternative:
    """
    Lettered answer choice (immutable).

    Attributes:
        letter: One of ALTERNATIVE_LETTERS
        kind: TEXT or IMAGE
        text: Display text (TEXT alternatives only)
        file: Image reference (IMAGE alternatives only)
        is_correct: Store-provided correctness flag, informational only

    Invariants:
        - TEXT alternatives have text and no file
        - IMAGE alternatives have a file and no text
    """

    letter: str
    kind: AlternativeKind
    text: Optional[str] = None
    file: Optional[str] = None
    is_correct: bool = False

    def __post_init__(self) -> None:
        """Validate alternative on construction."""
        if self.letter not in ALTERNATIVE_LETTERS:
            raise ValueError(f"letter must be one of {ALTERNATIVE_LETTERS}: {self.letter!r}")
        if self.kind is AlternativeKind.TEXT:
            if not self.text or self.file is not None:
                raise ValueError(f"Text alternative {self.letter} needs text and no file")
        elif self.kind is AlternativeKind.IMAGE:
            if not self.file or self.text is not None:
                raise ValueError(f"Image alternative {self.letter} needs a file and no text")

    @classmethod
    def from_text(cls, letter: str, text: str, *, is_correct: bool = False) -> Alternative:
        return cls(letter=letter, kind=AlternativeKind.TEXT, text=text, is_correct=is_correct)

    @classmethod
    def from_file(cls, letter: str, file: str, *, is_correct: bool = False) -> Alternative:
        return cls(letter=letter, kind=AlternativeKind.IMAGE, file=file, is_correct=is_correct)

    @property
    def content(self) -> str:
        """Text or image reference, whichever this alternative carries."""
        return self.text if self.kind is AlternativeKind.TEXT else self.file  # type: ignore[return-value]

    def to_dict(self) -> dict:
        d = {
            "letter": self.letter,
            "kind": self.kind.value,
            "isCorrect": self.is_correct,
        }
        if self.kind is AlternativeKind.TEXT:
            d["text"] = self.text
        else:
            d["file"] = self.file
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Alternative:
        return cls(
            letter=data["letter"],
            kind=AlternativeKind(data["kind"]),
            text=data.get("text"),
            file=data.get("file"),
            is_correct=bool(data.get("isCorrect", False)),
        )
