"""
Module: common.exams

Purpose:
    Per-year exam policy: which years are on offer, which slot range of a
    year carries foreign-language variants, and whether a language must be
    chosen before the exam can be loaded.

Key Functions:
    - available_years(): Years offered for selection
    - variant_range(): Language-variant slot range for a year
    - requires_language(): Selection-gating rule
    - ensure_language_allowed(): Reject a language for a year without variants

Key Classes:
    - Language: Foreign-language codes used by the content store
    - SlotRange: Inclusive slot range

Used By:
    - loader.variants: Slot identifier resolution
    - controller: Selection gating
    - cli: Argument choices
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


FIRST_EXAM_YEAR = 2009
FIRST_LANGUAGE_YEAR = 2010

# Years up to and including this one always contain variant slots, so the
# loader waits for a language. Kept configurable as new exam years appear.
LANGUAGE_REQUIRED_THROUGH = 2023


class SelectionError(Exception):
    """Selection refused by the exam policy or by the question itself."""
    pass


class Language(str, Enum):
    """Foreign-language variant codes, as used in slot identifiers."""
    ENGLISH = "ingles"
    SPANISH = "espanhol"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Display name in the exam's language."""
        return _LANGUAGE_LABELS[self]


_LANGUAGE_LABELS = {
    Language.ENGLISH: "Inglês",
    Language.SPANISH: "Espanhol",
}


@dataclass(frozen=True)
class SlotRange:
    """
    Inclusive range of slot numbers.

    Attributes:
        start: First slot in the range
        end: Last slot in the range
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"SlotRange start must be <= end: {self.start} > {self.end}")

    def __contains__(self, slot: object) -> bool:
        return isinstance(slot, int) and self.start <= slot <= self.end


def available_years(current_year: Optional[int] = None) -> List[int]:
    """
    Return the exam years offered for selection, oldest first.

    Args:
        current_year: Last year to offer (defaults to the calendar year)

    Returns:
        List of years from FIRST_EXAM_YEAR through current_year

    Example:
        >>> available_years(2011)
        [2009, 2010, 2011]
    """
    if current_year is None:
        current_year = datetime.date.today().year
    return list(range(FIRST_EXAM_YEAR, current_year + 1))


def variant_range(year: int) -> Optional[SlotRange]:
    """
    Get the language-variant slot range for an exam year.

    - 2017 onwards: slots 1-5
    - 2010 to 2016: slots 91-95
    - before 2010: none

    Args:
        year: Exam year

    Returns:
        SlotRange, or None when the year has no variant slots
    """
    if year >= 2017:
        return SlotRange(1, 5)
    if year >= FIRST_LANGUAGE_YEAR:
        return SlotRange(91, 95)
    return None


def has_language_variants(year: int) -> bool:
    """True if a language can be chosen for this year."""
    return variant_range(year) is not None


def requires_language(year: int, required_through: int = LANGUAGE_REQUIRED_THROUGH) -> bool:
    """
    Check whether loading must wait for a language choice.

    Args:
        year: Exam year
        required_through: Last year for which a language is mandatory

    Returns:
        True for years in [FIRST_LANGUAGE_YEAR, required_through]
    """
    return FIRST_LANGUAGE_YEAR <= year <= required_through


def ensure_language_allowed(year: int, language: Optional[Language]) -> None:
    """
    Reject a language choice for a year that has no variant slots.

    Raises:
        SelectionError: If language is set and the year predates variants
    """
    if language is not None and not has_language_variants(year):
        raise SelectionError(
            f"Exam year {year} has no foreign-language questions; "
            f"cannot select {language.value!r}"
        )


def parse_language(value: Optional[str]) -> Optional[Language]:
    """
    Convert a raw selection value to a Language.

    Empty strings and "none" map to None.

    Raises:
        SelectionError: If value is not a known language code
    """
    if value is None:
        return None
    cleaned = value.strip().lower()
    if not cleaned or cleaned == "none":
        return None
    try:
        return Language(cleaned)
    except ValueError:
        known = ", ".join(lang.value for lang in Language)
        raise SelectionError(f"Unknown language {value!r} (expected one of: {known})")
