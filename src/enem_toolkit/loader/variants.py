"""
Module: loader.variants

Purpose:
    Map a slot of an exam year to the identifier the content store files
    it under. Slots inside the year's language-variant range get the
    language code appended ("3-ingles"); every other slot is its number.

Key Functions:
    - resolve_slot_id(): Slot identifier for (year, slot, language)
    - is_variant_slot(): Whether a slot is language dependent

Used By:
    - loader.scheduler: Per-slot fetches
"""

from __future__ import annotations

from typing import Optional, Union

from enem_toolkit.common.exams import Language, variant_range


def is_variant_slot(year: int, slot: int) -> bool:
    """True if the slot falls in the year's language-variant range."""
    slots = variant_range(year)
    return slots is not None and slot in slots


def resolve_slot_id(year: int, slot: int, language: Optional[Union[Language, str]] = None) -> str:
    """
    Resolve the content-store identifier for one slot.

    Args:
        year: Exam year
        slot: Slot number
        language: Chosen language, or None/"" for none

    Returns:
        "{slot}-{language}" for variant slots with a language, else "{slot}"

    Example:
        >>> resolve_slot_id(2020, 3, Language.ENGLISH)
        '3-ingles'
        >>> resolve_slot_id(2020, 6, Language.ENGLISH)
        '6'
        >>> resolve_slot_id(2009, 3, "espanhol")
        '3'
    """
    code = language.value if isinstance(language, Language) else (language or "")
    if code and is_variant_slot(year, slot):
        return f"{slot}-{code}"
    return str(slot)
