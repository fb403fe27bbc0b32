"""Exam policy shared across the toolkit."""

from __future__ import annotations

from .exams import (
    FIRST_EXAM_YEAR,
    FIRST_LANGUAGE_YEAR,
    LANGUAGE_REQUIRED_THROUGH,
    Language,
    SelectionError,
    SlotRange,
    available_years,
    ensure_language_allowed,
    has_language_variants,
    parse_language,
    requires_language,
    variant_range,
)

__all__ = [
    "FIRST_EXAM_YEAR",
    "FIRST_LANGUAGE_YEAR",
    "LANGUAGE_REQUIRED_THROUGH",
    "Language",
    "SelectionError",
    "SlotRange",
    "available_years",
    "ensure_language_allowed",
    "has_language_variants",
    "parse_language",
    "requires_language",
    "variant_range",
]
