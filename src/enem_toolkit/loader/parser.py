"""
Module: loader.parser

Purpose:
    Turn a decoded question record from the content store into a Question.
    The record's own index is ignored; the slot comes from the pipeline.

Key Functions:
    - parse_question_payload(): Record dict -> Question
    - parse_alternative(): Record alternative -> Alternative

Key Classes:
    - ParseError: Exception for unusable records

Dependencies:
    - core.models: Question, Alternative
    - core.schemas.validator: JSON Schema validation

Used By:
    - loader.scheduler: Slot ingestion
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from enem_toolkit.core.models import Alternative, Question
from enem_toolkit.core.schemas.validator import ValidationError, validate_question_payload

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error turning a question record into a Question."""
    pass


def parse_alternative(data: Dict[str, Any], *, canceled: bool = False) -> Optional[Alternative]:
    """
    Resolve one record alternative into a text or image Alternative.

    Text wins when both text and file are present. An alternative with
    neither is dropped for a canceled question.

    Args:
        data: Alternative record ({letter, text, file, isCorrect})
        canceled: Whether the parent question is canceled

    Returns:
        Alternative, or None when dropped

    Raises:
        ParseError: If a live question's alternative has no content
    """
    letter = data["letter"]
    is_correct = bool(data.get("isCorrect"))
    text = data.get("text")
    file = data.get("file")

    if text and text.strip():
        return Alternative.from_text(letter, text, is_correct=is_correct)
    if file and file.strip():
        return Alternative.from_file(letter, file, is_correct=is_correct)
    if canceled:
        return None
    raise ParseError(f"Alternative {letter} has neither text nor file")


def parse_question_payload(
    data: Any,
    *,
    slot: int,
    year: int,
) -> Question:
    """
    Validate a question record and build the Question for a slot.

    Args:
        data: Decoded JSON record
        slot: Slot the record was fetched for
        year: Exam year of the load, used when the record omits it

    Returns:
        Question bound to slot

    Raises:
        ParseError: If the record fails validation or breaks a model invariant

    Example:
        >>> q = parse_question_payload(record, slot=12, year=2020)
        >>> q.slot
        12
    """
    try:
        validate_question_payload(data)
    except ValidationError as e:
        raise ParseError(f"Invalid record for slot {slot}: {e}") from e

    canceled = bool(data.get("canceled"))

    alternatives = []
    for alt_data in data["alternatives"]:
        alternative = parse_alternative(alt_data, canceled=canceled)
        if alternative is not None:
            alternatives.append(alternative)

    record_year = data.get("year")
    if record_year is not None and record_year != year:
        logger.debug(f"Slot {slot}: record year {record_year} differs from requested {year}")

    try:
        return Question(
            title=data["title"],
            slot=slot,
            year=record_year if record_year is not None else year,
            discipline=data.get("discipline") or "",
            language=data.get("language") or None,
            context=data.get("context"),
            files=tuple(data.get("files") or ()),
            correct_alternative="" if canceled else data["correctAlternative"],
            alternatives_introduction=data.get("alternativesIntroduction"),
            alternatives=tuple(alternatives),
            canceled=canceled,
        )
    except ValueError as e:
        raise ParseError(f"Invalid record for slot {slot}: {e}") from e
