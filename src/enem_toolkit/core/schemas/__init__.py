"""JSON Schema validation for question records fetched from the content store."""

from .validator import QUESTION_SCHEMA_NAME, ValidationError, validate_question_payload

__all__ = [
    "QUESTION_SCHEMA_NAME",
    "ValidationError",
    "validate_question_payload",
]
