"""
Schema Validation Utilities

Validates question records against the bundled JSON Schema before they are
turned into Question objects.

Basic structural checks run first so the common failures (not an object,
missing keys) produce short messages; the full schema then catches type
errors anywhere in the record.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match
from jsonschema.protocols import Validator


QUESTION_SCHEMA_NAME = "question"

# Loaded lazily, one entry per schema name
_SCHEMAS: dict[str, dict] = {}
_VALIDATORS: dict[str, Validator] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _get_validator(name: str) -> Validator:
    if name not in _VALIDATORS:
        schema = _load_schema(name)
        validator_cls = jsonschema.validators.validator_for(schema)
        validator_cls.check_schema(schema)
        _VALIDATORS[name] = validator_cls(schema)
    return _VALIDATORS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_question_payload(data: Any) -> None:
    """
    Validate a question record against the question schema.

    Args:
        data: Decoded JSON record

    Raises:
        ValidationError: If data is not a valid question record
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Question record must be an object, got {type(data).__name__}"
        )

    required = ["title", "correctAlternative", "alternatives"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    validator = _get_validator(QUESTION_SCHEMA_NAME)
    errors = list(validator.iter_errors(data))
    if errors:
        first = best_match(errors)
        raise ValidationError(
            f"Schema validation failed: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )
