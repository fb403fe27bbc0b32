"""
Module: loader

Purpose:
    Exam loading pipeline: resolve each slot's identifier, fetch all slots
    in concurrent batches, substitute placeholders for failed slots and
    publish the growing exam after every batch.

Key Functions:
    - resolve_slot_id(): Slot identifier for (year, slot, language)
    - load_exam(): Lazy stream of ExamSnapshot
    - iter_batches(): Lazy stream of BatchOutcome
    - insert() / is_complete(): Exam folding

Key Classes:
    - LoaderConfig: Pipeline configuration
    - SlotFetcher / HttpSlotFetcher: Record sources
    - SlotFetchError, ParseError, PreconditionError: Error kinds

Used By:
    - controller: Session loading
    - cli: Command-line loading
"""

from .config import DEFAULT_BASE_URL, LoaderConfig
from .variants import is_variant_slot, resolve_slot_id
from .fetcher import HttpSlotFetcher, SlotFetcher, SlotFetchError
from .parser import ParseError, parse_question_payload
from .aggregator import insert, is_complete, missing_slots
from .scheduler import (
    BatchOutcome,
    PreconditionError,
    fetch_slot,
    iter_batches,
    load_exam,
    plan_batches,
)

__all__ = [
    # Config
    "DEFAULT_BASE_URL",
    "LoaderConfig",
    # Variants
    "is_variant_slot",
    "resolve_slot_id",
    # Fetching
    "HttpSlotFetcher",
    "SlotFetcher",
    "SlotFetchError",
    # Parsing
    "ParseError",
    "parse_question_payload",
    # Aggregation
    "insert",
    "is_complete",
    "missing_slots",
    # Scheduling
    "BatchOutcome",
    "PreconditionError",
    "fetch_slot",
    "iter_batches",
    "load_exam",
    "plan_batches",
]
