"""
Module: loader.scheduler

Purpose:
    Load every slot of an exam in fixed-size batches. Slots inside a batch
    are fetched concurrently on a thread pool; the batch is a join barrier,
    so batches complete strictly in ascending order and progress only ever
    grows. A slot that fails becomes a canceled placeholder and never
    disturbs its siblings or later batches.

Key Functions:
    - plan_batches(): Partition 1..total_slots into contiguous batches
    - fetch_slot(): Resolve, fetch and ingest one slot
    - iter_batches(): Lazy stream of BatchOutcome, one per batch
    - load_exam(): Lazy stream of ExamSnapshot, ending with done=True

Key Classes:
    - BatchOutcome: Settled results of one batch
    - PreconditionError: Load requested without a year

Dependencies:
    - concurrent.futures: Per-batch thread pool
    - loader.fetcher: SlotFetcher
    - loader.aggregator: Exam folding

Used By:
    - controller: Session loading
    - cli: Command-line loading
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generator, List, Optional, Tuple, Union

from enem_toolkit.common.exams import Language
from enem_toolkit.core.models import Exam, ExamSnapshot, MAX_SLOTS, Question

from . import aggregator
from .fetcher import SlotFetcher, SlotFetchError
from .parser import ParseError, parse_question_payload
from .variants import is_variant_slot, resolve_slot_id

logger = logging.getLogger(__name__)


DEFAULT_BATCH_SIZE = 10


class PreconditionError(Exception):
    """Load requested without a resolvable year/language selection."""
    pass


@dataclass(frozen=True)
class BatchOutcome:
    """
    Settled results of one batch (immutable).

    Attributes:
        start_slot: First slot of the batch
        questions: One Question per slot of the batch, in slot order
        progress: Highest slot attempted so far
        failed_slots: Slots replaced by placeholders in this batch
    """
    start_slot: int
    questions: tuple[Question, ...]
    progress: int
    failed_slots: tuple[int, ...] = ()


LanguageArg = Optional[Union[Language, str]]


def _language_code(language: LanguageArg) -> Optional[str]:
    if isinstance(language, Language):
        return language.value
    return language or None


def plan_batches(total_slots: int, batch_size: int) -> List[range]:
    """
    Partition slots 1..total_slots into contiguous batches.

    The last batch may be shorter than batch_size.

    Example:
        >>> plan_batches(25, 10)
        [range(1, 11), range(11, 21), range(21, 26)]
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive: {batch_size}")
    return [
        range(start, min(start + batch_size, total_slots + 1))
        for start in range(1, total_slots + 1, batch_size)
    ]


def fetch_slot(
    fetcher: SlotFetcher,
    year: int,
    slot: int,
    language: LanguageArg = None,
) -> Question:
    """
    Resolve, fetch and ingest one slot.

    Args:
        fetcher: Record source
        year: Exam year
        slot: Slot number
        language: Chosen language, if any

    Returns:
        Parsed Question, or a canceled placeholder if the slot failed
    """
    question, _ = _attempt_slot(fetcher, year, slot, _language_code(language))
    return question


def _attempt_slot(
    fetcher: SlotFetcher,
    year: int,
    slot: int,
    language: Optional[str],
) -> Tuple[Question, bool]:
    """Returns (question, failed)."""
    slot_id = resolve_slot_id(year, slot, language)
    try:
        record = fetcher.fetch(year, slot_id)
        return parse_question_payload(record, slot=slot, year=year), False
    except (SlotFetchError, ParseError) as e:
        logger.warning(f"Slot {slot} ({year}/{slot_id}) unavailable, using placeholder: {e}")
        return _placeholder(year, slot, language), True


def _placeholder(year: int, slot: int, language: Optional[str]) -> Question:
    return Question.placeholder(
        slot,
        year,
        language=language if is_variant_slot(year, slot) else None,
    )


def _settle(
    future: Future, year: int, slot: int, language: Optional[str]
) -> Tuple[Question, bool]:
    """Wait for one slot; any unexpected error still yields a placeholder."""
    try:
        return future.result()
    except Exception as e:
        logger.error(f"Slot {slot} ({year}) raised unexpectedly, using placeholder: {e!r}")
        return _placeholder(year, slot, language), True


def _check_preconditions(year: Optional[int], total_slots: int, batch_size: int) -> None:
    if year is None:
        raise PreconditionError("No exam year selected")
    if not (1 <= total_slots <= MAX_SLOTS):
        raise ValueError(f"total_slots must be 1-{MAX_SLOTS}: {total_slots}")
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive: {batch_size}")


def iter_batches(
    fetcher: SlotFetcher,
    year: Optional[int],
    language: LanguageArg = None,
    *,
    total_slots: int = MAX_SLOTS,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Generator[BatchOutcome, None, None]:
    """
    Fetch all slots batch by batch.

    Preconditions are checked immediately, before any fetch is issued;
    the fetching itself is lazy and advances one batch per item pulled.

    Args:
        fetcher: Record source
        year: Exam year (None is a caller error)
        language: Chosen language, if any
        total_slots: Number of slots to load
        batch_size: Slots fetched concurrently per batch

    Returns:
        Iterator of BatchOutcome in ascending slot order

    Raises:
        PreconditionError: If year is None
        ValueError: If total_slots or batch_size is out of range
    """
    _check_preconditions(year, total_slots, batch_size)
    return _run_batches(fetcher, year, _language_code(language), total_slots, batch_size)


def _run_batches(
    fetcher: SlotFetcher,
    year: int,
    language: Optional[str],
    total_slots: int,
    batch_size: int,
) -> Generator[BatchOutcome, None, None]:
    batches = plan_batches(total_slots, batch_size)
    workers = min(batch_size, total_slots)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="enem-slot") as pool:
        for batch in batches:
            start = time.perf_counter()
            futures = [
                (slot, pool.submit(_attempt_slot, fetcher, year, slot, language))
                for slot in batch
            ]
            # Join barrier: every slot of the batch settles before publication
            settled = [_settle(f, year, slot, language) for slot, f in futures]
            questions = tuple(question for question, _ in settled)
            failed = tuple(question.slot for question, is_failed in settled if is_failed)
            elapsed = time.perf_counter() - start

            logger.debug(
                f"Batch {batch.start}-{batch[-1]} of {year} settled in {elapsed:.2f}s "
                f"({len(failed)} canceled)"
            )
            yield BatchOutcome(
                start_slot=batch.start,
                questions=questions,
                progress=batch[-1],
                failed_slots=failed,
            )


def load_exam(
    fetcher: SlotFetcher,
    year: Optional[int],
    language: LanguageArg = None,
    *,
    total_slots: int = MAX_SLOTS,
    batch_size: int = DEFAULT_BATCH_SIZE,
    generation: int = 0,
) -> Generator[ExamSnapshot, None, None]:
    """
    Load an exam, publishing one snapshot per settled batch.

    Each snapshot carries everything loaded so far in slot order and the
    highest slot attempted. The last snapshot has progress == total_slots
    and done=True, and its exam holds exactly one Question per slot.
    Slot failures never end the load early.

    Args:
        fetcher: Record source
        year: Exam year (None is a caller error)
        language: Chosen language, if any
        total_slots: Number of slots to load
        batch_size: Slots fetched concurrently per batch
        generation: Tag copied onto every snapshot

    Returns:
        Lazy, finite, single-use iterator of ExamSnapshot

    Raises:
        PreconditionError: If year is None (raised before any fetch)

    Example:
        >>> for snapshot in load_exam(fetcher, 2020, Language.ENGLISH):
        ...     print(f"Carregando questões... {snapshot.progress_label}")
    """
    batches = iter_batches(
        fetcher, year, language, total_slots=total_slots, batch_size=batch_size
    )
    return _fold_snapshots(batches, year, _language_code(language), total_slots, generation)


def _fold_snapshots(
    batches: Generator[BatchOutcome, None, None],
    year: int,
    language: Optional[str],
    total_slots: int,
    generation: int,
) -> Generator[ExamSnapshot, None, None]:
    logger.info(f"Loading exam {year} (language={language or 'none'}, generation={generation})")
    start = time.perf_counter()
    exam = Exam.empty(year, language)
    failed = 0

    try:
        for outcome in batches:
            exam = aggregator.insert(exam, outcome.questions)
            failed += len(outcome.failed_slots)
            done = outcome.progress == total_slots
            if done:
                logger.info(
                    f"Loaded exam {year}: {len(exam)} slots, {failed} failed, "
                    f"{exam.canceled_count} canceled in {time.perf_counter() - start:.2f}s"
                )
            yield ExamSnapshot(
                exam=exam,
                progress=outcome.progress,
                total_slots=total_slots,
                done=done,
                generation=generation,
            )
    finally:
        # Stops the thread pool before another batch is issued
        batches.close()
