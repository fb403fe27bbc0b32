"""
Module: controller

Purpose:
    Own one quiz session: the year/language selection, the exam being
    loaded, the user's answers and the last score. Every mutation goes
    through this controller under a single lock.

    Each load is tagged with a generation number. Changing the selection
    or starting another load bumps the generation, and snapshots from an
    older generation are dropped instead of overwriting newer state.

Key Classes:
    - QuizController: Session owner
    - StaleGenerationError: Snapshot from a superseded load

Dependencies:
    - loader: Exam loading pipeline
    - scoring: Submission scoring

Used By:
    - cli: Command-line quiz
"""

from __future__ import annotations

import logging
import threading
from typing import Generator, Iterator, Optional, Union

from enem_toolkit.common.exams import (
    Language,
    SelectionError,
    ensure_language_allowed,
    parse_language,
    requires_language,
)
from enem_toolkit.core.models import AnswerSelection, Exam, ExamSnapshot, ScoreResult
from enem_toolkit.loader import LoaderConfig, PreconditionError, SlotFetcher, is_complete, load_exam
from enem_toolkit.scoring import score

logger = logging.getLogger(__name__)


class StaleGenerationError(Exception):
    """Snapshot published by a load that has been superseded."""

    def __init__(self, generation: int, current: int):
        super().__init__(f"Load generation {generation} superseded by {current}")
        self.generation = generation
        self.current = current


class QuizController:
    """
    Single owner of the quiz session state.

    Example:
        >>> controller = QuizController(HttpSlotFetcher())
        >>> controller.select_year(2020)
        >>> controller.select_language("ingles")
        >>> for snapshot in controller.load():
        ...     print(snapshot.progress_label)
        >>> controller.select_answer(1, "C")
        >>> controller.submit().summary()
        'Você acertou 1 de 1'
    """

    def __init__(self, fetcher: SlotFetcher, config: Optional[LoaderConfig] = None) -> None:
        """
        Args:
            fetcher: Record source used by every load
            config: Loader configuration (defaults to LoaderConfig())
        """
        self.fetcher = fetcher
        self.config = config or LoaderConfig()
        self._lock = threading.Lock()

        self._year: Optional[int] = None
        self._language: Optional[Language] = None
        self._generation = 0
        self._exam: Optional[Exam] = None
        self._answers = AnswerSelection()
        self._result: Optional[ScoreResult] = None
        self._progress = 0
        self._loading = False
        self._done = False

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only state
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def year(self) -> Optional[int]:
        return self._year

    @property
    def language(self) -> Optional[Language]:
        return self._language

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def exam(self) -> Optional[Exam]:
        return self._exam

    @property
    def answers(self) -> AnswerSelection:
        return self._answers

    @property
    def result(self) -> Optional[ScoreResult]:
        return self._result

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_loaded(self) -> bool:
        """True once the final snapshot is in and the exam has every slot."""
        return (
            self._done
            and self._exam is not None
            and is_complete(self._exam, self.config.total_slots)
        )

    @property
    def can_load(self) -> bool:
        """
        Whether the selection allows a load to start.

        Years in the language-required range wait for a language; every
        other selected year loads immediately.
        """
        if self._year is None:
            return False
        if self._language is None and requires_language(
            self._year, self.config.language_required_through
        ):
            return False
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Selection
    # ─────────────────────────────────────────────────────────────────────────

    def select_year(self, year: Optional[int]) -> None:
        """
        Choose the exam year, clearing the language and all exam state.

        Args:
            year: Exam year, or None to clear the selection
        """
        with self._lock:
            self._year = year
            self._language = None
            self._reset_session()
        logger.debug(f"Selected year {year} (generation {self._generation})")

    def select_language(self, language: Union[Language, str, None]) -> None:
        """
        Choose the foreign language, clearing all exam state.

        Args:
            language: Language, its code, or None/"" to clear

        Raises:
            SelectionError: If no year is selected, the code is unknown, or
                the year has no language-variant questions
        """
        lang = language if isinstance(language, Language) else parse_language(language)
        with self._lock:
            if self._year is None:
                raise SelectionError("Select an exam year before a language")
            ensure_language_allowed(self._year, lang)
            self._language = lang
            self._reset_session()
        logger.debug(f"Selected language {lang} (generation {self._generation})")

    def _reset_session(self) -> None:
        """Discard exam, answers and score; supersede any running load. Caller holds the lock."""
        self._generation += 1
        self._exam = None
        self._answers = AnswerSelection()
        self._result = None
        self._progress = 0
        self._loading = False
        self._done = False

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def load(self) -> Iterator[ExamSnapshot]:
        """
        Start loading the selected exam.

        The returned iterator drives the load: each item is a snapshot that
        has already been applied to the controller. Iteration stops early
        if the selection changes or another load starts.

        Returns:
            Iterator of ExamSnapshot; empty if the selection cannot load yet
        """
        with self._lock:
            if not self.can_load:
                logger.info(
                    f"Load skipped: year={self._year}, language={self._language} "
                    "is not a loadable selection"
                )
                return iter(())
            self._reset_session()
            generation = self._generation
            year = self._year
            language = self._language
            self._exam = Exam.empty(year, language.value if language else None)
            self._loading = True

        try:
            snapshots = load_exam(
                self.fetcher,
                year,
                language,
                total_slots=self.config.total_slots,
                batch_size=self.config.batch_size,
                generation=generation,
            )
        except PreconditionError as e:
            logger.warning(f"Load rejected: {e}")
            with self._lock:
                if self._generation == generation:
                    self._exam = None
                    self._loading = False
            return iter(())
        return self._drive(snapshots, generation)

    def _drive(
        self,
        snapshots: Generator[ExamSnapshot, None, None],
        generation: int,
    ) -> Iterator[ExamSnapshot]:
        try:
            for snapshot in snapshots:
                try:
                    self._publish(snapshot)
                except StaleGenerationError as e:
                    logger.debug(f"Dropping snapshot at {snapshot.progress_label}: {e}")
                    return
                yield snapshot
        finally:
            snapshots.close()
            with self._lock:
                if self._generation == generation and not self._done:
                    self._loading = False

    def _publish(self, snapshot: ExamSnapshot) -> None:
        """
        Apply a snapshot to the session.

        Raises:
            StaleGenerationError: If the snapshot's load has been superseded
        """
        with self._lock:
            if snapshot.generation != self._generation:
                raise StaleGenerationError(snapshot.generation, self._generation)
            self._exam = snapshot.exam
            self._progress = snapshot.progress
            if snapshot.done:
                self._loading = False
                self._done = True

    # ─────────────────────────────────────────────────────────────────────────
    # Answers and submission
    # ─────────────────────────────────────────────────────────────────────────

    def select_answer(self, slot: int, letter: str) -> None:
        """
        Record the user's letter for a slot.

        Raises:
            SelectionError: If the slot is not loaded, is canceled, or does
                not offer the letter
        """
        with self._lock:
            if self._exam is None:
                raise SelectionError("No exam loaded")
            question = self._exam.get(slot)
            if question is None:
                raise SelectionError(f"Question {slot} is not loaded")
            self._answers = self._answers.choose(question, letter)

    def clear_answer(self, slot: int) -> None:
        with self._lock:
            self._answers = self._answers.clear(slot)

    def submit(self) -> ScoreResult:
        """
        Score the current answers.

        Returns:
            ScoreResult, also kept as `result` until the selection changes

        Raises:
            PreconditionError: If no exam has finished loading
        """
        with self._lock:
            if not self.is_loaded:
                raise PreconditionError("Exam has not finished loading")
            year = self._exam.year
            result = score(self._exam, self._answers)
            self._result = result
        logger.info(f"Submitted exam {year}: {result.summary()}")
        return result
