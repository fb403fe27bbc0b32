"""
Command-line quiz runner.

Loads one exam year from the content store, printing progress as each
batch settles, then optionally scores an answers file against it.

Usage:
    enem-quiz 2020 --language ingles --answers answers.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from enem_toolkit import __version__
from enem_toolkit.common.exams import Language, SelectionError, available_years
from enem_toolkit.controller import QuizController
from enem_toolkit.loader import HttpSlotFetcher, LoaderConfig, PreconditionError

logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_PRECONDITION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enem-quiz",
        description="Load an ENEM exam year and score a set of answers locally.",
    )
    parser.add_argument("year", type=int, help=f"Exam year ({available_years()[0]} onwards)")
    parser.add_argument(
        "--language",
        choices=[lang.value for lang in Language],
        help="Foreign language for the language-variant questions",
    )
    parser.add_argument(
        "--answers",
        type=Path,
        help='JSON file mapping slot to letter, e.g. {"1": "A", "2": "C"}',
    )
    parser.add_argument("--base-url", help="Content store root (overrides ENEM_BASE_URL)")
    parser.add_argument("--batch-size", type=int, help="Slots fetched concurrently per batch")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_answers(path: Path) -> Dict[int, str]:
    """
    Read an answers file.

    Raises:
        ValueError: If the file is not a JSON object of slot -> letter
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    try:
        return {int(slot): str(letter).strip().upper() for slot, letter in data.items()}
    except ValueError as e:
        raise ValueError(f"{path} has a non-numeric slot: {e}") from e


def apply_answers(controller: QuizController, answers: Dict[int, str]) -> List[int]:
    """Apply answers, returning the slots that were refused."""
    refused = []
    for slot, letter in sorted(answers.items()):
        try:
            controller.select_answer(slot, letter)
        except SelectionError as e:
            logger.warning(f"Skipping answer for question {slot}: {e}")
            refused.append(slot)
    return refused


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        config = LoaderConfig.from_env(base_url=args.base_url, batch_size=args.batch_size)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_PRECONDITION

    answers: Dict[int, str] = {}
    if args.answers:
        try:
            answers = load_answers(args.answers)
        except (OSError, ValueError) as e:
            print(f"Cannot read answers: {e}", file=sys.stderr)
            return EXIT_PRECONDITION

    with HttpSlotFetcher(config.base_url, timeout=config.request_timeout) as fetcher:
        controller = QuizController(fetcher, config)
        try:
            controller.select_year(args.year)
            if args.language:
                controller.select_language(args.language)
        except SelectionError as e:
            print(str(e), file=sys.stderr)
            return EXIT_PRECONDITION

        if not controller.can_load:
            print(
                f"Exam {args.year} has foreign-language questions; choose one with --language",
                file=sys.stderr,
            )
            return EXIT_PRECONDITION

        for snapshot in controller.load():
            print(f"Carregando questões... {snapshot.progress_label}")

        exam = controller.exam
        print(f"ENEM {exam.year}: {len(exam)} questões, {exam.canceled_count} anuladas")
        if controller.language is not None:
            print(f"Língua Estrangeira: {controller.language.label}")

        if answers:
            refused = apply_answers(controller, answers)
            try:
                result = controller.submit()
            except PreconditionError as e:
                print(str(e), file=sys.stderr)
                return EXIT_PRECONDITION
            if refused:
                print(f"{len(refused)} respostas ignoradas")
            print(result.summary())

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
