import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest

# Add src to sys.path so we can import enem_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from enem_toolkit.loader.fetcher import SlotFetcher, SlotFetchError


def make_record(
    year: int,
    slot_id: str,
    *,
    correct: str = "A",
    canceled: bool = False,
    discipline: str = "ciencias-natureza",
) -> Dict[str, Any]:
    """Build a content-store record like the real details.json files."""
    number, _, language = slot_id.partition("-")
    return {
        "title": f"Questão {number} - ENEM {year}",
        "index": int(number),
        "year": year,
        "language": language or None,
        "discipline": discipline,
        "context": f"Texto da questão {slot_id}\n![](https://enem.dev/{year}/questions/{slot_id}/a1b2.png)",
        "files": [f"https://enem.dev/{year}/questions/{slot_id}/a1b2.png"],
        "correctAlternative": correct,
        "alternativesIntroduction": "Assinale a alternativa correta.",
        "alternatives": [
            {"letter": letter, "text": f"Alternativa {letter}", "file": None, "isCorrect": letter == correct}
            for letter in "ABCDE"
        ],
        "canceled": canceled,
    }


class FakeFetcher(SlotFetcher):
    """
    In-memory record source.

    Serves make_record() for every slot unless the slot id is listed in
    `failing`. A slot id in `gates` blocks until its event is set.
    """

    def __init__(
        self,
        *,
        failing: Optional[Set[Tuple[int, str]]] = None,
        fail_all: bool = False,
        gates: Optional[Dict[Tuple[int, str], threading.Event]] = None,
        overrides: Optional[Dict[Tuple[int, str], Any]] = None,
    ) -> None:
        self.failing = failing or set()
        self.fail_all = fail_all
        self.gates = gates or {}
        self.overrides = overrides or {}
        self.calls: List[Tuple[int, str]] = []
        self.reached: Dict[Tuple[int, str], threading.Event] = {
            key: threading.Event() for key in self.gates
        }
        self._lock = threading.Lock()

    def fetch(self, year: int, slot_id: str) -> Dict[str, Any]:
        key = (year, slot_id)
        with self._lock:
            self.calls.append(key)
        if key in self.gates:
            self.reached[key].set()
            self.gates[key].wait(timeout=10)
        if self.fail_all or key in self.failing:
            raise SlotFetchError(f"HTTP 404 for {slot_id}", slot_id, year)
        if key in self.overrides:
            return self.overrides[key]
        return make_record(year, slot_id)


@pytest.fixture
def record_factory():
    """Return the make_record() helper."""
    return make_record


@pytest.fixture
def fake_fetcher_cls():
    """Return the FakeFetcher class for tests that configure their own."""
    return FakeFetcher


@pytest.fixture
def fake_fetcher():
    """A fetcher that serves every slot successfully."""
    return FakeFetcher()
