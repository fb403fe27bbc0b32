"""
Module: loader.fetcher

Purpose:
    Retrieve one question record per slot identifier. The pipeline only
    depends on the SlotFetcher interface; HttpSlotFetcher is the real
    transport against the static content store.

Key Classes:
    - SlotFetcher: Abstract "fetch one record, fail or succeed" interface
    - HttpSlotFetcher: requests-based implementation
    - SlotFetchError: The single failure kind surfaced to the pipeline

Dependencies:
    - requests: HTTP transport

Used By:
    - loader.scheduler: Per-slot fetches
    - controller: Session wiring
    - cli: Default transport
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from .config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)


USER_AGENT = "enem-toolkit/0.1 (+https://titenq-enem.vercel.app)"


class SlotFetchError(Exception):
    """Error fetching the record for one slot."""

    def __init__(self, message: str, slot_id: str = "", year: Optional[int] = None):
        super().__init__(message)
        self.slot_id = slot_id
        self.year = year


class SlotFetcher(ABC):
    """
    Source of question records.

    Implementations return the decoded record for a slot identifier or
    raise SlotFetchError. They do not know the numeric slot; the pipeline
    binds the record to its slot.
    """

    @abstractmethod
    def fetch(self, year: int, slot_id: str) -> Dict[str, Any]:
        """
        Fetch the record filed under slot_id for an exam year.

        Args:
            year: Exam year
            slot_id: Identifier from resolve_slot_id(), e.g. "3-ingles"

        Returns:
            Decoded question record

        Raises:
            SlotFetchError: On any transport or format failure
        """
        pass

    def close(self) -> None:
        """Release transport resources."""
        pass

    def __enter__(self) -> SlotFetcher:
        return self

    def __exit__(self, *args) -> None:
        self.close()


class HttpSlotFetcher(SlotFetcher):
    """
    Fetch records as `{base_url}/{year}/questions/{slot_id}/details.json`.

    A single requests.Session is shared by all worker threads of a batch.

    Example:
        >>> with HttpSlotFetcher() as fetcher:
        ...     record = fetcher.fetch(2020, "1-ingles")
        >>> record["correctAlternative"]
        'C'
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            base_url: Root of the content store
            timeout: Per-request timeout in seconds
            session: Session to use (a new one is created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def url_for(self, year: int, slot_id: str) -> str:
        return f"{self.base_url}/{year}/questions/{slot_id}/details.json"

    def fetch(self, year: int, slot_id: str) -> Dict[str, Any]:
        url = self.url_for(year, slot_id)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SlotFetchError(f"Request failed for {url}: {e}", slot_id, year) from e

        if response.status_code != 200:
            raise SlotFetchError(f"HTTP {response.status_code} for {url}", slot_id, year)

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            preview = response.text[:100]
            logger.debug(f"Non-JSON response for {url}: {preview!r}")
            raise SlotFetchError(
                f"Response for {url} is not JSON (Content-Type: {content_type or 'missing'})",
                slot_id,
                year,
            )

        try:
            return response.json()
        except ValueError as e:
            raise SlotFetchError(f"Invalid JSON body for {url}: {e}", slot_id, year) from e

    def close(self) -> None:
        if self._owns_session:
            self.session.close()
