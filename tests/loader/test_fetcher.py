"""
Unit Tests for HttpSlotFetcher

The requests session is mocked; no network access.
"""

from unittest.mock import MagicMock

import pytest
import requests

from enem_toolkit.loader.fetcher import HttpSlotFetcher, SlotFetchError


def _response(status=200, content_type="application/json; charset=utf-8", body=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.headers = {"Content-Type": content_type} if content_type else {}
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    mock = MagicMock(spec=requests.Session)
    mock.headers = {}
    return mock


class TestHttpSlotFetcher:
    """Tests for HttpSlotFetcher."""

    def test_url_for_when_called_then_details_path(self, session):
        fetcher = HttpSlotFetcher("https://example.test/exams/", session=session)
        assert fetcher.url_for(2020, "1-ingles") == "https://example.test/exams/2020/questions/1-ingles/details.json"

    def test_fetch_when_ok_then_returns_record(self, session, record_factory):
        # Arrange
        record = record_factory(2020, "7")
        session.get.return_value = _response(body=record)
        fetcher = HttpSlotFetcher("https://example.test/exams", timeout=3, session=session)

        # Act
        result = fetcher.fetch(2020, "7")

        # Assert
        assert result == record
        session.get.assert_called_once_with(
            "https://example.test/exams/2020/questions/7/details.json", timeout=3
        )

    def test_init_when_session_given_then_user_agent_set(self, session):
        HttpSlotFetcher(session=session)
        assert session.headers["User-Agent"].startswith("enem-toolkit/")

    def test_init_when_real_session_then_default_user_agent_replaced(self):
        fetcher = HttpSlotFetcher()
        try:
            assert fetcher.session.headers["User-Agent"].startswith("enem-toolkit/")
        finally:
            fetcher.close()

    def test_init_when_injected_session_has_user_agent_then_overwritten(self):
        session = requests.Session()
        HttpSlotFetcher(session=session)
        assert session.headers["User-Agent"].startswith("enem-toolkit/")
        session.close()

    def test_fetch_when_not_found_then_raises_error(self, session):
        session.get.return_value = _response(status=404, content_type="text/html")
        fetcher = HttpSlotFetcher(session=session)
        with pytest.raises(SlotFetchError, match="HTTP 404") as exc_info:
            fetcher.fetch(2020, "7")
        assert exc_info.value.slot_id == "7"
        assert exc_info.value.year == 2020

    def test_fetch_when_html_fallback_page_then_raises_error(self, session):
        session.get.return_value = _response(content_type="text/html", text="<!doctype html><html>")
        fetcher = HttpSlotFetcher(session=session)
        with pytest.raises(SlotFetchError, match="not JSON"):
            fetcher.fetch(2020, "7")

    def test_fetch_when_content_type_missing_then_raises_error(self, session):
        session.get.return_value = _response(content_type=None)
        with pytest.raises(SlotFetchError, match="missing"):
            HttpSlotFetcher(session=session).fetch(2020, "7")

    def test_fetch_when_body_not_json_then_raises_error(self, session):
        session.get.return_value = _response(body=ValueError("Expecting value"))
        with pytest.raises(SlotFetchError, match="Invalid JSON"):
            HttpSlotFetcher(session=session).fetch(2020, "7")

    def test_fetch_when_transport_fails_then_raises_error(self, session):
        session.get.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(SlotFetchError, match="Request failed"):
            HttpSlotFetcher(session=session).fetch(2020, "7")

    def test_close_when_session_injected_then_left_open(self, session):
        with HttpSlotFetcher(session=session):
            pass
        session.close.assert_not_called()
