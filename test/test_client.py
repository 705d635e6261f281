"""Tests for the Crossref HTTP client and source adapter."""

import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CrossrefQuery.core.options import Rows
from CrossrefQuery.core.request import CrossrefRequest
from CrossrefQuery.sources.crossref.client import CrossrefApiClient, CrossrefApiError
from CrossrefQuery.sources.crossref.source import CrossrefSource


def _response(payload, status_error: Exception | None = None) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


class TestCrossrefApiClient(unittest.TestCase):
    def setUp(self) -> None:
        self.client = CrossrefApiClient(base_url="https://api.crossref.org/", timeout=5)
        self.client._session = MagicMock()

    def test_fetch_requests_rendered_url(self) -> None:
        self.client._session.get.return_value = _response({"status": "ok", "message": {"items": []}})

        message = self.client.fetch(CrossrefRequest(topics=["graph"], result_control=Rows(2)))

        self.assertEqual(message, {"items": []})
        self.client._session.get.assert_called_once_with(
            "https://api.crossref.org/works?query=graph&rows=2",
            timeout=5,
        )

    def test_non_ok_status_raises(self) -> None:
        self.client._session.get.return_value = _response({"status": "failed", "message": []})
        with self.assertRaises(CrossrefApiError):
            self.client.fetch(CrossrefRequest())

    def test_malformed_envelope_raises(self) -> None:
        for payload in ([], {"status": "ok"}, {"status": "ok", "message": "x"}):
            with self.subTest(payload=payload):
                self.client._session.get.return_value = _response(payload)
                with self.assertRaises(CrossrefApiError):
                    self.client.fetch(CrossrefRequest())

    def test_http_error_propagates(self) -> None:
        self.client._session.get.return_value = _response({}, requests.HTTPError("404"))
        with self.assertRaises(requests.HTTPError):
            self.client.fetch(CrossrefRequest())

    def test_context_manager_closes_session(self) -> None:
        with self.client as client:
            self.assertIs(client, self.client)
        self.client._session.close.assert_called_once_with()


class TestHeaders(unittest.TestCase):
    def test_mailto_goes_into_user_agent(self) -> None:
        client = CrossrefApiClient(mailto="someone@example.org")
        try:
            self.assertIn("(mailto:someone@example.org)", client._session.headers["User-Agent"])
        finally:
            client.close()

    def test_no_mailto(self) -> None:
        client = CrossrefApiClient()
        try:
            self.assertNotIn("mailto", client._session.headers["User-Agent"])
            self.assertEqual(client._session.headers["Accept"], "application/json")
        finally:
            client.close()


class TestCrossrefSource(unittest.TestCase):
    def test_search_parses_message(self) -> None:
        client = MagicMock(spec=CrossrefApiClient)
        client.fetch.return_value = {
            "total-results": 1,
            "items": [{"DOI": "10.1/A", "title": ["T"], "issued": {"date-parts": [[2020]]}}],
        }
        source = CrossrefSource(client=client)

        page = source.search(CrossrefRequest())
        source.close()

        self.assertEqual(page.total_results, 1)
        self.assertEqual(page.items[0].doi, "10.1/a")
        client.close.assert_called_once_with()

    @patch("CrossrefQuery.sources.crossref.client.requests.Session")
    def test_client_owns_one_session(self, session_cls: MagicMock) -> None:
        CrossrefApiClient()
        session_cls.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
