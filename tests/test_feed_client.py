from __future__ import annotations

import unittest
from unittest.mock import patch

import requests

from ncaa_ingest.ingestion.feed_client import fetch_feed

FEED_URL = "https://feeds.example.test/ncaa/games.json"


class _FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FetchFeedTests(unittest.TestCase):
    def test_accepts_a_bare_array(self) -> None:
        records = [{"home_team": "Duke", "away_team": "UNC"}]

        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            return_value=_FakeResponse(200, records),
        ):
            payload = fetch_feed(FEED_URL)

        self.assertTrue(payload["ok"])
        self.assertEqual(records, payload["games"])

    def test_accepts_an_object_with_games(self) -> None:
        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            return_value=_FakeResponse(200, {"games": [{"gameId": "401"}]}),
        ):
            payload = fetch_feed(FEED_URL)

        self.assertEqual([{"gameId": "401"}], payload["games"])

    def test_retries_server_errors_then_succeeds(self) -> None:
        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            side_effect=[
                requests.ConnectionError("reset by peer"),
                _FakeResponse(503, None, text="unavailable"),
                _FakeResponse(200, []),
            ],
        ) as mock_get, patch("ncaa_ingest.ingestion.feed_client.time.sleep") as mock_sleep:
            payload = fetch_feed(FEED_URL, retries=3)

        self.assertTrue(payload["ok"])
        self.assertEqual(3, mock_get.call_count)
        self.assertEqual([0.5, 1.0], [c.args[0] for c in mock_sleep.call_args_list])

    def test_gives_up_after_retries(self) -> None:
        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            side_effect=requests.Timeout("read timed out"),
        ) as mock_get, patch("ncaa_ingest.ingestion.feed_client.time.sleep"):
            payload = fetch_feed(FEED_URL, retries=2)

        self.assertFalse(payload["ok"])
        self.assertEqual("Failed to fetch feed", payload["error"])
        self.assertEqual("read timed out", payload["details"])
        self.assertEqual(2, mock_get.call_count)

    def test_client_errors_are_not_retried(self) -> None:
        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            return_value=_FakeResponse(404, None, text="not found"),
        ) as mock_get:
            payload = fetch_feed(FEED_URL)

        self.assertFalse(payload["ok"])
        self.assertEqual(404, payload["status"])
        self.assertEqual("not found", payload["body"])
        self.assertEqual(1, mock_get.call_count)

    def test_invalid_json(self) -> None:
        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            return_value=_FakeResponse(200, ValueError("Expecting value")),
        ):
            payload = fetch_feed(FEED_URL)

        self.assertFalse(payload["ok"])
        self.assertEqual("Feed returned invalid JSON", payload["error"])

    def test_unexpected_payload_shape(self) -> None:
        with patch(
            "ncaa_ingest.ingestion.feed_client.requests.get",
            return_value=_FakeResponse(200, {"events": []}),
        ):
            payload = fetch_feed(FEED_URL)

        self.assertFalse(payload["ok"])
        self.assertIn("array of games", payload["error"])


if __name__ == "__main__":
    unittest.main()
