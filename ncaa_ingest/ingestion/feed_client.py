"""HTTP client for pulling game records from an external NCAA feed."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

logger = logging.getLogger(__name__)
DEFAULT_TIMEOUT_SECONDS = 12
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_SECONDS = 0.5
DEFAULT_USER_AGENT = "ncaa-ingest/1.0"
MAX_BODY_SNIPPET = 300


def _extract_records(payload: Any) -> list | None:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        games = payload.get("games")
        if isinstance(games, list):
            return games
    return None


def fetch_feed(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    retries: int = DEFAULT_RETRIES,
) -> dict:
    """Fetch a feed of game records.

    The feed is either a JSON array or an object with a ``games`` array.
    Returns ``{"ok": True, "games": [...]}`` on success; on failure returns a
    controlled error dict instead of raising.
    """

    headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }

    last_error: str | None = None
    last_status: int | None = None
    for attempt in range(retries):
        try:
            response = requests.get(url, headers=headers, timeout=timeout)
        except (requests.ConnectionError, requests.Timeout) as exc:
            last_error = str(exc)
            logger.warning("Feed request failed attempt=%s url=%s error=%s", attempt + 1, url, exc)
        else:
            last_status = response.status_code
            if response.status_code >= 500:
                last_error = f"Feed returned status {response.status_code}"
                logger.warning("Feed server error status=%s url=%s", response.status_code, url)
            elif response.status_code != 200:
                body_snippet = response.text[:MAX_BODY_SNIPPET]
                logger.error("Feed non-200 status=%s body=%s", response.status_code, body_snippet)
                return {
                    "ok": False,
                    "error": "Feed returned non-200 response",
                    "status": response.status_code,
                    "body": body_snippet,
                    "url": url,
                }
            else:
                try:
                    payload = response.json()
                except ValueError as exc:
                    return {
                        "ok": False,
                        "error": "Feed returned invalid JSON",
                        "details": str(exc),
                        "url": url,
                    }
                records = _extract_records(payload)
                if records is None:
                    return {
                        "ok": False,
                        "error": "Feed payload must be an array of games or an object with 'games'",
                        "url": url,
                    }
                logger.info("Fetched %s game records from %s", len(records), url)
                return {"ok": True, "games": records, "url": url}

        if attempt < retries - 1:
            time.sleep(DEFAULT_BACKOFF_SECONDS * (2**attempt))

    return {
        "ok": False,
        "error": "Failed to fetch feed",
        "details": last_error,
        "status": last_status,
        "url": url,
    }
