"""CLI entrypoint for ingesting a batch of game records from a file or feed URL."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path

from ncaa_ingest.container import build_ingestion_service
from ncaa_ingest.db import Base, engine
from ncaa_ingest.ingestion.feed_client import fetch_feed
from ncaa_ingest.settings import load_settings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ingest NCAA game records idempotently.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--file",
        type=Path,
        help="Path to a JSON file holding an array of game records.",
    )
    source.add_argument(
        "--url",
        type=str,
        help="Feed URL returning a JSON array of game records.",
    )
    parser.add_argument(
        "--atomic",
        action="store_true",
        help="Resolve teams/conferences and create each game in one transaction.",
    )
    return parser.parse_args(argv)


def _load_file(path: Path) -> list:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Could not read {path}: {exc}") from exc
    if isinstance(payload, dict) and isinstance(payload.get("games"), list):
        return payload["games"]
    if not isinstance(payload, list):
        raise SystemExit(f"{path} must contain a JSON array of game records")
    return payload


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    args = _parse_args(argv)
    settings = load_settings()

    if args.file:
        records = _load_file(args.file)
    else:
        payload = fetch_feed(
            args.url,
            timeout=settings.feed_timeout_seconds,
            retries=settings.feed_retries,
        )
        if not payload.get("ok"):
            logging.error("Feed error: %s", payload.get("error"))
            details = payload.get("details")
            if details:
                logging.error("Details: %s", details)
            raise SystemExit(1)
        records = payload["games"]

    if args.atomic:
        settings = replace(settings, atomic_resolution=True)

    Base.metadata.create_all(bind=engine)
    service = build_ingestion_service(settings=settings)

    logging.info("Starting ingestion records=%s", len(records))
    try:
        summary = service.ingest_games(records)
    finally:
        service.transactions.force_rollback_all()
    logging.info(
        "Done: total=%s created=%s skipped=%s failed=%s",
        summary.total,
        summary.successful,
        summary.skipped,
        summary.failed,
    )
    for detail in summary.details:
        if detail.action == "failed":
            logging.warning("Failed record game_id=%s error=%s", detail.game_id, detail.error)


if __name__ == "__main__":
    main()
