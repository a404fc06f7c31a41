"""Deterministic game identifiers used for idempotent ingestion."""

from __future__ import annotations

import re

from ncaa_ingest.ingestion.schema import GameRecord

GAME_ID_PREFIX = "ncaa"
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_team_name(name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one hyphen, trim hyphens.

    "Texas A&M" -> "texas-a-m", "  St. John's " -> "st-john-s".
    """

    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def compact_date(value: str) -> str:
    return value.replace("-", "")


def derive_identifier(record: GameRecord) -> str:
    if record.external_id:
        return f"{GAME_ID_PREFIX}-{record.external_id}"

    home = normalize_team_name(record.home_team)
    away = normalize_team_name(record.away_team)
    return (
        f"{GAME_ID_PREFIX}-{record.sport}-{record.division}-"
        f"{compact_date(record.date)}-{home}-vs-{away}"
    )
