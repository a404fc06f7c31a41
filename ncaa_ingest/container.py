"""Composition root: builds the ingestion object graph once per process."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.orm import Session

from ncaa_ingest.ingestion.service import IngestionService
from ncaa_ingest.ingestion.validator import GameRecordValidator
from ncaa_ingest.services.conferences import SqlConferencesService
from ncaa_ingest.services.games import SqlGamesService
from ncaa_ingest.services.teams import SqlTeamsService
from ncaa_ingest.settings import IngestionSettings, load_settings
from ncaa_ingest.transactions import TransactionManager


def build_ingestion_service(
    session_factory: Optional[Callable[[], Session]] = None,
    settings: Optional[IngestionSettings] = None,
) -> IngestionService:
    if session_factory is None:
        from ncaa_ingest.db import SessionLocal

        session_factory = SessionLocal
    settings = settings or load_settings()

    return IngestionService(
        games=SqlGamesService(session_factory),
        teams=SqlTeamsService(session_factory, default_level=settings.default_level),
        conferences=SqlConferencesService(session_factory, default_level=settings.default_level),
        transactions=TransactionManager(session_factory),
        validator=GameRecordValidator(),
        data_source=settings.data_source,
        default_level=settings.default_level,
        default_gender=settings.default_gender,
        atomic_resolution=settings.atomic_resolution,
    )
