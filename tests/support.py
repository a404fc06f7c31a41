"""Shared helpers for store-backed tests."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ncaa_ingest import models  # noqa: F401
from ncaa_ingest.db import Base
from ncaa_ingest.ingestion.service import IngestionService
from ncaa_ingest.services.conferences import SqlConferencesService
from ncaa_ingest.services.games import SqlGamesService
from ncaa_ingest.services.teams import SqlTeamsService
from ncaa_ingest.transactions import TransactionManager


def make_engine() -> Engine:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


def make_session_factory(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or make_engine(), autoflush=False, expire_on_commit=False)


def build_service(session_factory, games=None, **options) -> IngestionService:
    return IngestionService(
        games=games or SqlGamesService(session_factory),
        teams=SqlTeamsService(session_factory),
        conferences=SqlConferencesService(session_factory),
        transactions=TransactionManager(session_factory),
        **options,
    )


def duke_unc(**overrides) -> dict:
    record = {
        "home_team": "Duke",
        "away_team": "UNC",
        "sport": "basketball",
        "division": "d1",
        "date": "2024-01-15",
    }
    record.update(overrides)
    return record
