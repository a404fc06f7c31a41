"""Idempotent ingestion of NCAA game records.

A record is validated, turned into a deterministic ``game_id`` and looked up
first; only when no game with that id exists are its teams and conferences
resolved and the game created. Re-submitting the same record is therefore
always safe and reports ``skipped``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from ncaa_ingest.errors import DuplicateGameError, InputShapeError, ValidationError
from ncaa_ingest.ingestion.identifiers import derive_identifier
from ncaa_ingest.ingestion.schema import GameRecord
from ncaa_ingest.ingestion.validator import GameRecordValidator
from ncaa_ingest.schemas import BatchSummary, IngestionResult
from ncaa_ingest.services.interfaces import ConferencesService, GamesService, TeamsService
from ncaa_ingest.transactions import TransactionManager

logger = logging.getLogger(__name__)


@dataclass
class ResolvedEntities:
    home_team_id: int
    away_team_id: int
    teams_created: int = 0
    conferences_created: int = 0


class IngestionService:
    def __init__(
        self,
        games: GamesService,
        teams: TeamsService,
        conferences: ConferencesService,
        transactions: TransactionManager,
        validator: Optional[GameRecordValidator] = None,
        *,
        data_source: str = "ncaa_official",
        default_level: str = "college",
        default_gender: str = "mixed",
        atomic_resolution: bool = False,
    ) -> None:
        self._games = games
        self._teams = teams
        self._conferences = conferences
        self._transactions = transactions
        self._validator = validator or GameRecordValidator()
        self._data_source = data_source
        self._default_level = default_level
        self._default_gender = default_gender
        self._atomic_resolution = atomic_resolution

    @property
    def transactions(self) -> TransactionManager:
        return self._transactions

    def validate_game(self, record: Any) -> str:
        """Validate without touching the store and return the game_id it would get."""

        return derive_identifier(self._validator.validate(record))

    def ingest_game(self, record: Any) -> IngestionResult:
        try:
            game_record = self._validator.validate(record)
        except ValidationError as exc:
            logger.warning("Rejected game record: %s", exc)
            return IngestionResult.failed(str(exc))

        game_id = derive_identifier(game_record)
        try:
            existing = self._games.get_by_identifier(game_id)
            if existing is not None:
                logger.info(
                    "Skipped existing game game_id=%s", game_id, extra={"game_id": game_id}
                )
                return IngestionResult.skipped(game_id)

            if self._atomic_resolution:
                entities = self._transactions.execute_in_transaction(
                    lambda session, _sequence: self._resolve_and_create(
                        game_record, game_id, session
                    )
                )
            else:
                entities = self._resolve_entities(game_record)
                self._transactions.execute_in_transaction(
                    lambda session, _sequence: self._games.create(
                        self._build_game_data(game_record, game_id, entities),
                        session=session,
                    )
                )
        except DuplicateGameError:
            logger.info(
                "Game created concurrently, treating as skipped game_id=%s",
                game_id,
                extra={"game_id": game_id},
            )
            return IngestionResult.skipped(game_id)
        except Exception as exc:
            logger.exception(
                "Failed ingesting game game_id=%s", game_id, extra={"game_id": game_id}
            )
            return IngestionResult.failed(str(exc), game_id=game_id)

        logger.info(
            "Inserted game game_id=%s teams_created=%s conferences_created=%s",
            game_id,
            entities.teams_created,
            entities.conferences_created,
            extra={"game_id": game_id},
        )
        return IngestionResult.created(
            game_id,
            teams=entities.teams_created,
            conferences=entities.conferences_created,
        )

    def ingest_games(self, records: Sequence[Any]) -> BatchSummary:
        """Ingest records one at a time; a failed record never affects the others."""

        if not isinstance(records, (list, tuple)):
            raise InputShapeError("Input must be an array of game data")

        summary = BatchSummary(total=len(records))
        for record in records:
            result = self.ingest_game(record)
            summary.details.append(result)
            if result.action == "created":
                summary.successful += 1
            elif result.action == "skipped":
                summary.skipped += 1
            else:
                summary.failed += 1

        logger.info(
            "Batch done: total=%s successful=%s skipped=%s failed=%s",
            summary.total,
            summary.successful,
            summary.skipped,
            summary.failed,
        )
        return summary

    def _resolve_and_create(
        self,
        record: GameRecord,
        game_id: str,
        session: Session,
    ) -> ResolvedEntities:
        entities = self._resolve_entities(record, session=session)
        self._games.create(
            self._build_game_data(record, game_id, entities),
            session=session,
        )
        return entities

    def _resolve_entities(
        self,
        record: GameRecord,
        session: Optional[Session] = None,
    ) -> ResolvedEntities:
        gender = record.gender or self._default_gender

        home = self._teams.find_or_create(
            self._entity_data(record, record.home_team, gender, conference=record.home_conference),
            session=session,
        )
        away = self._teams.find_or_create(
            self._entity_data(record, record.away_team, gender, conference=record.away_conference),
            session=session,
        )
        entities = ResolvedEntities(
            home_team_id=home.entity.id,
            away_team_id=away.entity.id,
            teams_created=int(home.created) + int(away.created),
        )

        conference_names = []
        if record.home_conference:
            conference_names.append(record.home_conference)
        if record.away_conference and record.away_conference != record.home_conference:
            conference_names.append(record.away_conference)

        for name in conference_names:
            resolution = self._conferences.find_or_create(
                self._entity_data(record, name, gender),
                session=session,
            )
            if resolution.created:
                entities.conferences_created += 1

        return entities

    def _entity_data(
        self,
        record: GameRecord,
        name: str,
        gender: str,
        conference: Optional[str] = None,
    ) -> dict[str, Any]:
        data = {
            "name": name,
            "sport": record.sport,
            "division": record.division,
            "gender": gender,
            "level": self._default_level,
        }
        if conference:
            data["conference"] = conference
        return data

    def _build_game_data(
        self,
        record: GameRecord,
        game_id: str,
        entities: ResolvedEntities,
    ) -> dict[str, Any]:
        return {
            "game_id": game_id,
            "data_source": self._data_source,
            "date": record.game_date,
            "home_team_id": entities.home_team_id,
            "away_team_id": entities.away_team_id,
            "sport": record.sport,
            "division": record.division,
            "gender": record.gender or self._default_gender,
            "home_score": record.home_score,
            "away_score": record.away_score,
            "status": record.status or "scheduled",
        }
