from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ncaa_ingest.errors import DuplicateGameError
from ncaa_ingest.models import Game
from ncaa_ingest.services.interfaces import GamesService
from ncaa_ingest.services.resolution import run_in_session

logger = logging.getLogger(__name__)

_GAME_ID_CONSTRAINT_MARKERS = ("uq_games_game_id", "games.game_id")


def _coerce_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _is_game_id_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return any(marker in message for marker in _GAME_ID_CONSTRAINT_MARKERS)


class SqlGamesService(GamesService):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_by_identifier(self, game_id: str, session: Optional[Session] = None) -> Optional[Game]:
        return run_in_session(
            self._session_factory,
            session,
            lambda db: db.query(Game).filter(Game.game_id == game_id).one_or_none(),
        )

    def create(self, game_data: Mapping[str, Any], session: Optional[Session] = None) -> Game:
        return run_in_session(
            self._session_factory,
            session,
            lambda db: self._insert_game(db, game_data),
        )

    def _insert_game(self, db: Session, game_data: Mapping[str, Any]) -> Game:
        game = Game(
            game_id=game_data["game_id"],
            data_source=game_data["data_source"],
            date=_coerce_date(game_data["date"]),
            home_team_id=game_data["home_team_id"],
            away_team_id=game_data["away_team_id"],
            sport=game_data["sport"],
            division=game_data["division"],
            gender=game_data["gender"],
            home_score=game_data.get("home_score"),
            away_score=game_data.get("away_score"),
            status=game_data.get("status") or "scheduled",
        )
        db.add(game)
        try:
            db.flush()
        except IntegrityError as exc:
            if _is_game_id_conflict(exc):
                raise DuplicateGameError(game.game_id) from exc
            raise
        logger.debug("Inserted game game_id=%s", game.game_id)
        return game
