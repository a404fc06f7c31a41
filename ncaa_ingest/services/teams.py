from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ncaa_ingest.errors import EntityResolutionError
from ncaa_ingest.models import Team
from ncaa_ingest.services.interfaces import TeamsService
from ncaa_ingest.services.resolution import (
    Resolution,
    find_or_create,
    natural_key,
    natural_slug,
    run_in_session,
)

logger = logging.getLogger(__name__)


class SqlTeamsService(TeamsService):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        default_level: str = "college",
    ) -> None:
        self._session_factory = session_factory
        self._default_level = default_level

    def find_or_create(
        self,
        team_data: Mapping[str, Any],
        session: Optional[Session] = None,
    ) -> Resolution:
        key = natural_key(team_data)
        fields = {
            "team_id": natural_slug(key),
            "level": team_data.get("level") or self._default_level,
            "conference": team_data.get("conference"),
        }

        try:
            resolution = run_in_session(
                self._session_factory,
                session,
                lambda db: find_or_create(db, Team, key, fields),
            )
        except SQLAlchemyError as exc:
            raise EntityResolutionError("team", key["name"], str(exc)) from exc

        if resolution.created:
            logger.info(
                "Created team name=%s sport=%s division=%s gender=%s",
                key["name"],
                key["sport"],
                key["division"],
                key["gender"],
            )
        return resolution
