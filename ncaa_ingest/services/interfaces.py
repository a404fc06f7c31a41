"""Collaborator contracts the ingestion pipeline depends on.

Each method takes an optional ``session``. When one is passed the call joins
that unit of work and never commits; without one the implementation runs in a
short-lived session of its own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from ncaa_ingest.models import Game
from ncaa_ingest.services.resolution import Resolution


class GamesService(ABC):
    @abstractmethod
    def get_by_identifier(self, game_id: str, session: Optional[Session] = None) -> Optional[Game]:
        """Return the stored game or None when no game has this identifier."""

    @abstractmethod
    def create(self, game_data: Mapping[str, Any], session: Optional[Session] = None) -> Game:
        """Persist a new game. Raises DuplicateGameError when the identifier is taken."""


class TeamsService(ABC):
    @abstractmethod
    def find_or_create(
        self,
        team_data: Mapping[str, Any],
        session: Optional[Session] = None,
    ) -> Resolution:
        ...


class ConferencesService(ABC):
    @abstractmethod
    def find_or_create(
        self,
        conference_data: Mapping[str, Any],
        session: Optional[Session] = None,
    ) -> Resolution:
        ...
