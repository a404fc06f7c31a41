"""Error types raised by the ingestion pipeline."""

from __future__ import annotations

from typing import Any


class IngestionError(RuntimeError):
    pass


class ValidationError(IngestionError):
    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class EntityResolutionError(IngestionError):
    """A team or conference could not be found or created."""

    def __init__(self, entity: str, name: str, message: str) -> None:
        super().__init__(f"Failed to resolve {entity} '{name}': {message}")
        self.entity = entity
        self.name = name


class DuplicateGameError(IngestionError):
    """The store already holds a game with this identifier."""

    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game already exists: {game_id}")
        self.game_id = game_id


class TransactionError(IngestionError):
    pass


class InputShapeError(IngestionError):
    pass
