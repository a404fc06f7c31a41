from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class EntitiesCreated(BaseModel):
    teams: int = 0
    conferences: int = 0


class IngestionResult(BaseModel):
    success: bool
    action: Literal["created", "skipped", "failed"]
    message: str
    game_id: Optional[str] = None
    entities_created: Optional[EntitiesCreated] = None
    reason: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def created(cls, game_id: str, teams: int, conferences: int) -> "IngestionResult":
        return cls(
            success=True,
            action="created",
            game_id=game_id,
            entities_created=EntitiesCreated(teams=teams, conferences=conferences),
            message="Game successfully ingested",
        )

    @classmethod
    def skipped(cls, game_id: str) -> "IngestionResult":
        return cls(
            success=True,
            action="skipped",
            game_id=game_id,
            reason="Game already exists",
            message="Game was already ingested previously",
        )

    @classmethod
    def failed(cls, error: str, game_id: Optional[str] = None) -> "IngestionResult":
        return cls(
            success=False,
            action="failed",
            game_id=game_id,
            error=error,
            message="Failed to ingest game",
        )


class BatchSummary(BaseModel):
    total: int
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    details: list[IngestionResult] = Field(default_factory=list)


class TeamOut(BaseModel):
    id: int
    team_id: str
    name: str
    conference: Optional[str]

    class Config:
        from_attributes = True


class GameOut(BaseModel):
    id: int
    game_id: str
    data_source: str
    date: date
    sport: str
    division: str
    gender: str
    status: str
    home_team: TeamOut
    away_team: TeamOut
    home_score: Optional[int]
    away_score: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
