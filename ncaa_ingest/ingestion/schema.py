"""Input contract for NCAA game records."""

from __future__ import annotations

import re
from datetime import date as date_type
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

VALID_SPORTS = (
    "soccer", "football", "basketball", "baseball", "softball",
    "volleyball", "tennis", "golf", "swimming", "track",
    "cross-country", "lacrosse", "field-hockey", "ice-hockey",
    "wrestling", "gymnastics", "rowing", "sailing",
)
VALID_DIVISIONS = ("d1", "d2", "d3", "naia", "njcaa")
VALID_GENDERS = ("men", "women", "mixed", "coed")
VALID_STATUSES = (
    "scheduled", "live", "final", "postponed", "cancelled",
    "suspended", "delayed", "halftime", "quarter", "period",
)
DATE_FORMAT = "YYYY-MM-DD"
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _one_of(field: str, value: str, allowed: tuple[str, ...]) -> str:
    normalized = value.lower()
    if normalized not in allowed:
        raise ValueError(f"{field} must be one of: {', '.join(allowed)}")
    return normalized


class GameRecord(BaseModel):
    """
    A game as the external feed sends it, before any team or conference exists for it.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, str_strip_whitespace=True)

    # Required fields
    home_team: str
    away_team: str
    sport: str
    division: str
    date: str

    # Optional fields
    gender: Optional[str] = None
    home_conference: Optional[str] = None
    away_conference: Optional[str] = None
    external_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gameId", "external_id"),
    )
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    status: Optional[str] = None

    @field_validator("home_team", "away_team", "sport", "division", "date", mode="before")
    @classmethod
    def _require_value(cls, value: Any, info) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("sport")
    @classmethod
    def _check_sport(cls, value: str) -> str:
        return _one_of("sport", value, VALID_SPORTS)

    @field_validator("division")
    @classmethod
    def _check_division(cls, value: str) -> str:
        return _one_of("division", value, VALID_DIVISIONS)

    @field_validator("gender")
    @classmethod
    def _check_gender(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _one_of("gender", value, VALID_GENDERS)

    @field_validator("status")
    @classmethod
    def _check_status(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _one_of("status", value, VALID_STATUSES)

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        if not _DATE_PATTERN.fullmatch(value):
            raise ValueError(f"date must match the format: {DATE_FORMAT}")
        try:
            date_type.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"date must match the format: {DATE_FORMAT}") from exc
        return value

    @field_validator("home_conference", "away_conference")
    @classmethod
    def _blank_conference_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("external_id", mode="before")
    @classmethod
    def _stringify_external_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _check_distinct_teams(self) -> "GameRecord":
        if self.home_team.lower() == self.away_team.lower():
            raise ValueError("home_team and away_team must be different")
        return self

    @property
    def game_date(self) -> date_type:
        return date_type.fromisoformat(self.date)
