"""Structural validation for incoming game records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ncaa_ingest.errors import ValidationError
from ncaa_ingest.ingestion.schema import GameRecord

_INT_ERROR_TYPES = {"int_type", "int_parsing", "int_from_float"}


def _describe(error: dict[str, Any]) -> tuple[str, str | None]:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else None
    kind = error.get("type")

    if kind == "missing":
        return f"{field} is required", field
    if kind == "value_error":
        ctx = error.get("ctx") or {}
        cause = ctx.get("error")
        return (str(cause) if cause is not None else error.get("msg", "")), field
    if kind == "string_type":
        return f"{field} must be a string", field
    if kind in _INT_ERROR_TYPES:
        return f"{field} must be a number", field
    if kind == "greater_than_equal":
        return f"{field} must be a non-negative number", field
    if field:
        return f"{field}: {error.get('msg', 'invalid value')}", field
    return error.get("msg", "invalid record"), None


class GameRecordValidator:
    def validate(self, record: Any) -> GameRecord:
        """Return the parsed record or raise ValidationError with the first problem found."""

        if isinstance(record, GameRecord):
            return record
        if record is None:
            raise ValidationError("NCAA game data is required")
        if not isinstance(record, Mapping):
            raise ValidationError("NCAA game data must be an object")

        try:
            return GameRecord.model_validate(dict(record))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            message, field = _describe(first)
            raise ValidationError(message, field=field, value=first.get("input")) from exc
