"""Find-or-create by natural key, shared by teams and conferences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar

from sqlalchemy.orm import Session

from ncaa_ingest.ingestion.identifiers import normalize_team_name

NATURAL_KEY_FIELDS = ("name", "sport", "division", "gender")

T = TypeVar("T")


@dataclass(frozen=True)
class Resolution:
    entity: Any
    created: bool


def natural_key(data: Mapping[str, Any]) -> dict[str, str]:
    return {field: data[field] for field in NATURAL_KEY_FIELDS}


def natural_slug(key: Mapping[str, str]) -> str:
    """Readable identifier for a natural key, e.g. basketball-d1-men-north-carolina."""

    return "-".join(
        [key["sport"], key["division"], key["gender"], normalize_team_name(key["name"])]
    )


def find_or_create(
    db: Session,
    model: type,
    key: Mapping[str, str],
    fields: Mapping[str, Any],
) -> Resolution:
    existing = db.query(model).filter_by(**key).one_or_none()
    if existing is not None:
        return Resolution(entity=existing, created=False)

    entity = model(**key, **fields)
    db.add(entity)
    db.flush()
    return Resolution(entity=entity, created=True)


def run_in_session(
    session_factory: Callable[[], Session],
    session: Optional[Session],
    work: Callable[[Session], T],
) -> T:
    """Run ``work`` in the caller's session, or in a fresh one that commits on success.

    Objects returned from a fresh session are detached with their loaded state
    intact, whatever ``expire_on_commit`` the factory was built with.
    """

    if session is not None:
        return work(session)
    with session_factory() as db:
        result = work(db)
        db.flush()
        db.expunge_all()
        db.commit()
        return result
