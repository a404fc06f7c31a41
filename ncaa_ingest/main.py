from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ncaa_ingest.container import build_ingestion_service
from ncaa_ingest.db import Base, engine, get_db
from ncaa_ingest.errors import InputShapeError, ValidationError
from ncaa_ingest.ingestion.service import IngestionService
from ncaa_ingest.log_buffer import DEFAULT_CAPACITY, get_log_buffer, install_log_buffer
from ncaa_ingest.models import Game
from ncaa_ingest.schemas import GameOut
from ncaa_ingest.settings import load_settings

SERVICE_NAME = "ncaa-ingestion"
SERVICE_VERSION = "1.0.0"

app = FastAPI(title="NCAA Game Ingestion")
logger = logging.getLogger(__name__)
_settings = load_settings()
_ingestion_service: IngestionService | None = None


def get_ingestion_service() -> IngestionService:
    global _ingestion_service
    if _ingestion_service is None:
        _ingestion_service = build_ingestion_service(settings=_settings)
    return _ingestion_service


@app.on_event("startup")
async def startup() -> None:
    install_log_buffer()
    Base.metadata.create_all(bind=engine)
    get_ingestion_service()
    logger.info("NCAA ingestion service started data_source=%s", _settings.data_source)


@app.on_event("shutdown")
async def shutdown() -> None:
    if _ingestion_service is None:
        return
    rolled_back = _ingestion_service.transactions.force_rollback_all()
    if rolled_back:
        logger.warning("Rolled back %s open transaction(s) on shutdown", rolled_back)


@app.post("/api/v1/ncaa/ingest/game")
def ingest_game(
    payload: Any = Body(default=None),
    service: IngestionService = Depends(get_ingestion_service),
):
    if payload is None:
        raise HTTPException(status_code=400, detail="Request body is required")

    result = service.ingest_game(payload)
    if result.action == "created":
        status_code = 201
    elif result.action == "skipped":
        status_code = 200
    else:
        status_code = 400
    return JSONResponse(status_code=status_code, content=result.model_dump(exclude_none=True))


@app.post("/api/v1/ncaa/ingest/games")
def ingest_games(
    payload: Any = Body(default=None),
    service: IngestionService = Depends(get_ingestion_service),
):
    if not isinstance(payload, list):
        raise HTTPException(status_code=400, detail="Request body must be an array of game data")
    if not payload:
        raise HTTPException(status_code=400, detail="Games array cannot be empty")
    if len(payload) > _settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Batch size {len(payload)} exceeds maximum of {_settings.max_batch_size}"
            ),
        )

    try:
        summary = service.ingest_games(payload)
    except InputShapeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return summary.model_dump(exclude_none=True)


@app.post("/api/v1/ncaa/ingest/validate")
def validate_game(
    payload: Any = Body(default=None),
    service: IngestionService = Depends(get_ingestion_service),
):
    try:
        game_id = service.validate_game(payload)
    except ValidationError as exc:
        return JSONResponse(
            status_code=400,
            content={"valid": False, "error": str(exc), "field": exc.field},
        )
    return {"valid": True, "game_id": game_id}


@app.get("/api/v1/ncaa/ingest/health")
def ingestion_health(service: IngestionService = Depends(get_ingestion_service)):
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "active_transactions": service.transactions.get_active_transaction_count(),
    }


@app.get("/api/v1/games/{game_id}", response_model=GameOut)
def get_game(game_id: str, db: Session = Depends(get_db)):
    game = db.query(Game).filter(Game.game_id == game_id).one_or_none()
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return GameOut.model_validate(game)


@app.get("/api/v1/logs")
def api_logs(
    limit: int = Query(100, ge=1, le=DEFAULT_CAPACITY),
    level: str | None = None,
    game_id: str | None = None,
):
    entries = get_log_buffer().entries(limit=limit, level=level, game_id=game_id)
    return {"entries": entries}
