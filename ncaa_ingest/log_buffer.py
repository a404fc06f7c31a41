"""Recent ingestion log records kept in memory and served at /api/v1/logs.

Records logged with ``extra={"game_id": ...}`` are tagged so an operator can
follow one game through validation, resolution and insert.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

INGEST_LOGGERS = (
    "ncaa_ingest.main",
    "ncaa_ingest.ingestion.service",
    "ncaa_ingest.ingestion.feed_client",
    "ncaa_ingest.services.games",
    "ncaa_ingest.services.teams",
    "ncaa_ingest.services.conferences",
    "ncaa_ingest.transactions",
)
DEFAULT_CAPACITY = 200
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    logger: str
    message: str
    game_id: Optional[str] = None


def _level_threshold(level: Optional[str]) -> int:
    if not level:
        return logging.NOTSET
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.NOTSET


class IngestLogBuffer(logging.Handler):
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        super().__init__(level=logging.INFO)
        self._records: deque[tuple[int, LogEntry]] = deque(maxlen=capacity)
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                    TIMESTAMP_FORMAT
                ),
                level=record.levelname,
                logger=record.name,
                message=self.format(record),
                game_id=getattr(record, "game_id", None),
            )
        except Exception:
            self.handleError(record)
            return
        self._records.append((record.levelno, entry))

    def entries(
        self,
        limit: int = 100,
        level: Optional[str] = None,
        game_id: Optional[str] = None,
    ) -> list[dict]:
        """Newest first, at ``level`` or above and, if given, only for ``game_id``."""

        if limit <= 0:
            return []
        threshold = _level_threshold(level)
        selected = []
        for levelno, entry in reversed(list(self._records)):
            if levelno < threshold:
                continue
            if game_id is not None and entry.game_id != game_id:
                continue
            selected.append(asdict(entry))
            if len(selected) == limit:
                break
        return selected


_buffer: IngestLogBuffer | None = None


def get_log_buffer() -> IngestLogBuffer:
    global _buffer
    if _buffer is None:
        _buffer = IngestLogBuffer()
    return _buffer


def install_log_buffer() -> IngestLogBuffer:
    buffer = get_log_buffer()
    for name in INGEST_LOGGERS:
        lg = logging.getLogger(name)
        if buffer not in lg.handlers:
            lg.addHandler(buffer)
        if lg.level == logging.NOTSET or lg.level > logging.INFO:
            lg.setLevel(logging.INFO)
    return buffer
