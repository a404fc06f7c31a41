from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class IngestionSettings:
    database_url: str
    data_source: str
    default_level: str
    default_gender: str
    max_batch_size: int
    atomic_resolution: bool
    feed_timeout_seconds: int
    feed_retries: int


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default
    if value < 1:
        logger.warning("%s must be >= 1, using default %s", name, default)
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def load_settings() -> IngestionSettings:
    return IngestionSettings(
        database_url=_env_str("DATABASE_URL", "sqlite:///./ncaa_ingest.db"),
        data_source=_env_str("NCAA_DEFAULT_DATA_SOURCE", "ncaa_official"),
        default_level=_env_str("NCAA_DEFAULT_LEVEL", "college"),
        default_gender=_env_str("NCAA_DEFAULT_GENDER", "mixed").lower(),
        max_batch_size=_env_int("NCAA_MAX_BATCH_SIZE", 100),
        atomic_resolution=_env_bool("NCAA_ATOMIC_RESOLUTION", False),
        feed_timeout_seconds=_env_int("NCAA_FEED_TIMEOUT_SECONDS", 12),
        feed_retries=_env_int("NCAA_FEED_RETRIES", 3),
    )
