"""
Process-wide settings.

Settings are read from the environment once at startup (see `api/main.py`)
and handed to handlers through `get_settings`. Nothing here is re-read per
request.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, time

from fastapi import Request

# Open-ended range bounds used when only one side of a range filter is given.
DATE_RANGE_MIN = date(1901, 12, 31)
DATE_RANGE_MAX = date(9999, 12, 31)
TIME_RANGE_MIN = time(0, 0, 0)
TIME_RANGE_MAX = time(23, 59, 59)

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5
    db_command_timeout: int = 30

    default_page: int = 1
    default_page_size: int = 10
    page_min: int = 1
    page_size_min: int = 5
    page_size_max: int = 10

    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ()


def load_settings() -> Settings:
    origins = _env_str("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        database_url=os.environ.get("DATABASE_URL", "").strip(),
        db_pool_min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        db_pool_max_size=_env_int("DB_POOL_MAX_SIZE", 5),
        db_command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
        default_page=_env_int("DEFAULT_PAGE", 1),
        default_page_size=_env_int("DEFAULT_PAGE_SIZE", 10),
        page_min=_env_int("PAGE_MIN", 1),
        page_size_min=_env_int("PAGE_SIZE_MIN", 5),
        page_size_max=_env_int("PAGE_SIZE_MAX", 10),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def get_settings(request: Request) -> Settings:
    """
    FastAPI dependency: the Settings instance built at startup.
    """
    return request.app.state.settings
