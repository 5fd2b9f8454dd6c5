# core/settings.py
from __future__ import annotations

import logging.config
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class DBSettings:
    url: str = f"sqlite:///{BASE_DIR / 'students.db'}"


@dataclass(frozen=True)
class AppSettings:
    db: DBSettings = field(default_factory=DBSettings)
    # "local", "UTC" or an IANA zone name; decides which calendar day is "today"
    status_timezone: str = "local"
    log_level: str = "INFO"
    page_title: str = "Student Management"


def load_settings(env_file: Path | None = None) -> AppSettings:
    """Read configuration from the environment (and .env, if present)."""
    load_dotenv(env_file or BASE_DIR / ".env")
    db = DBSettings(url=os.getenv("DATABASE_URL") or DBSettings.url)
    return AppSettings(
        db=db,
        status_timezone=os.getenv("STATUS_TIMEZONE", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        page_title=os.getenv("PAGE_TITLE", "Student Management"),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {'format': '[{levelname}] {asctime} {name}: {message}', 'style': '{'},
        },
        'handlers': {
            'console': {'class': 'logging.StreamHandler', 'formatter': 'verbose'},
        },
        'root': {
            'handlers': ['console'],
            'level': level,
        },
    })
