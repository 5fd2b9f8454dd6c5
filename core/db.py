# core/db.py
"""
Database Connection Utilities
"""
from __future__ import annotations

import logging
from typing import Dict

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

_ENGINES: Dict[str, Engine] = {}


def get_engine(url: str) -> Engine:
    """Get (or create) the engine for a database URL. One engine per URL per process."""
    if url not in _ENGINES:
        kwargs = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            # Streamlit runs each session on its own thread
            kwargs["connect_args"] = {"check_same_thread": False}
        _ENGINES[url] = create_engine(url, **kwargs)
        log.info("Engine created for %s", _ENGINES[url].url.render_as_string(hide_password=True))
    return _ENGINES[url]


def _enable_sqlite_fks(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


def init_db(engine: Engine) -> None:
    """Base engine setup. Safe to call more than once."""
    if engine.dialect.name != "sqlite":
        return
    if not event.contains(engine, "connect", _enable_sqlite_fks):
        event.listen(engine, "connect", _enable_sqlite_fks)
