# screens/settings/db.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Connection

from core.formatting import to_decimal
from core.models import Settings

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = ("course_duration_days", "fee_amount")


class SettingsNotFound(LookupError):
    """The settings table has no row."""


def _exec(conn: Connection, sql: str, params: Optional[Dict[str, Any]] = None):
    return conn.execute(sa_text(sql), params or {})


def get_settings(conn: Connection) -> Settings:
    row = _exec(conn, """
        SELECT id, course_duration_days, fee_amount
        FROM settings ORDER BY id LIMIT 1
    """).fetchone()
    if not row:
        raise SettingsNotFound("No settings row; run schema installation")
    return Settings.from_row(row)


def update_settings(conn: Connection, settings_id: int, fields: Dict[str, Any]) -> None:
    unknown = set(fields) - set(SETTINGS_FIELDS)
    if unknown:
        raise ValueError(f"Unknown settings fields: {sorted(unknown)}")

    params: Dict[str, Any] = {}
    if "course_duration_days" in fields:
        days = int(fields["course_duration_days"])
        if days <= 0:
            raise ValueError("Course duration must be a positive number of days")
        params["course_duration_days"] = days
    if "fee_amount" in fields:
        fee = to_decimal(fields["fee_amount"])
        if fee < 0:
            raise ValueError("Fee amount cannot be negative")
        params["fee_amount"] = str(fee)
    if not params:
        return

    set_clause = ", ".join(f"{c} = :{c}" for c in params)
    params["id"] = settings_id
    res = _exec(conn, f"""
        UPDATE settings SET {set_clause}, updated_at = CURRENT_TIMESTAMP
        WHERE id = :id
    """, params)
    if res.rowcount == 0:
        raise SettingsNotFound(f"Settings row {settings_id} not found")
    logger.info("Settings %s updated: %s", settings_id,
                {k: v for k, v in params.items() if k != "id"})
