# screens/students/db.py
# Student and payment persistence. Every function takes a Connection;
# callers own the transaction (engine.begin() for writes).
from __future__ import annotations

import datetime
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import text as sa_text
from sqlalchemy.engine import Connection

from core.formatting import parse_date, to_decimal
from core.models import Payment, Student

logger = logging.getLogger(__name__)

STUDENT_FIELDS = ("name", "place", "phone_number", "admission_date")

# -----------------------------
# Low-level execution helpers
# -----------------------------

def _exec(conn: Connection, sql: str, params: Optional[Dict[str, Any]] = None):
    return conn.execute(sa_text(sql), params or {})


def _clean_student_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(fields) - set(STUDENT_FIELDS)
    if unknown:
        raise ValueError(f"Unknown student fields: {sorted(unknown)}")
    cleaned: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "admission_date":
            cleaned[key] = parse_date(value).isoformat()
        else:
            value = (value or "").strip()
            if not value:
                raise ValueError(f"{key} is required")
            cleaned[key] = value
    return cleaned


# -----------------------------
# Students
# -----------------------------

def list_students(conn: Connection) -> List[Student]:
    """All students, newest first. Inactive rows included; the page filters them."""
    rows = _exec(conn, """
        SELECT id, name, place, phone_number, admission_date, is_active, created_at, updated_at
        FROM students
        ORDER BY created_at DESC, id DESC
    """).fetchall()
    return [Student.from_row(r) for r in rows]


def get_student(conn: Connection, student_id: int) -> Optional[Student]:
    row = _exec(conn, """
        SELECT id, name, place, phone_number, admission_date, is_active, created_at, updated_at
        FROM students WHERE id = :id
    """, {"id": student_id}).fetchone()
    return Student.from_row(row) if row else None


def create_student(conn: Connection, fields: Dict[str, Any]) -> int:
    missing = [f for f in STUDENT_FIELDS if f not in fields]
    if missing:
        raise ValueError(f"Missing student fields: {missing}")
    data = _clean_student_fields(fields)
    res = _exec(conn, """
        INSERT INTO students (name, place, phone_number, admission_date, is_active)
        VALUES (:name, :place, :phone_number, :admission_date, 1)
    """, data)
    new_id = res.lastrowid
    logger.info("Created student %s (%s)", new_id, data["name"])
    return new_id


def update_student(conn: Connection, student_id: int, fields: Dict[str, Any]) -> None:
    data = _clean_student_fields(fields)
    if not data:
        return
    set_clause = ", ".join(f"{c} = :{c}" for c in data)
    data["id"] = student_id
    res = _exec(conn, f"""
        UPDATE students SET {set_clause}, updated_at = CURRENT_TIMESTAMP
        WHERE id = :id
    """, data)
    if res.rowcount == 0:
        raise LookupError(f"Student {student_id} not found")
    logger.info("Updated student %s: %s", student_id, sorted(k for k in data if k != "id"))


def deactivate_student(conn: Connection, student_id: int) -> None:
    """Soft delete. Payments are kept."""
    res = _exec(conn, """
        UPDATE students SET is_active = 0, updated_at = CURRENT_TIMESTAMP
        WHERE id = :id
    """, {"id": student_id})
    if res.rowcount == 0:
        raise LookupError(f"Student {student_id} not found")
    logger.info("Deactivated student %s", student_id)


# -----------------------------
# Payments
# -----------------------------

def list_payments(conn: Connection, student_id: Optional[int] = None) -> List[Payment]:
    """Payments, most recent payment date first."""
    query = """
        SELECT id, student_id, payment_date, amount, next_payment_date, created_at
        FROM payments
    """
    params: Dict[str, Any] = {}
    if student_id is not None:
        query += " WHERE student_id = :sid"
        params["sid"] = student_id
    query += " ORDER BY payment_date DESC, created_at DESC, id DESC"
    return [Payment.from_row(r) for r in _exec(conn, query, params).fetchall()]


def create_payment(
    conn: Connection,
    student_id: int,
    payment_date: datetime.date,
    amount: Any,
    next_payment_date: datetime.date,
) -> int:
    amount_dec: Decimal = to_decimal(amount)
    if amount_dec <= 0:
        raise ValueError("Payment amount must be positive")
    pay_date = parse_date(payment_date)
    next_date = parse_date(next_payment_date)
    if next_date < pay_date:
        raise ValueError("Next payment date cannot precede the payment date")

    student = _exec(conn, "SELECT is_active FROM students WHERE id = :id",
                    {"id": student_id}).fetchone()
    if not student:
        raise LookupError(f"Student {student_id} not found")
    if not student[0]:
        raise ValueError(f"Student {student_id} is inactive")

    res = _exec(conn, """
        INSERT INTO payments (student_id, payment_date, amount, next_payment_date)
        VALUES (:sid, :pd, :amt, :npd)
    """, {
        "sid": student_id,
        "pd": pay_date.isoformat(),
        "amt": str(amount_dec),
        "npd": next_date.isoformat(),
    })
    logger.info("Recorded payment %s for student %s: %s on %s (next %s)",
                res.lastrowid, student_id, amount_dec, pay_date, next_date)
    return res.lastrowid
