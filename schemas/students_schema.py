# schemas/students_schema.py
"""
Student Fee Tracking Schema
- Students (soft-deleted through is_active)
- Payments (append-only, next_payment_date stored at insert)
- Settings singleton (course duration, fee amount)
"""
from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy import text as sa_text
from core.schema_registry import register

logger = logging.getLogger(__name__)

DEFAULT_COURSE_DURATION_DAYS = 25
DEFAULT_FEE_AMOUNT = "1000.00"


@register("students")
def install_schema(engine: Engine) -> None:
    """
    Installs the students, payments and settings tables and seeds the
    settings row when the table is empty.
    """
    with engine.begin() as conn:
        # ════════════════════════════════════════════════════════════════════
        # 1. STUDENTS
        # ════════════════════════════════════════════════════════════════════
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS students (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                place TEXT NOT NULL,
                phone_number TEXT NOT NULL,
                admission_date TEXT NOT NULL,
                is_active INTEGER NOT NULL DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS idx_students_active ON students(is_active)"))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS idx_students_created ON students(created_at)"))

        # ════════════════════════════════════════════════════════════════════
        # 2. PAYMENTS
        # ════════════════════════════════════════════════════════════════════
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS payments (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                student_id INTEGER NOT NULL,
                payment_date TEXT NOT NULL,
                amount NUMERIC NOT NULL CHECK (amount > 0),
                next_payment_date TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (student_id) REFERENCES students(id)
            )
        """))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS idx_payments_student ON payments(student_id)"))
        conn.execute(sa_text("CREATE INDEX IF NOT EXISTS idx_payments_date ON payments(payment_date)"))

        # ════════════════════════════════════════════════════════════════════
        # 3. SETTINGS - single row
        # ════════════════════════════════════════════════════════════════════
        conn.execute(sa_text("""
            CREATE TABLE IF NOT EXISTS settings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                course_duration_days INTEGER NOT NULL CHECK (course_duration_days > 0),
                fee_amount NUMERIC NOT NULL CHECK (fee_amount >= 0),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))

        count = conn.execute(sa_text("SELECT COUNT(*) FROM settings")).scalar() or 0
        if not count:
            conn.execute(sa_text("""
                INSERT INTO settings (course_duration_days, fee_amount)
                VALUES (:days, :fee)
            """), {"days": DEFAULT_COURSE_DURATION_DAYS, "fee": DEFAULT_FEE_AMOUNT})
            logger.info("Seeded settings row (%s days, fee %s)",
                        DEFAULT_COURSE_DURATION_DAYS, DEFAULT_FEE_AMOUNT)

    logger.info("Student schema installed: students, payments, settings")
