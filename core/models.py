# core/models.py
"""
Data Models - students, payments and the settings singleton
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from core.formatting import parse_date, parse_datetime, to_decimal


class StudentStatus(str, Enum):
    """Derived payment standing of a student"""
    ACTIVE = "active"
    DUE_TODAY = "due_today"
    EXPIRED = "expired"

    @property
    def label(self) -> str:
        return {
            StudentStatus.ACTIVE: "Active",
            StudentStatus.DUE_TODAY: "Due Today",
            StudentStatus.EXPIRED: "Expired",
        }[self]


@dataclass(frozen=True)
class StatusResult:
    status: StudentStatus
    next_payment_date: date


def _mapping(row: Any) -> dict:
    return dict(getattr(row, "_mapping", row))


@dataclass
class Student:
    """Represents a row of the students table"""
    id: Optional[int]
    name: str
    place: str
    phone_number: str
    admission_date: date
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Any) -> "Student":
        r = _mapping(row)
        return cls(
            id=r["id"],
            name=r["name"] or "",
            place=r["place"] or "",
            phone_number=r["phone_number"] or "",
            admission_date=parse_date(r["admission_date"]),
            is_active=bool(r["is_active"]),
            created_at=parse_datetime(r.get("created_at")),
            updated_at=parse_datetime(r.get("updated_at")),
        )


@dataclass
class Payment:
    """Represents a row of the payments table. Never updated after insert."""
    id: Optional[int]
    student_id: int
    payment_date: date
    amount: Decimal
    next_payment_date: date
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Any) -> "Payment":
        r = _mapping(row)
        return cls(
            id=r["id"],
            student_id=r["student_id"],
            payment_date=parse_date(r["payment_date"]),
            amount=to_decimal(r["amount"]),
            next_payment_date=parse_date(r["next_payment_date"]),
            created_at=parse_datetime(r.get("created_at")),
        )


@dataclass
class Settings:
    """The single global settings record"""
    id: Optional[int]
    course_duration_days: int
    fee_amount: Decimal

    @classmethod
    def from_row(cls, row: Any) -> "Settings":
        r = _mapping(row)
        return cls(
            id=r["id"],
            course_duration_days=int(r["course_duration_days"]),
            fee_amount=to_decimal(r["fee_amount"]),
        )


DEFAULT_SETTINGS = Settings(id=None, course_duration_days=25, fee_amount=Decimal("1000.00"))
