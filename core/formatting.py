# core/formatting.py
from __future__ import annotations

import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
CURRENCY_SYMBOL = "₹"

_CENTS = Decimal("0.01")


def add_days(start: datetime.date, days: int) -> datetime.date:
    """Calendar-day arithmetic, no time-of-day component."""
    return start + datetime.timedelta(days=int(days))


def next_payment_date(payment_date: datetime.date, course_duration_days: int) -> datetime.date:
    return add_days(payment_date, course_duration_days)


def parse_date(value: Any) -> datetime.date:
    """Parse a stored date (ISO text, date or datetime) into a date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if value is None or str(value).strip() == "":
        raise ValueError("Date value is required")
    # SQLite may hand back 'YYYY-MM-DD HH:MM:SS' for dates written by other tools
    return datetime.date.fromisoformat(str(value).strip()[:10])


def parse_datetime(value: Any) -> Optional[datetime.datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())
    return datetime.datetime.fromisoformat(str(value).strip())


def to_decimal(value: Any) -> Decimal:
    """Money values are kept as two-place Decimals."""
    if isinstance(value, Decimal):
        d = value
    else:
        d = Decimal(str(value))
    return d.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_date(value: Optional[datetime.date]) -> str:
    if value is None:
        return "-"
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_amount(value: Any) -> str:
    return f"{CURRENCY_SYMBOL}{to_decimal(value):,.2f}"
