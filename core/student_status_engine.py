# app/core/student_status_engine.py
"""
Student Status Engine

Derives a student's payment standing from:
- The latest recorded payment (and its stored next payment date)
- The admission date, when no payment was ever recorded
- The configured course duration

Statuses:
- active:    paid up, next payment date in the future
- due_today: next payment date is today
- expired:   next payment date has passed

Everything here is pure: no database access, "today" is always passed in.
"""
from __future__ import annotations

import datetime
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo

from core.formatting import add_days
from core.models import Payment, Settings, StatusResult, Student, StudentStatus

log = logging.getLogger(__name__)

DateLike = Union[datetime.date, datetime.datetime]


def today(tz: str = "local") -> datetime.date:
    """
    Resolve the calendar date used for status checks.

    tz is "local" (machine clock), "UTC", or an IANA zone name such as
    "Asia/Kolkata".
    """
    if not tz or tz.lower() == "local":
        return datetime.date.today()
    if tz.upper() == "UTC":
        return datetime.datetime.now(datetime.timezone.utc).date()
    return datetime.datetime.now(ZoneInfo(tz)).date()


def _as_date(value: DateLike) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def _payment_sort_key(p: Payment):
    # Same-day payments: the one recorded last wins
    created = p.created_at or datetime.datetime.min
    return (p.payment_date, created, p.id or 0)


def latest_payment(student_id: int, payments: Iterable[Payment]) -> Optional[Payment]:
    """Payment with the maximum payment_date for this student, or None."""
    own = [p for p in payments if p.student_id == student_id]
    if not own:
        return None
    return max(own, key=_payment_sort_key)


def compute_student_status(
    student: Student,
    payments: Iterable[Payment],
    settings: Settings,
    now: DateLike,
) -> StatusResult:
    """
    Compute status for a single student.

    `payments` may be the full payment list or only this student's payments.
    """
    today_ = _as_date(now)
    latest = latest_payment(student.id, payments)

    if latest is None:
        expected_expiry = add_days(student.admission_date, settings.course_duration_days)
        if today_ > expected_expiry:
            return StatusResult(StudentStatus.EXPIRED, expected_expiry)
        return StatusResult(StudentStatus.ACTIVE, expected_expiry)

    due = latest.next_payment_date
    if due < today_:
        return StatusResult(StudentStatus.EXPIRED, due)
    if due == today_:
        return StatusResult(StudentStatus.DUE_TODAY, due)
    return StatusResult(StudentStatus.ACTIVE, due)


class StudentStatusEngine:
    """Compute statuses for many students against one payment snapshot."""

    def __init__(self, payments: Iterable[Payment], settings: Settings, now: DateLike):
        self.settings = settings
        self.today = _as_date(now)
        self._by_student: Dict[int, List[Payment]] = defaultdict(list)
        for p in payments:
            self._by_student[p.student_id].append(p)

    def status_for(self, student: Student) -> StatusResult:
        return compute_student_status(
            student, self._by_student.get(student.id, []), self.settings, self.today
        )

    def compute_batch_status(self, students: Iterable[Student]) -> Dict[int, StatusResult]:
        """Status per student id."""
        return {s.id: self.status_for(s) for s in students}

    def summarize(self, students: Iterable[Student]) -> Dict[str, int]:
        """Returns summary counts keyed by status value, plus 'total'."""
        summary = {s.value: 0 for s in StudentStatus}
        total = 0
        for student in students:
            result = self.status_for(student)
            summary[result.status.value] += 1
            total += 1
        summary["total"] = total
        log.debug("Status summary for %s: %s", self.today, summary)
        return summary
