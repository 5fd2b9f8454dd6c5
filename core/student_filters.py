# core/student_filters.py
"""
Student list filtering for the Students page.

A student is listed when it is active, matches the search term and, unless
the filter is "all", has the selected status.
"""
from __future__ import annotations

from typing import Callable, Iterable, List

from core.models import StatusResult, Student, StudentStatus

STATUS_FILTERS = {"all": "All Students", **{s.value: s.label for s in StudentStatus}}


def matches_search(student: Student, term: str) -> bool:
    """Name and place match case-insensitively; phone number matches as typed."""
    if not term:
        return True
    needle = term.lower()
    return (
        needle in student.name.lower()
        or needle in student.place.lower()
        or term in student.phone_number
    )


def filter_students(
    students: Iterable[Student],
    search_term: str,
    status_filter: str,
    status_of: Callable[[Student], StatusResult],
) -> List[Student]:
    """
    Apply the active flag, search term and status filter, preserving order.
    Unknown filter values behave like "all".
    """
    wanted = {s.value for s in StudentStatus}
    result = []
    for student in students:
        if not student.is_active:
            continue
        if not matches_search(student, search_term):
            continue
        if status_filter in wanted and status_of(student).status.value != status_filter:
            continue
        result.append(student)
    return result
