# screens/students/page.py
# ═══════════════════════════════════════════════════════════════════════════════
# STUDENT MANAGEMENT PAGE
# Features:
# - Search by name / place / phone and filter by payment status
# - Status metrics and CSV export of the visible rows
# - Add / edit student, record payment, deactivate (soft delete)
# - Payment history per student
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import datetime
import logging
import traceback
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st
from sqlalchemy.engine import Engine

from core.formatting import format_amount, format_date, next_payment_date, to_decimal
from core.models import DEFAULT_SETTINGS, Payment, Settings, Student, StudentStatus
from core.student_filters import STATUS_FILTERS, filter_students
from core.student_status_engine import StudentStatusEngine, today
from core.ui import (
    busy,
    flush_toasts,
    is_busy,
    mark_busy,
    notify_error,
    notify_success,
    notify_warning,
    session_engine,
    session_settings,
)
from screens.settings.db import get_settings
from screens.students.db import (
    create_payment,
    create_student,
    deactivate_student,
    list_payments,
    list_students,
    update_student,
)

logger = logging.getLogger(__name__)

_STATUS_DOTS = {
    StudentStatus.ACTIVE: "🟢",
    StudentStatus.DUE_TODAY: "🟡",
    StudentStatus.EXPIRED: "🔴",
}
STATUS_BADGES = {s: f"{_STATUS_DOTS[s]} {s.label}" for s in StudentStatus}


# ════════════════════════════════════════════════════════════════════════════════
# SMALL HELPERS
# ════════════════════════════════════════════════════════════════════════════════

def _k(s: str) -> str:
    """Per-page key namespace to avoid collisions."""
    return f"students__{s}"


def _student_label(s: Student) -> str:
    return f"{s.name} · {s.place} · {s.phone_number}"


# ════════════════════════════════════════════════════════════════════════════════
# DATA LOADING
# ════════════════════════════════════════════════════════════════════════════════

def _load_data(engine: Engine) -> Tuple[List[Student], List[Payment], Settings]:
    students: List[Student] = []
    payments: List[Payment] = []
    settings = DEFAULT_SETTINGS
    try:
        with engine.connect() as conn:
            students = list_students(conn)
            payments = list_payments(conn)
            settings = get_settings(conn)
    except Exception as e:
        notify_error("Failed to load data", e)
    return students, payments, settings


# ════════════════════════════════════════════════════════════════════════════════
# ACTIONS - one round-trip each, failures reported through a toast
# ════════════════════════════════════════════════════════════════════════════════

def save_student(engine: Engine, student_id: Optional[int], fields: Dict[str, Any]) -> bool:
    try:
        with engine.begin() as conn:
            if student_id:
                update_student(conn, student_id, fields)
            else:
                create_student(conn, fields)
    except Exception as e:
        notify_error("Failed to save student", e)
        return False
    notify_success("Student updated successfully" if student_id else "Student added successfully")
    return True


def record_payment(engine: Engine, student: Student, payment_date: datetime.date,
                   amount: Any, settings: Settings) -> bool:
    try:
        next_date = next_payment_date(payment_date, settings.course_duration_days)
        with engine.begin() as conn:
            create_payment(conn, student.id, payment_date, amount, next_date)
    except Exception as e:
        notify_error("Failed to record payment", e)
        return False
    notify_success("Payment recorded successfully")
    return True


def deactivate(engine: Engine, student: Student) -> bool:
    try:
        with engine.begin() as conn:
            deactivate_student(conn, student.id)
    except Exception as e:
        notify_error("Failed to deactivate student", e)
        return False
    notify_success("Student deactivated successfully")
    return True


# ════════════════════════════════════════════════════════════════════════════════
# STUDENTS TABLE
# ════════════════════════════════════════════════════════════════════════════════

def _students_frame(rows: List[Student], status_engine: StudentStatusEngine) -> pd.DataFrame:
    records = []
    for s in rows:
        result = status_engine.status_for(s)
        records.append({
            "Name": s.name,
            "Place": s.place,
            "Phone": s.phone_number,
            "Admission Date": format_date(s.admission_date),
            "Status": STATUS_BADGES[result.status],
            "Next Payment": format_date(result.next_payment_date),
        })
    return pd.DataFrame(records, columns=[
        "Name", "Place", "Phone", "Admission Date", "Status", "Next Payment"
    ])


def _render_filters() -> Tuple[str, str]:
    st.markdown("#### 🔎 Filters & Search")
    col1, col2 = st.columns([3, 1])
    with col1:
        search = st.text_input("Search", placeholder="Search by name, place, or phone...",
                               key=_k("search"))
    with col2:
        options = list(STATUS_FILTERS)
        status_filter = st.selectbox("Status", options, format_func=STATUS_FILTERS.get,
                                     key=_k("status_filter"))
    return search, status_filter


def _render_metrics(active: List[Student], status_engine: StudentStatusEngine) -> None:
    summary = status_engine.summarize(active)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Active Students", summary["total"])
    col2.metric("Paid Up", summary[StudentStatus.ACTIVE.value])
    col3.metric("Due Today", summary[StudentStatus.DUE_TODAY.value])
    col4.metric("Expired", summary[StudentStatus.EXPIRED.value])


def _render_table(rows: List[Student], status_engine: StudentStatusEngine) -> None:
    st.markdown(f"#### 👥 Students ({len(rows)})")
    if not rows:
        st.info("No students found matching your criteria.")
        return

    df = _students_frame(rows, status_engine)
    st.dataframe(df, width="stretch", hide_index=True)

    csv = df.to_csv(index=False)
    st.download_button("📥 Export to CSV", csv, "students_export.csv", "text/csv", key=_k("dl"))


# ════════════════════════════════════════════════════════════════════════════════
# FORMS - submit buttons set a busy flag (core.ui.mark_busy); the action runs
# while the flag is set and reruns the page afterwards
# ════════════════════════════════════════════════════════════════════════════════

def _render_student_form(engine: Engine, student: Optional[Student], current: datetime.date) -> None:
    """Add when student is None, otherwise edit."""
    sid = student.id if student else "new"
    key = f"student_form_{sid}"

    with st.form(_k(key), clear_on_submit=student is None):
        col1, col2 = st.columns(2)
        with col1:
            f_name = st.text_input("Name*", value=student.name if student else "",
                                   placeholder="Enter student name", key=_k(f"{key}_name"))
            f_place = st.text_input("Place*", value=student.place if student else "",
                                    placeholder="Enter place", key=_k(f"{key}_place"))
        with col2:
            f_phone = st.text_input("Phone Number*", value=student.phone_number if student else "",
                                    placeholder="Enter phone number", key=_k(f"{key}_phone"))
            f_admission = st.date_input(
                "Admission Date*",
                value=student.admission_date if student else current,
                format="DD/MM/YYYY",
                key=_k(f"{key}_admission"),
            )

        label = "💾 Update Student" if student else "➕ Add Student"
        st.form_submit_button(label, type="primary", disabled=is_busy(key),
                              on_click=mark_busy, args=(key,))

    if not is_busy(key):
        return
    with busy(key):
        if not f_name.strip() or not f_place.strip() or not f_phone.strip() or not f_admission:
            notify_warning("Required fields: Name, Place, Phone Number, Admission Date")
            return
        save_student(engine, student.id if student else None, {
            "name": f_name,
            "place": f_place,
            "phone_number": f_phone,
            "admission_date": f_admission,
        })


def _render_payment_form(engine: Engine, student: Student, settings: Settings,
                         current: datetime.date) -> None:
    key = f"payment_{student.id}"

    col1, col2 = st.columns(2)
    with col1:
        pay_date = st.date_input("Payment Date*", value=current,
                                 format="DD/MM/YYYY", key=_k(f"{key}_date"))
    with col2:
        amount = st.number_input("Amount*", min_value=0.0, step=0.01,
                                 value=float(settings.fee_amount), format="%.2f",
                                 key=_k(f"{key}_amount"))

    if pay_date:
        preview = next_payment_date(pay_date, settings.course_duration_days)
        st.caption(f"Next payment date: **{format_date(preview)}** "
                   f"(Based on {settings.course_duration_days} days course duration)")

    st.button("💰 Record Payment", type="primary", key=_k(f"{key}_save"),
              disabled=is_busy(key), on_click=mark_busy, args=(key,))

    if not is_busy(key):
        return
    with busy(key):
        if not pay_date or to_decimal(amount) <= Decimal("0"):
            notify_warning("Enter a payment date and a positive amount")
            return
        record_payment(engine, student, pay_date, amount, settings)


def _render_payment_history(student: Student, payments: List[Payment]) -> None:
    own = [p for p in payments if p.student_id == student.id]
    if not own:
        st.info("No payments recorded yet.")
        return
    df = pd.DataFrame([{
        "Payment Date": format_date(p.payment_date),
        "Amount": format_amount(p.amount),
        "Next Payment": format_date(p.next_payment_date),
    } for p in own])
    st.dataframe(df, width="stretch", hide_index=True)
    total = sum((p.amount for p in own), Decimal("0"))
    st.caption(f"{len(own)} payment(s), total {format_amount(total)}")


def _render_deactivate(engine: Engine, student: Student) -> None:
    key = f"deactivate_{student.id}"
    st.warning(f"Deactivating **{student.name}** hides the student from the list. "
               "Payment history is kept.")
    confirm = st.checkbox("Are you sure you want to deactivate this student?",
                          key=_k(f"{key}_confirm"))
    st.button("🗑️ Deactivate", key=_k(f"{key}_go"),
              disabled=not confirm or is_busy(key), on_click=mark_busy, args=(key,))

    if is_busy(key):
        with busy(key):
            deactivate(engine, student)


def _render_actions(engine: Engine, active: List[Student], payments: List[Payment],
                    settings: Settings, current: datetime.date) -> None:
    tab_add, tab_edit, tab_pay, tab_history, tab_deactivate = st.tabs([
        "➕ Add Student", "✏️ Edit Student", "💰 Record Payment",
        "🧾 Payment History", "🗑️ Deactivate",
    ])

    with tab_add:
        _render_student_form(engine, None, current)

    if not active:
        for tab in (tab_edit, tab_pay, tab_history, tab_deactivate):
            with tab:
                st.info("No active students yet.")
        return

    by_id = {s.id: s for s in active}

    def _pick(tab_key: str) -> Student:
        sel = st.selectbox("Student", list(by_id), key=_k(f"{tab_key}_sel"),
                           format_func=lambda i: _student_label(by_id[i]))
        return by_id[sel]

    with tab_edit:
        _render_student_form(engine, _pick("edit"), current)
    with tab_pay:
        student = _pick("pay")
        st.markdown(f"**Add Payment for {student.name}**")
        _render_payment_form(engine, student, settings, current)
    with tab_history:
        _render_payment_history(_pick("history"), payments)
    with tab_deactivate:
        _render_deactivate(engine, _pick("deactivate"))


# ════════════════════════════════════════════════════════════════════════════════
# MAIN RENDER FUNCTION
# ════════════════════════════════════════════════════════════════════════════════

def render(engine: Optional[Engine] = None, **kwargs) -> None:
    """Main render function for Students page."""
    engine = engine or session_engine()
    current = today(session_settings().status_timezone)

    st.title("👨‍🎓 Student Management")

    with st.spinner("Loading..."):
        students, payments, settings = _load_data(engine)

    status_engine = StudentStatusEngine(payments, settings, current)
    active = [s for s in students if s.is_active]

    _render_metrics(active, status_engine)
    st.divider()

    search, status_filter = _render_filters()
    rows = filter_students(students, search, status_filter, status_engine.status_for)

    try:
        _render_table(rows, status_engine)
    except Exception as e:
        st.error(f"Student list failed: {e}")
        st.code(traceback.format_exc())

    st.divider()
    _render_actions(engine, active, payments, settings, current)

    flush_toasts()


if __name__ == "__main__":
    render()
