# screens/home/page.py
from __future__ import annotations

import logging
from typing import Optional

import streamlit as st
from sqlalchemy.engine import Engine

from core.student_status_engine import StudentStatusEngine, today
from core.ui import flush_toasts, notify_error, session_engine, session_settings
from screens.settings.db import get_settings
from screens.students.db import list_payments, list_students

logger = logging.getLogger(__name__)

FEATURES = [
    ("👥 Student Management", "Add, edit, search, and manage student records with ease",
     "screens/students/page.py", "Manage Students"),
    ("💰 Payment Tracking", "Record payments and automatically calculate renewal dates",
     "screens/students/page.py", "View Payments"),
    ("🔔 Renewal Alerts", "See which students are due today or have expired",
     "screens/students/page.py", "Check Renewals"),
    ("⚙️ Configuration", "Configure course duration and fee amounts",
     "screens/settings/page.py", "Settings"),
]


def _render_overview(engine: Engine) -> None:
    try:
        with engine.connect() as conn:
            students = [s for s in list_students(conn) if s.is_active]
            payments = list_payments(conn)
            settings = get_settings(conn)
    except Exception as e:
        notify_error("Failed to load data", e)
        return

    status_engine = StudentStatusEngine(payments, settings, today(session_settings().status_timezone))
    summary = status_engine.summarize(students)
    col1, col2, col3 = st.columns(3)
    col1.metric("Active Students", summary["total"])
    col2.metric("Due Today", summary["due_today"])
    col3.metric("Expired", summary["expired"])


def render(engine: Optional[Engine] = None, **kwargs) -> None:
    engine = engine or session_engine()

    st.title("🎓 Welcome to Student Management")
    st.caption("Track admissions, manage payments, and monitor course renewals efficiently")

    _render_overview(engine)
    st.divider()

    cols = st.columns(len(FEATURES))
    for col, (title, blurb, target, label) in zip(cols, FEATURES):
        with col:
            with st.container(border=True):
                st.markdown(f"**{title}**")
                st.caption(blurb)
                st.page_link(target, label=label)

    st.divider()
    st.markdown("### Quick Actions")
    col1, col2 = st.columns(2)
    with col1:
        st.page_link("screens/students/page.py", label="View All Students", icon="👥")
    with col2:
        st.page_link("screens/settings/page.py", label="Configure System", icon="⚙️")

    flush_toasts()


if __name__ == "__main__":
    render()
