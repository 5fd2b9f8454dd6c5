# screens/settings/page.py
from __future__ import annotations

import logging
from typing import Optional

import streamlit as st
from sqlalchemy.engine import Engine

from core.formatting import format_amount
from core.models import Settings
from core.ui import busy, flush_toasts, is_busy, mark_busy, notify_error, notify_success, session_engine
from screens.settings.db import get_settings, update_settings

logger = logging.getLogger(__name__)

PAGE_TITLE = "⚙️ Settings"
_BUSY_KEY = "settings_save"


def _load(engine: Engine) -> Optional[Settings]:
    try:
        with engine.connect() as conn:
            return get_settings(conn)
    except Exception as e:
        notify_error("Failed to load settings", e)
        return None


def save_settings(engine: Engine, settings: Settings, course_duration_days: int, fee_amount) -> bool:
    try:
        with engine.begin() as conn:
            update_settings(conn, settings.id, {
                "course_duration_days": course_duration_days,
                "fee_amount": fee_amount,
            })
    except Exception as e:
        notify_error("Failed to update settings", e)
        return False
    notify_success("Settings updated successfully")
    return True


def _render_form(engine: Engine, settings: Settings) -> None:
    st.markdown("#### Course Configuration")
    with st.form("settings_form"):
        f_days = st.number_input(
            "Course Duration (Days)*", min_value=1, step=1,
            value=int(settings.course_duration_days),
            help="Number of days after which students need to renew their package",
        )
        f_fee = st.number_input(
            "Fee Amount*", min_value=0.0, step=0.01, format="%.2f",
            value=float(settings.fee_amount),
            help="Default fee amount for the course",
        )
        st.form_submit_button("💾 Save Settings", type="primary",
                              disabled=is_busy(_BUSY_KEY),
                              on_click=mark_busy, args=(_BUSY_KEY,))

    if is_busy(_BUSY_KEY):
        with busy(_BUSY_KEY):
            save_settings(engine, settings, int(f_days), f_fee)


def render(engine: Optional[Engine] = None, **kwargs) -> None:
    engine = engine or session_engine()

    st.title(PAGE_TITLE)
    st.caption("Configure course duration and fee amount for your institution")

    settings = _load(engine)
    if settings is None:
        st.warning("Settings are unavailable. Check the database and reload the page.")
    else:
        _render_form(engine, settings)
        st.info(
            "**Current Configuration**\n\n"
            f"- Students will be reminded to renew after **{settings.course_duration_days} days**\n"
            f"- Default fee amount: **{format_amount(settings.fee_amount)}**"
        )
        st.caption("Changing the duration only affects payments recorded from now on; "
                   "stored next payment dates are not recalculated.")

    flush_toasts()


if __name__ == "__main__":
    render()
