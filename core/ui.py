# core/ui.py
"""
Shared UI helpers: toast notifications, busy flags, footer.

Mutating controls follow one pattern:

    st.button(..., disabled=is_busy(key), on_click=mark_busy, args=(key,))
    if is_busy(key):
        with busy(key):
            ...  # the action

``mark_busy`` runs as a widget callback, before the script body, so the
control is rendered disabled for the whole round-trip. ``busy`` clears the
flag in ``finally`` and reruns the page so the control comes back enabled.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Optional

import streamlit as st

logger = logging.getLogger(__name__)

_TOASTS_KEY = "pending_toasts"


def session_settings():
    """App configuration, loaded once per session."""
    if "app_settings" not in st.session_state:
        from core.settings import load_settings
        st.session_state["app_settings"] = load_settings()
    return st.session_state["app_settings"]


def session_engine():
    """Engine cached in session state; app.py normally sets it up first."""
    if "engine" not in st.session_state:
        from core.db import get_engine, init_db
        engine = get_engine(session_settings().db.url)
        init_db(engine)
        st.session_state["engine"] = engine
    return st.session_state["engine"]


# ════════════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS - queued in session state, shown by flush_toasts()
# ════════════════════════════════════════════════════════════════════════════════

def _queue_toast(message: str, icon: str) -> None:
    st.session_state.setdefault(_TOASTS_KEY, []).append((message, icon))


def notify_success(message: str) -> None:
    _queue_toast(message, "✅")


def notify_warning(message: str) -> None:
    _queue_toast(message, "⚠️")


def notify_error(message: str, exc: Optional[BaseException] = None) -> None:
    """Queue a generic failure toast; the exception only goes to the log."""
    if exc is not None:
        logger.error(message, exc_info=exc)
    else:
        logger.error(message)
    _queue_toast(message, "❌")


def flush_toasts() -> None:
    """Show queued toasts. Pages call this last, so toasts survive st.rerun()."""
    for message, icon in st.session_state.pop(_TOASTS_KEY, []):
        st.toast(message, icon=icon)


# ════════════════════════════════════════════════════════════════════════════════
# BUSY FLAGS
# ════════════════════════════════════════════════════════════════════════════════

def _flag(key: str) -> str:
    return f"busy__{key}"


def is_busy(key: str) -> bool:
    return bool(st.session_state.get(_flag(key)))


def mark_busy(key: str) -> None:
    """Widget callback: flag the control before the page reruns."""
    st.session_state[_flag(key)] = True


@contextmanager
def busy(key: str):
    """Run the action a control started, then clear its flag and rerun."""
    try:
        yield
    finally:
        st.session_state[_flag(key)] = False
    st.rerun()


def render_footer_global() -> None:
    st.divider()
    st.caption("Student Management · fees, renewals and course settings")
