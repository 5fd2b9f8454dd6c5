# app.py
from __future__ import annotations

import logging
from pathlib import Path

import streamlit as st

from core.settings import configure_logging, load_settings
from core.db import get_engine, init_db
from core.navigation import NAV_SECTIONS, page_path
from core.ui import render_footer_global

# ── Import the schema registry and the auto-discover function ──
from core.schema_registry import auto_discover, run_all as run_all_installers

APP_FILE = Path(__file__).resolve()
APP_DIR = APP_FILE.parent

log = logging.getLogger(__name__)


def _ensure_engine():
    if "engine" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level)
        engine = get_engine(settings.db.url)
        init_db(engine)
        st.session_state["app_settings"] = settings
        st.session_state["engine"] = engine
    return st.session_state["engine"]


def _build_pages_dict():
    """Build pages dictionary organized by sections for st.navigation"""
    pages_dict = {}
    missing = []

    for section in NAV_SECTIONS:
        section_pages = []
        for route_stem, title, is_default in section.pages:
            rel = page_path(route_stem)
            if not (APP_DIR / rel).exists():
                missing.append(route_stem)
                continue
            section_pages.append(st.Page(rel, title=title, default=is_default, url_path=route_stem))
        if section_pages:
            pages_dict[f"{section.icon} {section.title}"] = section_pages

    if missing:
        st.sidebar.warning(f"Missing pages: {missing}")

    return pages_dict


def main():
    # 1. Get or create the engine.
    engine = _ensure_engine()
    settings = st.session_state["app_settings"]

    try:
        st.set_page_config(page_title=settings.page_title, layout="wide", page_icon="🎓")
    except Exception:
        log.debug("Page config already set for this run")

    # 2. Run database initialization ONCE per session.
    if "db_initialized" not in st.session_state:
        try:
            auto_discover("schemas")
            run_all_installers(engine)
        except Exception as e:
            log.exception("Schema installation failed")
            st.error("Database schema initialization failed. See details below.")
            with st.expander("Diagnostics"):
                st.exception(e)
            st.stop()

        st.session_state["db_initialized"] = True

    pages_dict = _build_pages_dict()
    if not pages_dict:
        st.error("No pages available.")
        return

    nav = st.navigation(pages_dict)
    nav.run()

    render_footer_global()


if __name__ == "__main__":
    main()
