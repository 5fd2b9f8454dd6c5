from decimal import Decimal

from streamlit.testing.v1 import AppTest

import screens.settings.db as settings_db
from screens.settings.db import get_settings

PAGE = "../screens/settings/page.py"


def _app(engine):
    at = AppTest.from_file(PAGE, default_timeout=30)
    at.session_state["engine"] = engine
    return at


def test_settings_page_saves_values(engine):
    at = _app(engine)
    at.run()
    assert not at.exception

    days, fee = at.number_input
    assert days.value == 25
    assert fee.value == 1000.0

    days.set_value(30)
    fee.set_value(1200.0)
    at.button[0].click()
    at.run()
    assert not at.exception

    with engine.connect() as conn:
        s = get_settings(conn)
    assert s.course_duration_days == 30
    assert s.fee_amount == Decimal("1200.00")
    assert "Settings updated successfully" in [t.value for t in at.toast]
    # the rerun shows the saved values
    assert [n.value for n in at.number_input] == [30, 1200.0]


def test_save_runs_while_button_busy(engine, monkeypatch):
    import streamlit as st

    seen = []
    original = settings_db.update_settings

    def recording_update(conn, settings_id, fields):
        seen.append(st.session_state.get("busy__settings_save"))
        return original(conn, settings_id, fields)

    monkeypatch.setattr(settings_db, "update_settings", recording_update)

    at = _app(engine)
    at.run()
    at.button[0].click()
    at.run()
    assert not at.exception
    assert seen == [True]
    assert at.session_state["busy__settings_save"] is False
    assert not at.button[0].disabled


def test_failed_save_shows_generic_toast(engine, monkeypatch):
    def failing_update(conn, settings_id, fields):
        raise RuntimeError("disk full")

    monkeypatch.setattr(settings_db, "update_settings", failing_update)

    at = _app(engine)
    at.run()
    at.number_input[0].set_value(40)
    at.button[0].click()
    at.run()
    assert not at.exception
    assert "Failed to update settings" in [t.value for t in at.toast]
    with engine.connect() as conn:
        assert get_settings(conn).course_duration_days == 25
