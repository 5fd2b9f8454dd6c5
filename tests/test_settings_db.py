from decimal import Decimal

import pytest
from sqlalchemy import text as sa_text

from schemas.students_schema import install_schema
from screens.settings.db import SettingsNotFound, get_settings, update_settings


def test_seeded_defaults(engine):
    with engine.connect() as conn:
        s = get_settings(conn)
    assert s.course_duration_days == 25
    assert s.fee_amount == Decimal("1000.00")


def test_install_is_idempotent_and_keeps_single_row(engine):
    install_schema(engine)
    install_schema(engine)
    with engine.connect() as conn:
        assert conn.execute(sa_text("SELECT COUNT(*) FROM settings")).scalar() == 1


def test_update(engine):
    with engine.connect() as conn:
        s = get_settings(conn)
    with engine.begin() as conn:
        update_settings(conn, s.id, {"course_duration_days": 30, "fee_amount": "1250.75"})
    with engine.connect() as conn:
        s = get_settings(conn)
    assert s.course_duration_days == 30
    assert s.fee_amount == Decimal("1250.75")


def test_zero_fee_allowed(engine):
    with engine.connect() as conn:
        s = get_settings(conn)
    with engine.begin() as conn:
        update_settings(conn, s.id, {"fee_amount": 0})
    with engine.connect() as conn:
        assert get_settings(conn).fee_amount == Decimal("0.00")


@pytest.mark.parametrize("fields", [
    {"course_duration_days": 0},
    {"course_duration_days": -5},
    {"fee_amount": "-1"},
    {"currency": "INR"},
])
def test_invalid_updates_rejected(engine, fields):
    with engine.connect() as conn:
        s = get_settings(conn)
    with engine.begin() as conn:
        with pytest.raises(ValueError):
            update_settings(conn, s.id, fields)


def test_update_unknown_row(engine):
    with engine.begin() as conn:
        with pytest.raises(SettingsNotFound):
            update_settings(conn, 999, {"course_duration_days": 10})


def test_missing_row(engine):
    with engine.begin() as conn:
        conn.execute(sa_text("DELETE FROM settings"))
    with engine.connect() as conn:
        with pytest.raises(SettingsNotFound):
            get_settings(conn)
