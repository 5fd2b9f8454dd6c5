import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from core.db import init_db
from schemas.students_schema import install_schema


@pytest.fixture
def engine():
    """Fresh in-memory database with the student schema installed."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    install_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def student_fields():
    return {
        "name": "John Doe",
        "place": "Pune",
        "phone_number": "9876543210",
        "admission_date": datetime.date(2024, 1, 1),
    }
