"""Shared fixtures for crud unit tests"""

import pytest
from sqlmodel import SQLModel, Session

from lessonmark.crud.database import init_db, make_engine


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as s:
        yield s
