"""Engine construction and schema management"""

from sqlmodel import SQLModel, create_engine

# Registers the table on SQLModel.metadata before create_all runs.
from lessonmark.crud import models  # noqa: F401


def make_engine(db_url: str):
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(engine) -> None:
    SQLModel.metadata.create_all(engine)


def reset_db(engine) -> None:
    """Drop and recreate all tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
