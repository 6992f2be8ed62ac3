"""Shared fixtures for crud unit tests"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from newsdoc.core.models import ArticleDoc
from newsdoc.crud.collections import create_collection, save_article


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="brief")
def brief_fixture(session):
    """A collection with three articles appended in order."""
    collection = create_collection(session, "Weekly Brief", "Top stories")
    for heading in ("First", "Second", "Third"):
        save_article(session, collection.id, ArticleDoc(heading=heading, date=datetime(2026, 3, 2)))
    return collection
