# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from planner.db.session import create_db_engine, get_session, init_db
from planner.main import app
from planner.services import LabelService, ListService, TaskService


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps the single in-memory connection alive across sessions,
    so the API client and the services see the same data.
    """
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def tasks(session: Session) -> TaskService:
    return TaskService(session)


@pytest.fixture()
def lists(session: Session) -> ListService:
    return ListService(session)


@pytest.fixture()
def labels(session: Session) -> LabelService:
    return LabelService(session)


@pytest.fixture()
def client(engine: Engine) -> Iterator[TestClient]:
    def override_get_session() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    # Not used as a context manager: the lifespan would initialise the configured database
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
