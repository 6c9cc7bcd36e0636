"""
Shared fixtures: an in-memory database per test, a small question
directory, and an API client whose clock the test controls.
"""

import os
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studyflow.api.deps import get_clock
from studyflow.core.database import Base, get_db
from studyflow.main import app
from studyflow.models.topic import Question, Topic

START = datetime(2024, 3, 1, 9, 0, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def topics(db):
    """Two topics: 'Python' with questions 1-3, 'SQL' with questions 4-5."""
    python = Topic(id=1, name="Python")
    sql = Topic(id=2, name="SQL")
    db.add_all([python, sql])
    db.add_all(
        [
            Question(id=1, topic_id=1, question="What is a generator?", answer="A function that yields values lazily"),
            Question(id=2, topic_id=1, question="What is a decorator?", answer="A callable wrapping another function"),
            Question(id=3, topic_id=1, question="What is the GIL?", answer="A global interpreter lock"),
            Question(id=4, topic_id=2, question="What is a join?", answer="Combining rows from two tables"),
            Question(id=5, topic_id=2, question="What is an index?", answer="A structure speeding up lookups"),
        ]
    )
    db.commit()
    return {"python": python.id, "sql": sql.id}


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def client(engine, topics, clock):
    SessionForTest = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = SessionForTest()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock.now
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
