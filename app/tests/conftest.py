import os

# Must be set before the app modules read their configuration.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REGISTRATION_LOCK_ENABLED", "false")

from datetime import timedelta

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert
from sqlalchemy.orm import Session, sessionmaker

from app.core.clock import utcnow
from app.core.redis_config import get_redis
from app.database.db import Base, get_db, make_engine
from app.main import app
from app.models.events import Event
from app.models.registrations import event_registrations
from app.models.users import User


@pytest.fixture
def engine(tmp_path):
    # File-backed so every thread in the race tests gets its own connection.
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Session:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    # Override the database dependency
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def redis_client(fake_redis):
    """Route registration locks through fakeredis for API tests."""
    app.dependency_overrides[get_redis] = lambda: fake_redis
    yield fake_redis
    app.dependency_overrides.pop(get_redis, None)


@pytest.fixture
def make_event(db_session: Session):
    def _make_event(
        title: str = "Test Event",
        capacity: int = 10,
        location: str = "Kolkata",
        date=None,
        days_ahead: int = 30,
    ) -> Event:
        event = Event(
            title=title,
            capacity=capacity,
            location=location,
            date=date if date is not None else utcnow() + timedelta(days=days_ahead),
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def make_users(db_session: Session):
    counter = {"n": 0}

    def _make_users(count: int) -> list[int]:
        users = []
        for _ in range(count):
            counter["n"] += 1
            n = counter["n"]
            users.append(User(name=f"User {n}", email=f"user{n}@example.com"))
        db_session.add_all(users)
        db_session.commit()
        return [u.id for u in users]

    return _make_users


@pytest.fixture
def add_registrations(db_session: Session):
    """Insert membership rows directly, bypassing the coordinator."""

    def _add(event_id: int, user_ids: list[int]) -> None:
        if user_ids:
            db_session.execute(
                insert(event_registrations),
                [{"event_id": event_id, "user_id": uid} for uid in user_ids],
            )
        db_session.commit()

    return _add
