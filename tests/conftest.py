import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from carechat import models  # noqa: F401
from carechat.auth import create_token
from carechat.db import Base, get_db
from carechat.llm import get_gateway
from carechat.main import app
from carechat.users import register_user


class FakeGateway:
    def __init__(self, reply="Rest and drink plenty of water."):
        self.reply = reply
        self.calls = []

    def complete(self, message):
        self.calls.append(message)
        return self.reply


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, gateway):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return register_user(db, "alice", "a@x.com", "pw123")


@pytest.fixture
def auth_headers(user):
    token = create_token(user.id, user.username)
    return {"Authorization": f"Bearer {token}"}
