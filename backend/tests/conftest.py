import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from frostwatch.api.deps import get_http_client, get_throttle, get_transport
from frostwatch.db import session as session_mod
from frostwatch.db.session import get_session
from frostwatch.main import app
from frostwatch.services.throttle import FixedIntervalThrottle

from upstream import FakeTransport, make_upstream_handler


@pytest.fixture()
def engine():
    # SQLite in-memory for unit tests; StaticPool keeps one shared connection
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def upstream_handler():
    return make_upstream_handler()


@pytest.fixture()
def http_client(upstream_handler):
    with httpx.Client(transport=httpx.MockTransport(upstream_handler)) as c:
        yield c


@pytest.fixture()
def mail():
    return FakeTransport()


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def client(monkeypatch, engine, http_client, mail, sleeps):
    def override_get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_http_client] = lambda: http_client
    app.dependency_overrides[get_transport] = lambda: mail
    app.dependency_overrides[get_throttle] = lambda: FixedIntervalThrottle(1.0, sleep=sleeps.append)
    monkeypatch.setattr(session_mod, "engine", engine, raising=False)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
