import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import src.models  # noqa: F401  (registers every table on Base.metadata)
from src.config.settings import AppSettings, get_settings
from src.models.database import Base, get_session
from src.web.app import app


@pytest.fixture
def tmp_json(tmp_path: Path):
    def _make(data, name="sample.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _make


@pytest.fixture
def db_session():
    """In-memory SQLite database shared across threads"""
    engine = create_engine(
        "sqlite:///:memory:", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def client(db_session, settings):
    """TestClient bound to the in-memory database (startup hook not run)"""

    def _override_session():
        yield db_session

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return {"X-User-Id": "alice"}


@pytest.fixture
def bob():
    return {"X-User-Id": "bob"}


@pytest.fixture
def make_decision(client, alice):
    """POST a decision and return its JSON"""

    def _make(**overrides):
        payload = {
            "title": "Q4 Budget",
            "description": "Allocate the Q4 discretionary budget.",
            "category": "Strategy",
            "status": "open",
        }
        payload.update(overrides)
        response = client.post("/api/decisions", json=payload, headers=alice)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
