"""Fixtures for API tests: a fresh in-memory database per test."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.db.session import get_db
from app.main import app as fastapi_app

AUTH = {"Authorization": "Bearer test-token"}


@pytest.fixture()
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def client(engine):
    def _get_db():
        with Session(engine) as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = _get_db
    with TestClient(fastapi_app) as test_client:
        test_client.headers.update(AUTH)
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def make_military(client):
    """Create a military through the API and return its JSON."""
    counter = {"n": 0}

    def _make(rank: str = "3º Sargento", **fields) -> dict:
        counter["n"] += 1
        payload = {
            "name": f"Militar {counter['n']}",
            "rank": rank,
            "branch": "Infantaria",
            "squadron": "Base Adm",
        }
        payload.update(fields)
        response = client.post("/api/v1/militaries", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_process(client):
    """Create a process through the API and return the response."""

    def _make(military_ids: list[int], type: str = "TEAM", start_date: str = "2024-03-01", **fields):
        payload = {
            "type": type,
            "process_class": "Classe I - Subsistência",
            "start_date": start_date,
            "assigned_militaries": [{"military_id": i, "function": "Membro"} for i in military_ids],
        }
        payload.update(fields)
        return client.post("/api/v1/processes", json=payload)

    return _make
