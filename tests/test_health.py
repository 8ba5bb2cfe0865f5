"""
Tests for health check endpoints.
"""

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlmodel import Session


def test_health_check(client: TestClient) -> None:
    """
    Test basic health check endpoint.
    """
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_database_health_check(client: TestClient) -> None:
    """
    Test database health check endpoint.
    """
    response = client.get("/health/db")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "ok"


def test_database_health_check_unreachable(client: TestClient, session: Session, monkeypatch) -> None:
    def broken_connection(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "connection", broken_connection)
    response = client.get("/health/db")
    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database": "error"}


def test_health_is_public(client: TestClient) -> None:
    assert client.get("/health", headers={"Authorization": "Bearer nonsense"}).status_code == 200
