"""
Tests for casino routes.
"""

from typing import Callable

from fastapi.testclient import TestClient
from sqlmodel import Session

from casino_registry.models import Casino, Client
from casino_registry.services.casino_service import CasinoService

from conftest import CASINO_PAYLOAD


def test_create_casino(client: TestClient, auth_headers: dict) -> None:
    response = client.post("/casinos", json=CASINO_PAYLOAD, headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["name"] == "Casino A"
    assert data["adress"] == "Av. X"
    assert data["foundedIn"] == "2020-01-01"
    assert data["licenseNr"] == "LIC-1"
    assert data["location"] == "Maputo"


def test_create_casino_duplicate_name(client: TestClient, auth_headers: dict) -> None:
    assert client.post("/casinos", json=CASINO_PAYLOAD, headers=auth_headers).status_code == 201
    response = client.post("/casinos", json=CASINO_PAYLOAD, headers=auth_headers)
    assert response.status_code == 409
    assert response.json() == {"error": "Casino already exists"}


def test_create_casino_invalid_location(client: TestClient, auth_headers: dict) -> None:
    response = client.post(
        "/casinos", json={**CASINO_PAYLOAD, "location": "Lisboa"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "location"


def test_create_casino_missing_address(client: TestClient, auth_headers: dict) -> None:
    payload = {k: v for k, v in CASINO_PAYLOAD.items() if k != "adress"}
    response = client.post("/casinos", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "adress"


def test_get_casino(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    response = client.get(f"/casinos/{casino.id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == casino.id


def test_get_missing_casino(client: TestClient, auth_headers: dict) -> None:
    response = client.get("/casinos/does-not-exist", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Casino not found"}


def test_update_casino(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    response = client.patch(
        f"/casinos/{casino.id}",
        json={"adress": "Av. Y", "licenseValidity": "2035-12-31"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["adress"] == "Av. Y"
    assert data["licenseValidity"] == "2035-12-31"
    assert data["name"] == "Casino A"


def test_update_casino_to_taken_name(
    client: TestClient, auth_headers: dict, make_casino: Callable[..., Casino]
) -> None:
    make_casino(name="Casino A")
    other = make_casino(name="Casino B")
    response = client.patch(f"/casinos/{other.id}", json={"name": "Casino A"}, headers=auth_headers)
    assert response.status_code == 409


def test_delete_casino_without_dependents(
    client: TestClient, session: Session, auth_headers: dict, casino: Casino
) -> None:
    casino_id = casino.id
    response = client.delete(f"/casinos/{casino_id}", headers=auth_headers)
    assert response.status_code == 200
    session.expire_all()
    assert session.get(Casino, casino_id) is None


def test_delete_casino_with_client_blocked(
    client: TestClient,
    session: Session,
    auth_headers: dict,
    casino: Casino,
    registered_client: Client,
) -> None:
    response = client.delete(f"/casinos/{casino.id}", headers=auth_headers)
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "Cannot delete casino with related records"
    assert body["relatedRecords"] == {
        "clients": 1,
        "transactions": 0,
        "interdictions": 0,
        "occurrences": 0,
        "specialTaxes": 0,
        "stampTaxes": 0,
    }
    assert session.get(Casino, casino.id) is not None


def test_related_records_counts(session: Session, casino: Casino, registered_client: Client) -> None:
    related = CasinoService(session).related_records(casino.id)
    assert related.clients == 1
    assert related.total == 1
