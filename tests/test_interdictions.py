"""
Tests for interdiction routes.
"""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from casino_registry.models import Casino, Client, InterdictionAttachment


def interdiction_payload(client_id: str, casino_id: str, **overrides: str) -> dict:
    return {
        "clientId": client_id,
        "casinoId": casino_id,
        "type": "judicial",
        "reason": "Court order 12/2024",
        "period": "two_years",
        "startDate": "2024-01-01T00:00:00Z",
        "endDate": "2026-01-01T00:00:00Z",
        **overrides,
    }


def test_create_interdiction(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    response = client.post(
        "/interdictions",
        json=interdiction_payload(registered_client.id, casino.id),
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["period"] == "two_years"
    assert data["client"] == {"id": registered_client.id, "name": registered_client.name}
    assert data["casino"]["name"] == "Casino A"


def test_one_interdiction_per_client_and_casino(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    payload = interdiction_payload(registered_client.id, casino.id)
    assert client.post("/interdictions", json=payload, headers=auth_headers).status_code == 201
    response = client.post("/interdictions", json=payload, headers=auth_headers)
    assert response.status_code == 409
    assert response.json() == {"error": "Client already has an interdiction"}


def test_create_interdiction_unknown_client(
    client: TestClient, auth_headers: dict, casino: Casino
) -> None:
    response = client.post(
        "/interdictions", json=interdiction_payload("missing", casino.id), headers=auth_headers
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Client not found"}


def test_create_interdiction_invalid_period(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    response = client.post(
        "/interdictions",
        json=interdiction_payload(registered_client.id, casino.id, period="forever"),
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "period"


def test_end_before_start_rejected(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    response = client.post(
        "/interdictions",
        json=interdiction_payload(
            registered_client.id, casino.id, startDate="2025-01-01T00:00:00Z", endDate="2024-01-01T00:00:00Z"
        ),
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_approve_and_reject(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    created = client.post(
        "/interdictions",
        json=interdiction_payload(registered_client.id, casino.id),
        headers=auth_headers,
    ).json()

    approved = client.post(f"/interdictions/{created['id']}/approve", headers=auth_headers)
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    rejected = client.post(f"/interdictions/{created['id']}/reject", headers=auth_headers)
    assert rejected.json()["status"] == "rejected"


def test_update_interdiction(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    created = client.post(
        "/interdictions",
        json=interdiction_payload(registered_client.id, casino.id),
        headers=auth_headers,
    ).json()
    response = client.patch(
        f"/interdictions/{created['id']}",
        json={"reason": "Appeal pending", "period": "indefinite"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["reason"] == "Appeal pending"
    assert response.json()["period"] == "indefinite"


def test_interdiction_attachments_lifecycle(
    client: TestClient,
    session: Session,
    auth_headers: dict,
    casino: Casino,
    registered_client: Client,
) -> None:
    created = client.post(
        "/interdictions",
        json=interdiction_payload(registered_client.id, casino.id),
        headers=auth_headers,
    ).json()
    base = f"/interdictions/{created['id']}/attachments"

    added = client.post(
        base,
        files=[("files", ("order.pdf", b"%PDF-court", "application/pdf"))],
        headers=auth_headers,
    )
    assert added.status_code == 201
    attachment = added.json()[0]
    assert attachment["type"] == "PDF"
    assert attachment["name"] == "order.pdf"

    listed = client.get(base, headers=auth_headers).json()
    assert [a["id"] for a in listed] == [attachment["id"]]

    download = client.get(f"{base}/{attachment['id']}/download", headers=auth_headers)
    assert download.status_code == 200
    assert download.content == b"%PDF-court"

    path = session.get(InterdictionAttachment, attachment["id"]).path
    deleted = client.delete(f"{base}/{attachment['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert not Path(path).exists()
    assert client.get(base, headers=auth_headers).json() == []


def test_delete_interdiction_removes_attachments(
    client: TestClient,
    session: Session,
    auth_headers: dict,
    casino: Casino,
    registered_client: Client,
) -> None:
    created = client.post(
        "/interdictions",
        data=interdiction_payload(registered_client.id, casino.id),
        files=[("files", ("order.jpg", b"jpeg", "image/jpeg"))],
        headers=auth_headers,
    ).json()
    assert created["attachments"][0]["type"] == "Image"

    response = client.delete(f"/interdictions/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deleted"] == {"interdiction_attachments": 1, "interdictions": 1}
    session.expire_all()
    assert session.exec(select(InterdictionAttachment)).all() == []


def test_attachment_of_other_owner_not_found(
    client: TestClient, auth_headers: dict, casino: Casino, registered_client: Client
) -> None:
    created = client.post(
        "/interdictions",
        data=interdiction_payload(registered_client.id, casino.id),
        files=[("files", ("order.pdf", b"%PDF", "application/pdf"))],
        headers=auth_headers,
    ).json()
    attachment_id = created["attachments"][0]["id"]
    response = client.get(
        f"/clients/{registered_client.id}/attachments/{attachment_id}/download",
        headers=auth_headers,
    )
    assert response.status_code == 404


def test_attachment_upload_without_files(
    client: TestClient, auth_headers: dict, registered_client: Client
) -> None:
    response = client.post(
        f"/clients/{registered_client.id}/attachments", data={"x": "y"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "No files provided"
