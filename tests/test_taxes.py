"""
Tests for special tax and stamp tax routes.
"""

from datetime import date, timedelta
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from casino_registry.models import Casino
from casino_registry.schemas.common import parse_day


def special_tax(casino_id: str, day: str = "01/03/2024", **overrides) -> dict:
    return {"casinoId": casino_id, "tableResult": 125000.5, "machineResult": 98000, "date": day, **overrides}


def stamp_tax(casino_id: str, day: str = "01/03/2024", **overrides) -> dict:
    return {"casinoId": casino_id, "ticketsSold": 340, "date": day, **overrides}


@pytest.mark.parametrize("raw", ["05/03/2024", "2024-03-05"])
def test_parse_day_formats(raw: str) -> None:
    assert parse_day(raw) == date(2024, 3, 5)


@pytest.mark.parametrize("raw", ["31/02/2024", "5/3/2024", "yesterday"])
def test_parse_day_rejects(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_day(raw)


def test_create_special_tax(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    response = client.post("/special-taxes", json=special_tax(casino.id), headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["date"] == "2024-03-01"
    assert data["tableResult"] == 125000.5
    assert data["casino"]["id"] == casino.id


def test_one_special_tax_per_casino_per_day(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    assert client.post("/special-taxes", json=special_tax(casino.id), headers=auth_headers).status_code == 201
    response = client.post("/special-taxes", json=special_tax(casino.id), headers=auth_headers)
    assert response.status_code == 409


def test_special_tax_future_date(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    tomorrow = (date.today() + timedelta(days=1)).strftime("%d/%m/%Y")
    response = client.post("/special-taxes", json=special_tax(casino.id, tomorrow), headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "date"


def test_special_tax_unknown_casino(client: TestClient, auth_headers: dict) -> None:
    response = client.post("/special-taxes", json=special_tax("missing"), headers=auth_headers)
    assert response.status_code == 404


def test_special_tax_filters_and_order(
    client: TestClient, auth_headers: dict, make_casino: Callable[..., Casino]
) -> None:
    first = make_casino(name="Casino A")
    second = make_casino(name="Casino B")
    for day in ("01/03/2024", "10/03/2024", "20/03/2024"):
        client.post("/special-taxes", json=special_tax(first.id, day), headers=auth_headers)
    client.post("/special-taxes", json=special_tax(second.id, "10/03/2024"), headers=auth_headers)

    everything = client.get("/special-taxes", headers=auth_headers).json()
    assert everything["pagination"]["totalItems"] == 4
    dates = [t["date"] for t in everything["data"]]
    assert dates == sorted(dates, reverse=True)

    ranged = client.get(
        "/special-taxes",
        params={"casinoId": first.id, "startDate": "05/03/2024", "endDate": "2024-03-20"},
        headers=auth_headers,
    ).json()
    assert [t["date"] for t in ranged["data"]] == ["2024-03-20", "2024-03-10"]


def test_special_tax_bad_filter_date(client: TestClient, auth_headers: dict) -> None:
    response = client.get("/special-taxes", params={"startDate": "soon"}, headers=auth_headers)
    assert response.status_code == 400


def test_update_special_tax_into_taken_day(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    client.post("/special-taxes", json=special_tax(casino.id, "01/03/2024"), headers=auth_headers)
    other = client.post(
        "/special-taxes", json=special_tax(casino.id, "02/03/2024"), headers=auth_headers
    ).json()
    response = client.patch(
        f"/special-taxes/{other['id']}", json={"date": "01/03/2024"}, headers=auth_headers
    )
    assert response.status_code == 409


def test_create_stamp_tax(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    response = client.post("/stamp-taxes", json=stamp_tax(casino.id), headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["ticketsSold"] == 340


@pytest.mark.parametrize("tickets", [0, -1])
def test_stamp_tax_tickets_positive(
    client: TestClient, auth_headers: dict, casino: Casino, tickets: int
) -> None:
    response = client.post(
        "/stamp-taxes", json=stamp_tax(casino.id, ticketsSold=tickets), headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "ticketsSold"


def test_stamp_taxes_by_casino(
    client: TestClient, auth_headers: dict, make_casino: Callable[..., Casino]
) -> None:
    first = make_casino(name="Casino A")
    second = make_casino(name="Casino B")
    client.post("/stamp-taxes", json=stamp_tax(first.id, "01/03/2024"), headers=auth_headers)
    client.post("/stamp-taxes", json=stamp_tax(first.id, "01/03/2024"), headers=auth_headers)
    client.post("/stamp-taxes", json=stamp_tax(second.id, "02/03/2024"), headers=auth_headers)

    response = client.get(f"/stamp-taxes/casino/{first.id}", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["totalItems"] == 2
    assert {t["casinoId"] for t in body["data"]} == {first.id}

    assert client.get("/stamp-taxes/casino/missing", headers=auth_headers).status_code == 404


def test_update_and_delete_stamp_tax(client: TestClient, auth_headers: dict, casino: Casino) -> None:
    created = client.post("/stamp-taxes", json=stamp_tax(casino.id), headers=auth_headers).json()
    updated = client.patch(
        f"/stamp-taxes/{created['id']}", json={"ticketsSold": 500}, headers=auth_headers
    )
    assert updated.json()["ticketsSold"] == 500
    assert client.delete(f"/stamp-taxes/{created['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/stamp-taxes/{created['id']}", headers=auth_headers).status_code == 404


def test_stamp_taxes_by_casino_with_date_range(
    client: TestClient, auth_headers: dict, make_casino: Callable[..., Casino]
) -> None:
    first = make_casino(name="Casino A")
    second = make_casino(name="Casino B")
    for day in ("01/03/2024", "15/03/2024", "30/03/2024"):
        client.post("/stamp-taxes", json=stamp_tax(first.id, day), headers=auth_headers)
    client.post("/stamp-taxes", json=stamp_tax(second.id, "15/03/2024"), headers=auth_headers)

    # casinoId in the query cannot widen the listing beyond the casino in the path
    response = client.get(
        f"/stamp-taxes/casino/{first.id}",
        params={"casinoId": second.id, "startDate": "10/03/2024", "endDate": "2024-03-30"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert [t["date"] for t in body["data"]] == ["2024-03-30", "2024-03-15"]
    assert {t["casinoId"] for t in body["data"]} == {first.id}
