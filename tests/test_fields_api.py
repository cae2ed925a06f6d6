from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.deps import get_field_service
from api.server import app
from application.field_service import FieldService
from infra.db.field_repo import InMemoryFieldRepository


@pytest.fixture
def client():
    service = FieldService(InMemoryFieldRepository())
    app.dependency_overrides[get_field_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_create_and_get_field(client) -> None:
    r = client.post("/v1/tables/t1/fields", json={"name": " Email ", "type": "TEXT"})
    assert r.status_code == 200
    created = r.json()
    assert created["name"] == "Email"
    assert created["type"] == "TEXT"
    assert created["tableId"] == "t1"

    r = client.get(f"/v1/tables/t1/fields/{created['id']}")
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]


def test_list_fields_is_scoped_to_table(client) -> None:
    client.post("/v1/tables/t1/fields", json={"name": "Amount", "type": "NUMBER"})
    client.post("/v1/tables/t1/fields", json={"name": "Due", "type": "DATE"})
    client.post("/v1/tables/t2/fields", json={"name": "Other", "type": "TEXT"})

    r = client.get("/v1/tables/t1/fields")
    assert r.status_code == 200
    assert [f["name"] for f in r.json()] == ["Amount", "Due"]
    assert client.get("/v1/tables/t3/fields").json() == []


def test_delete_field(client) -> None:
    field_id = client.post("/v1/tables/t1/fields", json={"name": "Amount", "type": "NUMBER"}).json()["id"]

    r = client.delete(f"/v1/tables/t1/fields/{field_id}")
    assert r.status_code == 200
    assert r.json() == {}
    assert client.get(f"/v1/tables/t1/fields/{field_id}").status_code == 404
    assert client.delete(f"/v1/tables/t1/fields/{field_id}").status_code == 404


def test_field_from_another_table_is_not_found(client) -> None:
    field_id = client.post("/v1/tables/t1/fields", json={"name": "Amount", "type": "NUMBER"}).json()["id"]

    assert client.get(f"/v1/tables/t2/fields/{field_id}").status_code == 404


def test_create_field_validates_body(client) -> None:
    assert client.post("/v1/tables/t1/fields", json={"name": "", "type": "TEXT"}).status_code == 422
    assert client.post("/v1/tables/t1/fields", json={"name": "   ", "type": "TEXT"}).status_code == 422
    assert client.get("/v1/tables/t1/fields").json() == []
    assert client.post("/v1/tables/t1/fields", json={"name": "Flag", "type": "BOOLEAN"}).status_code == 422
