"""Tests for the tank HTTP API."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import SQLAlchemyError

from hydro_habitat.crud import crud_tank

REEF = {
    "name": "Reef Display",
    "volume_liters": 450,
    "water": "rodi",
    "room": "Living room",
    "rack_location": "Cabinet",
    "inventory_number": "HH-001",
    "notes": "Mixed reef",
}

UNKNOWN_ID = "0b7e8c4a-1d2f-4e3a-9b8c-7d6e5f4a3b2c"


def create(api_client, **overrides):
    response = api_client.post("/api/v1/tanks", json={**REEF, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    def test_ok(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCreate:
    def test_returns_stored_tank(self, api_client):
        tank = create(api_client)
        assert tank["id"]
        assert tank["name"] == "Reef Display"
        assert tank["volume_liters"] == 450
        assert tank["created_at"] is not None
        assert tank["updated_at"] is not None

    def test_water_defaults_to_tap(self, api_client):
        response = api_client.post("/api/v1/tanks", json={"name": "Quarantine", "volume_liters": 40})
        assert response.status_code == 201
        assert response.json()["water"] == "tap"
        assert response.json()["room"] is None

    @pytest.mark.parametrize("body", [
        {"name": "Reef", "volume_liters": 0},
        {"name": "Reef", "volume_liters": -5},
        {"name": "", "volume_liters": 50},
        {"volume_liters": 50},
        {"name": "Reef"},
        {"name": "Reef", "volume_liters": 50, "water": "seawater"},
    ])
    def test_rejects_invalid_body(self, api_client, body):
        response = api_client.post("/api/v1/tanks", json=body)
        assert response.status_code == 422

    def test_database_failure(self, api_client, monkeypatch):
        def broken(db, tank_data):
            raise SQLAlchemyError("disk I/O error")

        monkeypatch.setattr(crud_tank, "create_tank", broken)
        response = api_client.post("/api/v1/tanks", json=REEF)
        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create tank"}


class TestRead:
    def test_empty_list(self, api_client):
        response = api_client.get("/api/v1/tanks")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_contains_created(self, api_client):
        first = create(api_client, name="First")
        second = create(api_client, name="Second")
        ids = [tank["id"] for tank in api_client.get("/api/v1/tanks").json()]
        assert sorted(ids) == sorted([first["id"], second["id"]])

    def test_get_by_id(self, api_client):
        tank = create(api_client)
        response = api_client.get(f"/api/v1/tanks/{tank['id']}")
        assert response.status_code == 200
        assert response.json()["inventory_number"] == "HH-001"

    def test_malformed_id(self, api_client):
        response = api_client.get("/api/v1/tanks/not-a-uuid")
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid UUID format"}

    def test_unknown_id(self, api_client):
        response = api_client.get(f"/api/v1/tanks/{UNKNOWN_ID}")
        assert response.status_code == 404
        assert response.json() == {"detail": "Tank not found"}


class TestUpdate:
    def test_replaces_fields(self, api_client):
        tank = create(api_client)
        body = {**REEF, "volume_liters": 500, "water": "ro", "notes": None}
        response = api_client.put(f"/api/v1/tanks/{tank['id']}", json=body)

        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == tank["id"]
        assert updated["volume_liters"] == 500
        assert updated["water"] == "ro"
        assert updated["notes"] is None
        assert updated["created_at"] == tank["created_at"]

    def test_unknown_id(self, api_client):
        response = api_client.put(f"/api/v1/tanks/{UNKNOWN_ID}", json=REEF)
        assert response.status_code == 404

    def test_malformed_id(self, api_client):
        response = api_client.put("/api/v1/tanks/42", json=REEF)
        assert response.status_code == 400

    def test_rejects_non_positive_volume(self, api_client):
        tank = create(api_client)
        response = api_client.put(f"/api/v1/tanks/{tank['id']}", json={**REEF, "volume_liters": 0})
        assert response.status_code == 422


class TestDelete:
    def test_delete_then_gone(self, api_client):
        tank = create(api_client)
        response = api_client.delete(f"/api/v1/tanks/{tank['id']}")
        assert response.status_code == 204
        assert response.content == b""
        assert api_client.get(f"/api/v1/tanks/{tank['id']}").status_code == 404

    def test_unknown_id(self, api_client):
        response = api_client.delete(f"/api/v1/tanks/{UNKNOWN_ID}")
        assert response.status_code == 404

    def test_malformed_id(self, api_client):
        response = api_client.delete("/api/v1/tanks/abc")
        assert response.status_code == 400


class TestCrud:
    def test_update_refreshes_updated_at(self, db_session):
        from hydro_habitat.schemas.tank import TankCreate, TankUpdate

        db_tank = crud_tank.create_tank(db_session, TankCreate(name="Nano", volume_liters=20))
        created_at = db_tank.created_at
        first_update = db_tank.updated_at

        crud_tank.update_tank(db_session, db_tank, TankUpdate(name="Nano", volume_liters=20))
        assert db_tank.created_at == created_at
        assert db_tank.updated_at >= first_update

    def test_delete_missing_returns_none(self, db_session):
        assert crud_tank.delete_tank(db_session, UNKNOWN_ID) is None
