"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
import uuid
from pathlib import Path

import pytest

# Ensure project root is on path when running tests
_project_root = Path(__file__).resolve().parents[1]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from hydro_habitat.catalog.store_client import TankStoreError
from hydro_habitat.schemas.tank import Tank


class FakeTankStore:
    """
    In-memory TankStore that records every call.

    `failures` maps an operation name ("list", "create", "update", "delete")
    to the exception that operation should raise. Setting `gate` to an
    asyncio.Event holds create/update until the event is set.
    """

    def __init__(self, tanks=None):
        self.tanks = list(tanks or [])
        self.calls = []
        self.failures = {}
        self.gate = None

    def call_names(self):
        return [call[0] for call in self.calls]

    def _maybe_fail(self, operation):
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def list_tanks(self):
        self.calls.append(("list",))
        self._maybe_fail("list")
        return [tank.model_copy(deep=True) for tank in self.tanks]

    async def create_tank(self, payload):
        self.calls.append(("create", payload.model_dump(mode="json")))
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_fail("create")
        tank = Tank(id=str(uuid.uuid4()), **payload.model_dump())
        self.tanks.insert(0, tank)
        return tank

    async def update_tank(self, tank_id, payload):
        self.calls.append(("update", tank_id, payload.model_dump(mode="json")))
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_fail("update")
        for i, tank in enumerate(self.tanks):
            if tank.id == tank_id:
                self.tanks[i] = Tank(id=tank_id, created_at=tank.created_at, **payload.model_dump())
                return self.tanks[i]
        raise TankStoreError("Request failed with status code 404", detail="Tank not found", status_code=404)

    async def delete_tank(self, tank_id):
        self.calls.append(("delete", tank_id))
        self._maybe_fail("delete")
        self.tanks = [tank for tank in self.tanks if tank.id != tank_id]


@pytest.fixture
def sample_tanks():
    """Two stored tanks, as the store would return them."""
    return [
        Tank(
            id="7f3c1c1e-2a0b-4d7c-9a57-0c2f5f1d9b11",
            name="Reef Display",
            volume_liters=450,
            water="rodi",
            room="Living room",
            rack_location="Cabinet",
            inventory_number="HH-001",
            notes="Mixed reef, LPS heavy.",
        ),
        Tank(
            id="c0a80121-7e4d-4b6a-8f0a-3d9e2b6c5a22",
            name="Shrimp Cube",
            volume_liters=30,
            water="ro",
            room="Fish room",
            rack_location="Rack A / shelf 2",
        ),
    ]


@pytest.fixture
def fake_store(sample_tanks):
    return FakeTankStore(sample_tanks)


@pytest.fixture
def notices():
    """Collects every message the controller shows to the user."""
    return []


@pytest.fixture
def db_engine(tmp_path):
    """A temporary SQLite database with the schema created."""
    from sqlalchemy import create_engine
    from hydro_habitat.db.database import init_db

    engine = create_engine(
        f"sqlite:///{tmp_path / 'tanks.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    from sqlalchemy.orm import sessionmaker

    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api_client(db_engine):
    """TestClient for the service, wired to the temporary database."""
    from fastapi.testclient import TestClient
    from sqlalchemy.orm import sessionmaker
    from hydro_habitat.db.database import get_db
    from hydro_habitat.main import app

    SessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
