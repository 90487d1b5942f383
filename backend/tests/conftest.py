"""Pytest fixtures — file-backed SQLite database, recreated for every test."""
from datetime import datetime, timezone, timedelta

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from rsvp_planner.database import Base, get_db
from rsvp_planner.main import app

# Import all models so they register with Base.metadata
from rsvp_planner.models.venue import Venue                                  # noqa: F401
from rsvp_planner.models.event import Event                                  # noqa: F401
from rsvp_planner.models.guest import Guest, EventGuest                      # noqa: F401
from rsvp_planner.models.guest_group import GuestGroup, GuestGroupMember        # noqa: F401
from rsvp_planner.models.rsvp import RSVP                                    # noqa: F401
from rsvp_planner.models.logistics import LogisticsItem, LogisticsAssignment  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create records via the API, return the unwrapped "data" payload
# ---------------------------------------------------------------------------
def create_test_event(client: TestClient, name: str = "Test Event", **fields) -> dict:
    """Helper — POST /api/events, starting tomorrow and lasting four hours."""
    start = datetime.now(timezone.utc) + timedelta(days=1)
    payload = {
        "name": name,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(hours=4)).isoformat(),
    }
    payload.update(fields)
    resp = client.post("/api/events/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def create_test_guest(client: TestClient, first_name: str = "Guest", **fields) -> dict:
    """Helper — POST /api/guests."""
    resp = client.post("/api/guests/", json={"first_name": first_name, **fields})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def invite(client: TestClient, event_id: str, guest_ids: list) -> list:
    """Helper — POST /api/events/{id}/guests."""
    resp = client.post(f"/api/events/{event_id}/guests", json={"guest_ids": guest_ids})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def submit_rsvp(client: TestClient, event_id: str, guest_id: str,
                status: str = "attending", plus_ones: int = 0) -> dict:
    """Helper — POST /api/rsvps."""
    resp = client.post("/api/rsvps/", json={
        "event_id": event_id,
        "guest_id": guest_id,
        "status": status,
        "plus_ones": plus_ones,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def create_test_logistics(client: TestClient, event_id: str, name: str = "Shuttle",
                          capacity=None, logistics_type: str = "transportation",
                          guest_ids: list = None) -> dict:
    """Helper — POST /api/logistics."""
    resp = client.post("/api/logistics/", json={
        "event_id": event_id,
        "name": name,
        "logistics_type": logistics_type,
        "capacity": capacity,
        "guest_ids": guest_ids or [],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
