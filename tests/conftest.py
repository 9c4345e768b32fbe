import os

# Settings are read once at import time, so the environment has to be in place
# before anything under src is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.database import Base, SessionLocal, engine
from src.main import app
from src.models import Bus


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_bus():
    def _make_bus(**overrides):
        values = {
            "name": "Express Travels",
            "from_location": "CityA",
            "to_location": "CityB",
            "departure_time": datetime(2024, 6, 1, 9, 30),
            "total_seats": 40,
            "available_seats": 40,
            "price": Decimal("500.00"),
        }
        values.update(overrides)
        db = SessionLocal()
        try:
            bus = Bus(**values)
            db.add(bus)
            db.commit()
            return bus.id
        finally:
            db.close()
    return _make_bus


@pytest.fixture
def fetch():
    """Read a fresh row by primary key, detached from any session"""
    def _fetch(model, pk):
        db = SessionLocal()
        try:
            row = db.query(model).filter(model.id == pk).first()
            if row is not None:
                db.expunge(row)
            return row
        finally:
            db.close()
    return _fetch


@pytest.fixture
def booking_payload():
    def _payload(bus_id, seats, **overrides):
        payload = {
            "busId": bus_id,
            "seats": seats,
            "totalAmount": 500 * len(seats),
            "name": "Asha Rao",
            "email": "asha@example.com",
            "phone": "9876543210",
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def registered_user(client):
    payload = {
        "fullName": "Asha Rao",
        "email": "asha@example.com",
        "password": "s3cret-pass",
        "phone": "9876543210",
        "gender": "female",
        "dateOfBirth": "1994-03-12",
    }
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201
    return {**payload, "id": response.json()["userId"]}


@pytest.fixture
def auth_headers(client, registered_user):
    response = client.post("/api/auth/login", json={
        "email": registered_user["email"],
        "password": registered_user["password"],
    })
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
