import base64
import io
import os
import uuid

# Point the app at a throwaway in-memory database BEFORE importing it.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SMTP_HOST"] = ""
os.environ.setdefault("SECRET_KEY", "test-access-secret")
os.environ.setdefault("REFRESH_SECRET_KEY", "test-refresh-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image as PILImage  # noqa: E402

from immoauto.core.database import Base, SessionLocal, engine  # noqa: E402
from immoauto.main import app  # noqa: E402
from immoauto.models.user import User, UserRole  # noqa: E402

PASSWORD = "Secret123"

PROPERTY = {
    "title": "Bright flat downtown",
    "description": "A bright two bedroom flat close to shops and transport.",
    "price": 250000,
    "address": "12 rue de la Paix",
    "city": "Paris",
    "zipCode": "75002",
    "surface": 80,
    "rooms": 4,
    "bedrooms": 2,
    "bathrooms": 1,
    "type": "APARTMENT",
    "listingType": "SALE",
    "features": ["Balcony", "Parking"],
}

VEHICLE = {
    "title": "Renault Clio petrol",
    "description": "Well maintained city car with full service history.",
    "price": 12500,
    "brand": "Renault",
    "model": "Clio",
    "year": 2020,
    "mileage": 45000,
    "fuelType": "PETROL",
    "transmission": "MANUAL",
    "color": "White",
    "doors": 5,
    "seats": 5,
    "type": "CAR",
    "listingType": "SALE",
    "city": "Lyon",
}


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Register a user; returns ``(user_id, auth_headers)``."""

    def _make(name: str = "Test User", email: str | None = None, password: str = PASSWORD):
        email = email or f"{uuid.uuid4().hex[:10]}@example.com"
        r = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
        assert r.status_code == 201, r.text
        data = r.json()["data"]
        return data["user"]["id"], {"Authorization": f"Bearer {data['accessToken']}"}

    return _make


@pytest.fixture
def make_admin(make_user, db):
    def _make(name: str = "Admin"):
        user_id, headers = make_user(name)
        user = db.get(User, user_id)
        user.role = UserRole.admin
        db.commit()
        return user_id, headers

    return _make


@pytest.fixture
def make_property(client):
    """Create a property owned by ``headers``; ACTIVE unless ``status`` says otherwise."""

    def _make(headers, status: str | None = "ACTIVE", **overrides):
        r = client.post("/api/properties", json={**PROPERTY, **overrides}, headers=headers)
        assert r.status_code == 201, r.text
        prop = r.json()["data"]
        if status and status != "DRAFT":
            r = client.patch(f"/api/properties/{prop['id']}/status", json={"status": status}, headers=headers)
            assert r.status_code == 200, r.text
            prop = r.json()["data"]
        return prop

    return _make


@pytest.fixture
def make_vehicle(client):
    def _make(headers, status: str | None = "ACTIVE", **overrides):
        r = client.post("/api/vehicles", json={**VEHICLE, **overrides}, headers=headers)
        assert r.status_code == 201, r.text
        vehicle = r.json()["data"]
        if status and status != "DRAFT":
            r = client.patch(f"/api/vehicles/{vehicle['id']}/status", json={"status": status}, headers=headers)
            assert r.status_code == 200, r.text
            vehicle = r.json()["data"]
        return vehicle

    return _make


def encode_image(image_format: str = "PNG") -> str:
    buffer = io.BytesIO()
    PILImage.new("RGB", (4, 4), (200, 30, 30)).save(buffer, format=image_format)
    return base64.b64encode(buffer.getvalue()).decode()


@pytest.fixture
def png_b64():
    return encode_image("PNG")


@pytest.fixture
def property_payload():
    return dict(PROPERTY)


@pytest.fixture
def jpeg_b64():
    return encode_image("JPEG")
