import os
from datetime import datetime

# Configure the app for tests before anything imports barbershop.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@admin.com"
os.environ["ADMIN_PASSWORD"] = "admin111"
os.environ["DATE_ORDER"] = "DMY"
os.environ["TIME_PASSTHROUGH"] = "true"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from barbershop.database import Base, SessionLocal, engine  # noqa: E402
from barbershop.main import app  # noqa: E402
from barbershop.shared.clock import get_clock  # noqa: E402

# Monday 17 March 2025, 12:10 local time
NOW = datetime(2025, 3, 17, 12, 10)
TODAY = "2025-03-17"
TOMORROW = "2025-03-18"  # Tuesday
SUNDAY = "2025-03-23"


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/auth/login", json={"email": "admin@admin.com", "password": "admin111"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def book(client, auth_headers):
    """Book a reservation through the API and return the response"""

    def _book(client_name="John Smith", date=TOMORROW, time="10:00 AM", **extra):
        payload = {"clientName": client_name, "date": date, "time": time, "service": "Haircut", **extra}
        return client.post("/reservations", json=payload, headers=auth_headers)

    return _book
