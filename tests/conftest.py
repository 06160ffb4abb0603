"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from dealership.config import Settings
from dealership.database import Base, Database, get_db
from dealership.main import create_app
from dealership.services.passwords import PasswordHasher
from dealership.services.tokens import TokenService


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


TEST_JWT_SECRET = "test-secret"  # noqa: S105


@pytest.fixture(scope="session")
def test_settings(tmp_path_factory):
    """Settings pointing at a throwaway database."""
    database_url = os.getenv("TEST_DATABASE_URL") or (
        f"sqlite:///{tmp_path_factory.mktemp('db') / 'test.db'}"
    )
    # Minimum bcrypt cost keeps the suite fast
    return Settings(
        _env_file=None,
        database_url=database_url,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        environment="test",
    )


@pytest.fixture(scope="session")
def database(test_settings):
    """Create test database schema once at the start of the test session."""
    db = Database(test_settings.database_url)
    db.init()
    yield db
    db.close()


@pytest.fixture(scope="function", autouse=True)
def db(database):
    """Create a fresh database session for each test with cleanup."""
    session = database.session()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def hasher(test_settings):
    return PasswordHasher(rounds=test_settings.bcrypt_rounds)


@pytest.fixture
def tokens(test_settings):
    return TokenService(test_settings.jwt_secret)


@pytest.fixture
def app_factory(db):
    """Build an app for the given settings whose requests all share the test session."""

    def make_app(settings):
        app = create_app(settings)

        def override_get_db():
            try:
                yield db
            finally:
                pass

        app.dependency_overrides[get_db] = override_get_db
        return app

    return make_app


@pytest.fixture(scope="function")
def client(test_settings, app_factory):
    """Create a test client with database override."""
    app = app_factory(test_settings)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Sign up and log in a user, returning bearer auth headers."""
    email = "test@example.com"
    response = client.post(
        "/api/signup",
        json={"email": email, "password": "testpass123", "confirmPassword": "testpass123"},
    )
    assert response.status_code == 201

    response = client.post("/api/login", json={"email": email, "password": "testpass123"})
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=me.json()["id"], email=email)


@pytest.fixture
def car_payload():
    return {
        "title": "2018 Honda Civic",
        "price": 15000,
        "mileage": 42000,
        "color": "red",
        "imageUrl": "https://images.example.com/cars/civic.jpg",
    }
