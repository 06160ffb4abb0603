"""API endpoint tests."""

import pytest
from fastapi.testclient import TestClient

from dealership.api.dependencies import get_inventory_repository
from dealership.exceptions import InfrastructureError


@pytest.fixture
def public_client(test_settings, app_factory):
    """Client for a deployment that allows anonymous inventory writes."""
    settings = test_settings.model_copy(update={"inventory_writes_require_auth": False})
    app = app_factory(settings)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add_car(client, headers, payload):
    response = client.post("/api/inventory", headers=headers, json=payload)
    assert response.status_code == 200
    return response.json()["car"]


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# Auth


def test_signup_login_flow(client):
    """Sign up, log in, then fail a login with the wrong password."""
    response = client.post(
        "/api/signup", json={"email": "a@x.com", "password": "pw1", "confirmPassword": "pw1"}
    )
    assert response.status_code == 201
    assert response.json() == {"message": "User created successfully!"}

    response = client.post("/api/login", json={"email": "a@x.com", "password": "pw1"})
    assert response.status_code == 200
    assert response.json()["token"]
    assert response.json()["tokenType"] == "bearer"

    response = client.post("/api/login", json={"email": "a@x.com", "password": "wrong"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid credentials"


def test_signup_does_not_return_token(client):
    response = client.post(
        "/api/signup", json={"email": "b@x.com", "password": "pw", "confirmPassword": "pw"}
    )
    assert "token" not in response.json()


def test_signup_password_mismatch(client):
    response = client.post(
        "/api/signup", json={"email": "a@x.com", "password": "pw1", "confirmPassword": "pw2"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Passwords do not match"


def test_signup_duplicate_email(client, auth_headers):
    """Test signup with duplicate email fails."""
    response = client.post(
        "/api/signup",
        json={"email": auth_headers.email, "password": "other", "confirmPassword": "other"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Email already in use"


@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@x.com", "password": "pw"},
        {"email": "not-an-email", "password": "pw", "confirmPassword": "pw"},
        {"email": "a@x.com", "password": "pw", "confirmPassword": "pw", "role": "admin"},
    ],
)
def test_signup_invalid_body(client, body):
    response = client.post("/api/signup", json=body)
    assert response.status_code == 400
    assert response.json()["errors"]


def test_signup_rejects_password_over_72_bytes(client):
    password = "a" * 72 + "X"
    response = client.post(
        "/api/signup", json={"email": "a@x.com", "password": password, "confirmPassword": password}
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "password"]

    response = client.post("/api/login", json={"email": "a@x.com", "password": "a" * 72})
    assert response.status_code == 400
    assert response.json()["message"] == "User not found"


def test_login_unknown_user(client):
    response = client.post("/api/login", json={"email": "ghost@example.com", "password": "pw"})
    assert response.status_code == 400
    assert response.json()["message"] == "User not found"


def test_get_current_user(client, auth_headers):
    """Test getting current user information."""
    response = client.get("/api/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"id": auth_headers.user_id, "email": auth_headers.email}


def test_get_current_user_requires_token(client):
    response = client.get("/api/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_get_current_user_bad_token(client):
    response = client.get("/api/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token is malformed"


# Inventory


def test_add_car(client, auth_headers, car_payload):
    response = client.post("/api/inventory", headers=auth_headers, json=car_payload)
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Car added successfully!"
    assert data["car"]["id"]
    assert data["car"]["title"] == car_payload["title"]
    assert data["car"]["imageUrl"] == car_payload["imageUrl"]
    assert "image_url" not in data["car"]


def test_add_car_requires_token(client, car_payload):
    response = client.post("/api/inventory", json=car_payload)
    assert response.status_code == 401
    assert client.get("/api/inventory").json() == []


def test_add_car_missing_field(client, auth_headers, car_payload):
    del car_payload["color"]
    response = client.post("/api/inventory", headers=auth_headers, json=car_payload)
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "color"]
    assert client.get("/api/inventory").json() == []


@pytest.mark.parametrize("price", ["Infinity", "NaN", True])
def test_add_car_rejects_non_numeric_price(client, auth_headers, car_payload, price):
    response = client.post(
        "/api/inventory", headers=auth_headers, json={**car_payload, "price": price}
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "price"]
    assert client.get("/api/inventory").json() == []


def test_add_car_returns_image_url_unchanged(client, auth_headers, car_payload):
    image_url = "https://Example.com"
    car = add_car(client, auth_headers, {**car_payload, "imageUrl": image_url})
    assert car["imageUrl"] == image_url
    assert client.get(f"/api/inventory/{car['id']}").json()["imageUrl"] == image_url


def test_public_writes_when_configured(public_client, car_payload):
    """Anonymous writes are allowed when the deployment opts out of auth."""
    car = add_car(public_client, {}, car_payload)

    response = public_client.put(f"/api/inventory/{car['id']}", json={"price": 1})
    assert response.status_code == 200

    response = public_client.delete(f"/api/inventory/{car['id']}")
    assert response.status_code == 200


def test_get_cars_with_filters(client, auth_headers, car_payload):
    add_car(client, auth_headers, car_payload)
    add_car(client, auth_headers, {**car_payload, "title": "Blue Van", "color": "blue"})
    add_car(client, auth_headers, {**car_payload, "title": "Pricey", "price": 45000})

    response = client.get("/api/inventory")
    assert response.status_code == 200
    assert len(response.json()) == 3

    response = client.get("/api/inventory", params={"price": 20000, "color": "red"})
    assert [car["title"] for car in response.json()] == [car_payload["title"]]

    response = client.get("/api/inventory", params={"mileage": 1000})
    assert response.json() == []


def test_get_cars_ignores_empty_filters(client, auth_headers, car_payload):
    """The inventory form sends empty strings for unused filters."""
    add_car(client, auth_headers, car_payload)
    response = client.get("/api/inventory", params={"price": "", "mileage": "", "color": ""})
    assert response.status_code == 200
    assert len(response.json()) == 1


def test_get_cars_bad_filter(client):
    response = client.get("/api/inventory", params={"price": "cheap"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid inventory filter"


def test_get_car(client, auth_headers, car_payload):
    car = add_car(client, auth_headers, car_payload)
    response = client.get(f"/api/inventory/{car['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == car_payload["title"]


def test_update_car(client, auth_headers, car_payload):
    car = add_car(client, auth_headers, car_payload)

    response = client.put(
        f"/api/inventory/{car['id']}", headers=auth_headers, json={"mileage": 50000}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Car updated successfully!"
    assert data["car"]["mileage"] == 50000
    assert data["car"]["price"] == car_payload["price"]
    assert data["car"]["color"] == car_payload["color"]


def test_update_missing_car(client, auth_headers):
    response = client.put("/api/inventory/9999", headers=auth_headers, json={"price": 1})
    assert response.status_code == 404
    assert response.json()["message"] == "Car not found"


def test_update_requires_token(client, auth_headers, car_payload):
    car = add_car(client, auth_headers, car_payload)
    response = client.put(f"/api/inventory/{car['id']}", json={"price": 1})
    assert response.status_code == 401


def test_delete_car(client, auth_headers, car_payload):
    car = add_car(client, auth_headers, car_payload)

    response = client.delete(f"/api/inventory/{car['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Car deleted successfully!"

    response = client.delete(f"/api/inventory/{car['id']}", headers=auth_headers)
    assert response.status_code == 404


def test_store_failure_returns_generic_500(client):
    class BrokenInventory:
        def list(self, filters):
            raise InfrastructureError("Failed to fetch cars")

    client.app.dependency_overrides[get_inventory_repository] = lambda: BrokenInventory()

    response = client.get("/api/inventory")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch cars"}
