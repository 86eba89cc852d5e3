from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from logistics_core.config import Settings
from logistics_core.main import create_app
from logistics_core.models.domain import Role
from logistics_core.persistence import in_memory_repositories
from logistics_core.services.clock import fixed_clock

NOW = datetime(2026, 4, 20, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def api_client() -> TestClient:
    config = Settings(_env_file=None, jwt_secret="integration-test-secret-" + "x" * 16, frontend_allowed_origins=())
    app = create_app(config=config, repositories=in_memory_repositories(), clock=fixed_clock(NOW))
    return TestClient(app)


def _login(client: TestClient, email: str) -> dict:
    login = client.post("/api/auth/login", json={"email": email, "password": "pw-" + email})
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


def _register_and_login(client: TestClient, email: str) -> dict:
    body = {"name": email.split("@")[0], "email": email, "password": "pw-" + email}
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    return _login(client, email)


def _admin(client: TestClient, email: str = "root@example.com") -> dict:
    client.app.state.services.users.register("root", email, "pw-" + email, role=Role.ADMIN)
    return _login(client, email)


def _vehicle(client: TestClient, headers: dict, number: str = "TRK-100", capacity: float = 1000) -> dict:
    response = client.post(
        "/api/vehicles",
        json={"vehicle_number": number, "capacity_kg": capacity, "fuel_efficiency": 10},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def _location(client: TestClient, headers: dict, lat: float, lon: float) -> dict:
    response = client.post("/api/locations", json={"latitude": lat, "longitude": lon}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "storage": "memory"}


def test_register_defaults_to_user_role(api_client: TestClient):
    headers = _register_and_login(api_client, "ana@example.com")

    me = api_client.get("/api/auth/me", headers=headers)

    assert me.status_code == 200
    assert me.json()["role"] == "USER"
    assert me.json()["email"] == "ana@example.com"


def test_duplicate_registration_conflicts(api_client: TestClient):
    _register_and_login(api_client, "ana@example.com")
    response = api_client.post(
        "/api/auth/register", json={"name": "Ana", "email": "ana@example.com", "password": "other"}
    )
    assert response.status_code == 409


def test_bad_credentials_and_tokens_are_unauthorized(api_client: TestClient):
    _register_and_login(api_client, "ana@example.com")

    assert api_client.post("/api/auth/login", json={"email": "ana@example.com", "password": "nope"}).status_code == 401
    assert api_client.get("/api/auth/me").status_code == 401
    assert api_client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_shipment_and_route_optimization_flow(api_client: TestClient):
    headers = _register_and_login(api_client, "ops@example.com")
    vehicle = _vehicle(api_client, headers)
    pickup = _location(api_client, headers, 0.0, 0.0)
    drop = _location(api_client, headers, 3.0, 4.0)

    created = api_client.post(
        "/api/shipments",
        json={
            "vehicle_id": vehicle["id"],
            "pickup_location_id": pickup["id"],
            "drop_location_id": drop["id"],
            "weight_kg": 100,
            "scheduled_date": "2026-04-20",
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text
    shipment = created.json()
    assert shipment["vehicle"]["id"] == vehicle["id"]

    optimized = api_client.post(f"/api/routes/optimize/{shipment['id']}", headers=headers)
    assert optimized.status_code == 201, optimized.text
    result = optimized.json()
    assert result["shipment_id"] == shipment["id"]
    assert result["optimized_distance_km"] == pytest.approx(5.0)
    assert result["estimated_fuel_usage_l"] == pytest.approx(0.5)

    fetched = api_client.get(f"/api/routes/results/{result['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["id"] == result["id"]

    listed = api_client.get(f"/api/vehicles/{vehicle['id']}/shipments", headers=headers)
    assert [item["id"] for item in listed.json()] == [shipment["id"]]


def test_shipment_validation_errors_map_to_http(api_client: TestClient):
    headers = _register_and_login(api_client, "ops@example.com")
    vehicle = _vehicle(api_client, headers, capacity=200)
    stop = _location(api_client, headers, 10.0, 10.0)
    body = {
        "vehicle_id": vehicle["id"],
        "pickup_location_id": stop["id"],
        "drop_location_id": stop["id"],
        "weight_kg": 500,
        "scheduled_date": "2026-04-25",
    }

    too_heavy = api_client.post("/api/shipments", json=body, headers=headers)
    assert too_heavy.status_code == 400
    assert "exceeds" in too_heavy.json()["detail"]

    past = api_client.post("/api/shipments", json={**body, "weight_kg": 50, "scheduled_date": "2026-04-19"}, headers=headers)
    assert past.status_code == 400
    assert "past" in past.json()["detail"]

    missing = api_client.post("/api/shipments", json={**body, "vehicle_id": "nope"}, headers=headers)
    assert missing.status_code == 404


def test_invalid_location_and_vehicle_inputs(api_client: TestClient):
    headers = _register_and_login(api_client, "ops@example.com")

    bad_lat = api_client.post("/api/locations", json={"latitude": 91, "longitude": 0}, headers=headers)
    assert bad_lat.status_code == 400
    assert "latitude" in bad_lat.json()["detail"]

    bad_capacity = api_client.post(
        "/api/vehicles",
        json={"vehicle_number": "X", "capacity_kg": 0, "fuel_efficiency": 5},
        headers=headers,
    )
    assert bad_capacity.status_code == 400
    assert "capacity" in bad_capacity.json()["detail"]

    _vehicle(api_client, headers, number="DUP-1")
    duplicate = api_client.post(
        "/api/vehicles",
        json={"vehicle_number": "DUP-1", "capacity_kg": 10, "fuel_efficiency": 5},
        headers=headers,
    )
    assert duplicate.status_code == 409


def test_optimize_unknown_shipment_is_not_found(api_client: TestClient):
    headers = _register_and_login(api_client, "ops@example.com")
    response = api_client.post("/api/routes/optimize/missing", headers=headers)
    assert response.status_code == 404
    assert "shipment" in response.json()["detail"]


def test_role_and_ownership_checks(api_client: TestClient):
    owner = _register_and_login(api_client, "owner@example.com")
    stranger = _register_and_login(api_client, "stranger@example.com")
    admin = _admin(api_client)
    created = api_client.post(
        "/api/auth/users",
        json={"name": "driver", "email": "driver@example.com", "password": "pw-driver@example.com", "role": "DRIVER"},
        headers=admin,
    )
    assert created.status_code == 201, created.text
    driver = _login(api_client, "driver@example.com")
    vehicle = _vehicle(api_client, owner)

    forbidden_role = api_client.post(
        "/api/vehicles",
        json={"vehicle_number": "D-1", "capacity_kg": 10, "fuel_efficiency": 5},
        headers=driver,
    )
    assert forbidden_role.status_code == 403

    not_owner = api_client.get(f"/api/vehicles/{vehicle['id']}/shipments", headers=stranger)
    assert not_owner.status_code == 403

    assert api_client.get("/api/vehicles", headers=stranger).json() == []
    assert len(api_client.get("/api/vehicles", headers=owner).json()) == 1


def test_self_registration_cannot_choose_a_role(api_client: TestClient):
    body = {"name": "eve", "email": "eve@example.com", "password": "pw-eve@example.com", "role": "ADMIN"}

    response = api_client.post("/api/auth/register", json=body)

    assert response.status_code == 201, response.text
    assert response.json()["role"] == "USER"
    me = api_client.get("/api/auth/me", headers=_login(api_client, "eve@example.com"))
    assert me.json()["role"] == "USER"


def test_only_user_managers_can_create_privileged_accounts(api_client: TestClient):
    user = _register_and_login(api_client, "ana@example.com")
    admin = _admin(api_client)
    body = {"name": "boss", "email": "boss@example.com", "password": "pw-boss@example.com", "role": "MANAGER"}

    assert api_client.post("/api/auth/users", json=body, headers=user).status_code == 403
    assert api_client.post("/api/auth/users", json=body).status_code == 401

    created = api_client.post("/api/auth/users", json=body, headers=admin)
    assert created.status_code == 201, created.text
    assert created.json()["role"] == "MANAGER"
    me = api_client.get("/api/auth/me", headers=_login(api_client, "boss@example.com"))
    assert me.json()["role"] == "MANAGER"
