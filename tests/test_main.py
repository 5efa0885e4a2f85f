"""Tests for main FastAPI application routes."""

import pytest
from fastapi.testclient import TestClient

from cidrplan import __version__
from cidrplan.main import app


@pytest.fixture
def client():
    """Create test client with no authentication."""
    return TestClient(app)


def test_root_endpoint(client):
    """Test root endpoint returns API information."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "CIDR Plan API"
    assert data["version"] == __version__
    assert data["docs"] == "/api/v1/docs"
    assert data["openapi"] == "/api/v1/openapi.json"
    assert data["health"] == "/api/v1/health"


def test_health_endpoint(client):
    """Test health endpoint is accessible without auth."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "CIDR Plan API"
    assert data["version"] == __version__


def test_health_ready_endpoint(client):
    """Test health/ready endpoint reports the loaded tiers."""
    response = client.get("/api/v1/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["tiers"] == 5


def test_health_live_endpoint(client):
    response = client.get("/api/v1/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_docs_accessible(client):
    """Test Swagger UI is accessible."""
    response = client.get("/api/v1/docs")
    assert response.status_code == 200
    assert b"Swagger UI" in response.content or b"swagger" in response.content


def test_redoc_accessible(client):
    response = client.get("/api/v1/redoc")
    assert response.status_code == 200


def test_openapi_lists_routes(client):
    """Test OpenAPI schema includes the planner and calculator routes."""
    response = client.get("/api/v1/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/api/v1/ipv4/subnet-info" in paths
    assert "/api/v1/ipv4/tree" in paths
    assert "/api/v1/kubernetes/network-plan" in paths
    assert "/api/v1/kubernetes/tiers/{size}" in paths


def test_internal_error_returns_500(client, monkeypatch):
    """Test that invariant failures surface as 500 with an error code."""
    from cidrplan.generator import AddressAllocator

    monkeypatch.setattr(AddressAllocator, "allocate", lambda self, prefix: f"10.0.0.0/{prefix}")
    response = client.post(
        "/api/v1/kubernetes/network-plan",
        json={"deploymentSize": "standard", "vpcCidr": "10.0.0.0/16"},
    )
    assert response.status_code == 500
    assert response.json()["code"] == "PLAN_ASSEMBLY_INVARIANT_VIOLATION"
