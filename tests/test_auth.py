"""Tests for API key authentication."""

import pytest
from fastapi.testclient import TestClient

from cidrplan.auth import validate_api_key
from cidrplan.main import app

SUBNET_INFO = "/api/v1/ipv4/subnet-info"


class TestNoAuthMode:
    """Test AUTH_METHOD=none (default)."""

    @pytest.fixture
    def client(self, monkeypatch):
        monkeypatch.setenv("AUTH_METHOD", "none")
        return TestClient(app)

    def test_no_auth_allows_all_requests(self, client):
        response = client.post(SUBNET_INFO, json={"network": "10.0.0.0/24"})
        assert response.status_code == 200

    def test_no_auth_ignores_api_key_header(self, client):
        response = client.post(SUBNET_INFO, json={"network": "10.0.0.0/24"}, headers={"X-API-Key": "anything"})
        assert response.status_code == 200


class TestAPIKeyMode:
    """Test AUTH_METHOD=api_key."""

    @pytest.fixture
    def client(self, monkeypatch):
        monkeypatch.setenv("AUTH_METHOD", "api_key")
        monkeypatch.setenv("API_KEYS", "test-key-123,test-key-456")
        return TestClient(app)

    def test_missing_api_key_returns_401(self, client):
        response = client.post(SUBNET_INFO, json={"network": "10.0.0.0/24"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or missing API key"

    def test_invalid_api_key_returns_401(self, client):
        response = client.post(SUBNET_INFO, json={"network": "10.0.0.0/24"}, headers={"X-API-Key": "wrong"})
        assert response.status_code == 401

    def test_valid_api_key_returns_200(self, client):
        response = client.post(SUBNET_INFO, json={"network": "10.0.0.0/24"}, headers={"X-API-Key": "test-key-123"})
        assert response.status_code == 200

    def test_multiple_valid_keys_all_work(self, client):
        for key in ("test-key-123", "test-key-456"):
            response = client.get("/api/v1/kubernetes/tiers", headers={"X-API-Key": key})
            assert response.status_code == 200

    def test_health_endpoint_requires_no_auth(self, client):
        assert client.get("/api/v1/health").status_code == 200

    def test_docs_endpoint_requires_no_auth(self, client):
        assert client.get("/api/v1/docs").status_code == 200

    def test_whitespace_api_key_returns_401(self, client):
        response = client.post(SUBNET_INFO, json={"network": "10.0.0.0/24"}, headers={"X-API-Key": "   "})
        assert response.status_code == 401


class TestValidateApiKey:
    def test_matching_key(self):
        assert validate_api_key("abc", ["xyz", "abc"]) is True

    def test_surrounding_whitespace_stripped(self):
        assert validate_api_key("  abc ", ["abc"]) is True

    def test_case_sensitive(self):
        assert validate_api_key("ABC", ["abc"]) is False

    @pytest.mark.parametrize("key", [None, "", "  "])
    def test_empty_keys_rejected(self, key):
        assert validate_api_key(key, ["abc"]) is False
