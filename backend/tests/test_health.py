"""
Tests for the health endpoint and request plumbing.
"""

from shared.infrastructure.correlation import resolve_request_id


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["database"]["status"] == "healthy"

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_is_generated(self, client):
        assert client.get("/api/health").headers["X-Request-ID"]

    def test_malformed_request_id_is_replaced(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["X-Request-ID"] != "bad id with spaces"
        assert len(response.headers["X-Request-ID"]) == 36


class TestResolveRequestId:
    def test_keeps_well_formed_ids(self):
        assert resolve_request_id("req-42.a_b") == "req-42.a_b"

    def test_rejects_overlong_ids(self):
        assert resolve_request_id("x" * 65) != "x" * 65

    def test_generates_when_missing(self):
        assert len(resolve_request_id(None)) == 36
