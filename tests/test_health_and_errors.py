"""API tests for the health endpoint, error envelope and middleware."""

from fastapi.testclient import TestClient

from shiftsync.main import app


class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        response = client.get("/api/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["timestamp"]


class TestErrorEnvelope:
    """Test how errors are rendered."""

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Route not found",
            "path": "/api/nothing-here",
        }

    def test_validation_errors_are_400(self, client, auth_headers):
        response = client.post("/api/workplaces", json={}, headers=auth_headers)

        body = response.json()
        assert response.status_code == 400
        assert body["success"] is False
        assert {error["field"] for error in body["errors"]} >= {"name", "color", "hourlyRate"}

    def test_unhandled_exception(self):
        @app.get("/api/test-boom")
        async def boom():
            raise RuntimeError("boom")

        try:
            client = TestClient(app, raise_server_exceptions=False)
            response = client.get("/api/test-boom")
        finally:
            app.router.routes.pop()

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"


class TestMiddleware:
    """Test request screening and response headers."""

    def test_sql_injection_in_query_rejected(self, client, auth_headers):
        response = client.get(
            "/api/study-sessions",
            params={"subject": "x' OR 1=1"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid input detected"}

    def test_security_headers(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "Strict-Transport-Security" not in response.headers

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/shifts",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
