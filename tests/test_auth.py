"""API tests for registration, login and token handling."""

from datetime import timedelta

from conftest import register_user

from shiftsync.security_utils import create_access_token, create_jwt_token


class TestRegister:
    """Test account registration."""

    def test_register_returns_user_and_token(self, client):
        data = register_user(client, email="  New.User@Example.COM ")

        assert data["token"]
        assert data["user"]["email"] == "new.user@example.com"
        assert data["user"]["firstName"] == "Alex"
        assert "password" not in data["user"]

    def test_duplicate_email_rejected(self, client):
        register_user(client)

        response = client.post(
            "/api/auth/register",
            json={
                "email": "ALEX@example.com",
                "password": "another1",
                "firstName": "A",
                "lastName": "B",
            },
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Email already registered"}

    def test_short_password_fails_validation(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "x@example.com", "password": "123", "firstName": "A", "lastName": "B"},
        )

        body = response.json()
        assert response.status_code == 400
        assert body["message"] == "Validation failed"
        assert any(error["field"] == "password" for error in body["errors"])

    def test_names_are_stripped_of_html(self, client):
        response = client.post(
            "/api/auth/register",
            json={
                "email": "x@example.com",
                "password": "secret123",
                "firstName": "<b>Jo</b><script>alert(1)</script>",
                "lastName": "Doe",
            },
        )

        assert response.status_code == 201
        assert response.json()["data"]["user"]["firstName"] == "Jo"


class TestLogin:
    """Test logging in."""

    def test_login_with_valid_credentials(self, client):
        register_user(client)

        response = client.post(
            "/api/auth/login", json={"email": "alex@example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert response.json()["data"]["token"]

    def test_wrong_password(self, client):
        register_user(client)

        response = client.post(
            "/api/auth/login", json={"email": "alex@example.com", "password": "wrong-pass"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email(self, client):
        response = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"}
        )

        assert response.status_code == 401


class TestCurrentUser:
    """Test bearer token authentication."""

    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "alex@example.com"

    def test_missing_token(self, client):
        response = client.get("/api/workplaces")

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"

    def test_garbage_token(self, client):
        response = client.get("/api/workplaces", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token(self, client):
        user = register_user(client)["user"]
        token = create_jwt_token({"userId": user["id"]}, expires_delta=timedelta(seconds=-10))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"
        assert response.headers["X-Token-Expired"] == "true"

    def test_token_for_deleted_user(self, client):
        response = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {create_access_token(999)}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"
