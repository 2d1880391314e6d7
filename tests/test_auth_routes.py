"""HTTP tests for the /api/auth endpoints."""

from unittest.mock import AsyncMock, patch

import pytest


def _login(client, email="ada@x.com", password="secret1", **extra):
    return client.post("/api/auth/login", json={"email": email, "password": password, **extra})


def _set_cookie_header(response):
    return response.headers.get("set-cookie", "").lower()


class TestRegister:
    def test_created(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": " Ada ", "email": " ADA@X.com ", "password": "secret1"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert set(body["user"]) == {"id", "name", "email", "createdAt"}
        assert body["user"]["email"] == "ada@x.com"
        assert body["user"]["name"] == "Ada"

    def test_does_not_start_a_session(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Ada", "email": "ada@x.com", "password": "secret1"},
        )

        assert "set-cookie" not in response.headers
        assert client.get("/api/auth/me").status_code == 401

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={"email": "ada@x.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Name, email and password are required."

    def test_non_object_body(self, client):
        response = client.post("/api/auth/register", json=["not", "an", "object"])

        assert response.status_code == 400
        assert "message" in response.json()

    @pytest.mark.parametrize("second_email", ["ada@x.com", "ADA@X.COM", "  Ada@x.com  "])
    def test_duplicate_email(self, client, registered_user, second_email):
        response = client.post(
            "/api/auth/register",
            json={"name": "Other", "email": second_email, "password": "pw"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Email already registered."

    def test_unexpected_failure_is_generic_500(self, client):
        with patch(
            "auth_api.services.user_repository.UserRepository.insert",
            new=AsyncMock(side_effect=RuntimeError("db exploded at 10.0.0.3")),
        ):
            response = client.post(
                "/api/auth/register",
                json={"name": "Ada", "email": "ada@x.com", "password": "secret1"},
            )

        assert response.status_code == 500
        assert response.json()["message"] == "Server error"
        assert "10.0.0.3" not in response.text


class TestLogin:
    def test_round_trip_after_register(self, client):
        client.post(
            "/api/auth/register",
            json={"name": "Ada", "email": " ADA@X.com ", "password": "secret1"},
        )

        response = _login(client, email="ada@x.com")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"]["email"] == "ada@x.com"
        assert set(body["user"]) == {"id", "name", "email"}

    def test_sets_http_only_cookie(self, client, registered_user):
        response = _login(client)

        cookie = _set_cookie_header(response)
        assert cookie.startswith("token=")
        assert "httponly" in cookie
        assert "path=/" in cookie
        assert "max-age=86400" in cookie
        assert "samesite=lax" in cookie
        assert "secure" not in cookie

    def test_remember_sets_seven_day_cookie(self, client, registered_user):
        response = _login(client, remember=True)

        assert "max-age=604800" in _set_cookie_header(response)

    def test_invalid_credentials_are_indistinguishable(self, client, registered_user):
        wrong_password = _login(client, email="user@x.com", password="wrongpass")
        unknown_user = _login(client, email="nosuchuser@x.com", password="anypass")
        wrong_password_known = _login(client, password="wrongpass")

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password_known.status_code == 401
        assert wrong_password.json() == unknown_user.json() == wrong_password_known.json()
        assert unknown_user.json()["message"] == "Invalid credentials"

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "ada@x.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Email and password required"


class TestMe:
    def test_reads_cookie(self, client, registered_user):
        _login(client)

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ada@x.com"
        assert set(response.json()["user"]) == {"id", "name", "email"}

    def test_reads_bearer_header(self, client, registered_user):
        token = _login(client).cookies["token"]
        client.cookies.clear()

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Ada"

    def test_bearer_scheme_is_case_insensitive(self, client, registered_user):
        token = _login(client).cookies["token"]
        client.cookies.clear()

        response = client.get("/api/auth/me", headers={"Authorization": f"bearer {token}"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ada@x.com"

    def test_not_authenticated(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    def test_tampered_token(self, client, registered_user):
        token = _login(client).cookies["token"]
        client.cookies.clear()
        i = token.index(".") + 5
        tampered = token[:i] + ("A" if token[i] != "A" else "B") + token[i + 1:]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {tampered}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_no_password_anywhere(self, client, registered_user):
        login_body = _login(client).text.lower()
        me_body = client.get("/api/auth/me").text.lower()

        for body in (login_body, me_body):
            assert "password" not in body
            assert "secret1" not in body


class TestLogout:
    def test_clears_cookie_with_same_attributes(self, client, registered_user):
        _login(client)

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out"}
        cookie = _set_cookie_header(response)
        assert cookie.startswith("token=")
        assert "max-age=0" in cookie
        assert "httponly" in cookie
        assert "path=/" in cookie
        assert "samesite=lax" in cookie

    def test_then_me_is_not_authenticated(self, client, registered_user):
        _login(client)
        assert client.get("/api/auth/me").status_code == 200

        client.post("/api/auth/logout")
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    def test_idempotent_without_session(self, client):
        assert client.post("/api/auth/logout").status_code == 200
        assert client.post("/api/auth/logout").status_code == 200


class TestAppEndpoints:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "API is running"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_cors_allows_configured_origin_with_credentials(self, client):
        response = client.options(
            "/api/auth/login",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_cors_rejects_other_origins(self, client):
        response = client.get("/", headers={"Origin": "http://evil.example"})

        assert "access-control-allow-origin" not in response.headers

    def test_cors_headers_on_login(self, client, registered_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "ada@x.com", "password": "secret1"},
            headers={"Origin": "http://localhost:5173"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_cors_headers_on_401(self, client):
        response = client.get("/api/auth/me", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 401
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_unhandled_error_is_generic_500_with_cors_headers(self, client):
        with patch(
            "auth_api.services.session_cookie.SessionCookie.extract_token",
            side_effect=RuntimeError("cookie jar on fire"),
        ):
            response = client.get("/api/auth/me", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 500
        assert response.json() == {"message": "Server error", "code": "INTERNAL_ERROR"}
        assert "on fire" not in response.text
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"
