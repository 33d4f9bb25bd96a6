"""
Auth Router Tests
"""


class TestRegisterAndLogin:

    def test_register_returns_user_id(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "Coach@Example.com", "password": "hurling123", "name": "Coach"},
        )
        assert response.status_code == 200
        assert response.json()["user_id"]

    def test_duplicate_email_rejected(self, client):
        body = {"email": "coach@example.com", "password": "hurling123"}
        client.post("/auth/register", json=body)
        response = client.post("/auth/register", json={**body, "email": "COACH@example.com"})
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

    def test_short_password_rejected(self, client):
        response = client.post("/auth/register", json={"email": "a@b.com", "password": "short"})
        assert response.status_code == 400

    def test_login_with_wrong_password(self, client):
        client.post("/auth/register", json={"email": "coach@example.com", "password": "hurling123"})
        response = client.post("/auth/login", json={"email": "coach@example.com", "password": "wrongpass1"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_unknown_user(self, client):
        response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "hurling123"})
        assert response.status_code == 401


class TestBearerSessions:

    def test_me_returns_current_user(self, client, auth_headers):
        response = client.get("/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "coach@example.com"

    def test_missing_token_is_401(self, client):
        assert client.get("/auth/me").status_code == 401
        assert client.get("/api/clubs").status_code == 401

    def test_unknown_token_is_401(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-real-token"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid session token"

    def test_logout_revokes_token(self, client, auth_headers):
        assert client.post("/auth/logout", headers=auth_headers).status_code == 200
        assert client.get("/auth/me", headers=auth_headers).status_code == 401
