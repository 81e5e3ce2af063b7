# tests/test_auth.py: login, token refresh and profile
from jose import jwt

from app.db.seed import seed
from tests.conftest import DEVELOPER_PASSWORD, TEST_SETTINGS, get_auth_headers


def _login(client, email, password):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_seeded_admin_can_login(client, db):
    """The bootstrap admin logs in and gets an admin role claim"""
    seed(db, TEST_SETTINGS)

    resp = _login(client, "admin@example.com", "admin123")
    assert resp.status_code == 200
    data = resp.json()["data"]
    claims = jwt.decode(data["token"], TEST_SETTINGS.SECRET_KEY, algorithms=[TEST_SETTINGS.ALGORITHM])
    assert claims["role"] == "admin"
    assert claims["email"] == "admin@example.com"
    assert claims["type"] == "access"
    assert data["user"]["role"] == "admin"
    assert data["refreshToken"]


def test_login_wrong_password(client, admin_user):
    resp = _login(client, admin_user.email, "wrong-password")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Invalid credentials"}
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_login_unknown_email(client):
    resp = _login(client, "nobody@example.com", "whatever1")
    assert resp.status_code == 401


def test_login_validation_error(client):
    resp = _login(client, "not-an-email", "x")
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_refresh_issues_new_access_token(client, developer):
    refresh_token = _login(client, developer.email, DEVELOPER_PASSWORD).json()["data"]["refreshToken"]

    resp = client.post("/auth/refresh", json={"refreshToken": refresh_token})
    assert resp.status_code == 200
    token = resp.json()["data"]["token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == developer.email


def test_refresh_rejects_access_token(client, developer):
    access_token = _login(client, developer.email, DEVELOPER_PASSWORD).json()["data"]["token"]
    resp = client.post("/auth/refresh", json={"refreshToken": access_token})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid refresh token"


def test_refresh_token_is_not_an_access_token(client, developer):
    refresh_token = _login(client, developer.email, DEVELOPER_PASSWORD).json()["data"]["refreshToken"]
    resp = client.get("/auth/me", headers={"Authorization": f"Bearer {refresh_token}"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid token type"


def test_me_requires_token(client):
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json()["error"] == "No token provided"


def test_me_rejects_garbage_token(client):
    resp = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid token"


def test_update_profile_skips_invalid_values(client, developer):
    headers = get_auth_headers(developer)
    resp = client.put("/auth/me", json={"name": "D", "theme": "dark", "avatar_url": "/a.png"}, headers=headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["name"] == "Dev User"
    assert data["theme"] == "dark"
    assert data["avatar_url"] == "/a.png"


def test_update_profile_password(client, developer):
    headers = get_auth_headers(developer)
    client.put("/auth/me", json={"password": "newpass9"}, headers=headers)

    assert _login(client, developer.email, DEVELOPER_PASSWORD).status_code == 401
    assert _login(client, developer.email, "newpass9").status_code == 200


def test_register_requires_admin(client, admin_user, developer):
    payload = {"name": "New Dev", "email": "new@example.com", "password": "secret12"}

    resp = client.post("/auth/register", json=payload, headers=get_auth_headers(developer))
    assert resp.status_code == 403

    resp = client.post("/auth/register", json=payload, headers=get_auth_headers(admin_user))
    assert resp.status_code == 201
    assert resp.json()["data"]["role"] == "developer"
    assert _login(client, "new@example.com", "secret12").status_code == 200

