# tests/test_users.py: admin user management
from app.db.models.board import ProjectMember, Task
from tests.conftest import create_task, get_auth_headers


def test_list_users_requires_admin(client, admin_user, developer):
    assert client.get("/users", headers=get_auth_headers(developer)).status_code == 403

    resp = client.get("/users", headers=get_auth_headers(admin_user))
    assert resp.status_code == 200
    assert [u["email"] for u in resp.json()["data"]] == ["admin@example.com", "dev@example.com"]
    assert "password_hash" not in resp.json()["data"][0]


def test_create_user(client, admin_user):
    resp = client.post("/users", json={
        "name": "Tester", "email": "tester@example.com", "password": "abc123", "role": "admin",
    }, headers=get_auth_headers(admin_user))
    assert resp.status_code == 201
    assert resp.json()["data"]["role"] == "admin"


def test_create_user_duplicate_email(client, admin_user, developer):
    resp = client.post("/users", json={
        "name": "Twin", "email": developer.email, "password": "abc123",
    }, headers=get_auth_headers(admin_user))
    assert resp.status_code == 409


def test_create_user_weak_password(client, admin_user):
    resp = client.post("/users", json={
        "name": "Weak", "email": "weak@example.com", "password": "abcdef",
    }, headers=get_auth_headers(admin_user))
    assert resp.status_code == 400


def test_update_user(client, admin_user, developer):
    resp = client.put(f"/users/{developer.id}", json={"name": "Renamed", "role": "admin"},
                      headers=get_auth_headers(admin_user))
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Renamed"
    assert resp.json()["data"]["role"] == "admin"

    missing = client.put("/users/999", json={"name": "Ghost"}, headers=get_auth_headers(admin_user))
    assert missing.status_code == 404


def test_admin_accounts_cannot_be_deleted(client, admin_user):
    resp = client.delete(f"/users/{admin_user.id}", headers=get_auth_headers(admin_user))
    assert resp.status_code == 400
    assert resp.json()["error"] == "Admin accounts cannot be deleted"


def test_delete_user_clears_assignments(db, client, admin_user, developer, project, columns):
    developer_id = developer.id
    task = create_task(client, admin_user, project.id, columns[0].id, "Assigned", assignee_id=developer.id)

    resp = client.delete(f"/users/{developer_id}", headers=get_auth_headers(admin_user))
    assert resp.status_code == 200

    db.expire_all()
    assert db.query(Task).filter(Task.id == task["id"]).one().assignee_id is None
    assert db.query(ProjectMember).filter(ProjectMember.user_id == developer_id).count() == 0


def test_update_user_rejects_blank_name(client, admin_user, developer):
    resp = client.put(f"/users/{developer.id}", json={"name": "   "}, headers=get_auth_headers(admin_user))
    assert resp.status_code == 400
    assert resp.json()["error"] == "name cannot be empty"

    users = client.get("/users", headers=get_auth_headers(admin_user)).json()["data"]
    assert [u["name"] for u in users if u["email"] == developer.email] == ["Dev User"]
