# tests/test_columns.py: column CRUD and reordering
from tests.conftest import create_task, get_auth_headers


def _column_ids(client, user, project_id):
    resp = client.get(f"/columns/by-project/{project_id}", headers=get_auth_headers(user))
    assert resp.status_code == 200
    columns = resp.json()["data"]
    assert [c["position"] for c in columns] == list(range(len(columns)))
    return [c["id"] for c in columns]


def test_create_column_appends(client, developer, project, columns):
    resp = client.post("/columns", json={"projectId": project.id, "name": "  Blocked "}, headers=get_auth_headers(developer))
    assert resp.status_code == 201
    column = resp.json()["data"]
    assert column["name"] == "Blocked"
    assert column["position"] == 5


def test_create_column_requires_membership(client, outsider, project):
    resp = client.post("/columns", json={"projectId": project.id, "name": "Nope"}, headers=get_auth_headers(outsider))
    assert resp.status_code == 403


def test_reorder_columns(client, developer, project, columns):
    ids = [c.id for c in columns]
    new_order = [ids[2], ids[0], ids[1], ids[4], ids[3]]
    payload = {
        "projectId": project.id,
        "columnOrder": [{"id": column_id, "position": index} for index, column_id in enumerate(new_order)],
    }

    resp = client.post("/columns/reorder", json=payload, headers=get_auth_headers(developer))
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()["data"]] == new_order
    assert _column_ids(client, developer, project.id) == new_order


def test_reorder_rejects_columns_of_other_project(client, admin_user, project, columns, other_project):
    foreign = other_project.columns[0].id
    payload = {"projectId": project.id, "columnOrder": [{"id": foreign}, {"id": columns[0].id}]}

    resp = client.post("/columns/reorder", json=payload, headers=get_auth_headers(admin_user))
    assert resp.status_code == 400
    assert resp.json()["details"] == {"unknown_ids": [foreign]}
    assert _column_ids(client, admin_user, project.id) == [c.id for c in columns]


def test_update_column_name_and_position(client, developer, project, columns):
    headers = get_auth_headers(developer)
    resp = client.put(f"/columns/{columns[4].id}", json={"name": "Done", "position": 0}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Done"
    assert resp.json()["data"]["position"] == 0

    ids = [c.id for c in columns]
    assert _column_ids(client, developer, project.id) == [ids[4], ids[0], ids[1], ids[2], ids[3]]


def test_delete_column_compacts_and_removes_tasks(client, developer, project, columns):
    headers = get_auth_headers(developer)
    task = create_task(client, developer, project.id, columns[1].id, "Goes away")

    resp = client.delete(f"/columns/{columns[1].id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Column deleted"}

    ids = [c.id for c in columns]
    assert _column_ids(client, developer, project.id) == [ids[0], ids[2], ids[3], ids[4]]
    assert client.get(f"/tasks/{task['id']}", headers=headers).status_code == 404


def test_missing_column(client, admin_user):
    resp = client.put("/columns/999", json={"name": "x"}, headers=get_auth_headers(admin_user))
    assert resp.status_code == 404
    assert resp.json()["error"] == "Column not found"
