# tests/test_tasks.py: task CRUD, board view and moves
from app.core import history
from app.db.models.board.task_history import TASK_CREATED, TASK_DELETED, TASK_MOVED, TASK_UPDATED
from tests.conftest import column_task_ids, create_task, get_auth_headers


def _move(client, user, task_id, dest_column_id, dest_index, **extra):
    return client.post("/tasks/move", json={
        "taskId": task_id, "destColumnId": dest_column_id, "destIndex": dest_index, **extra,
    }, headers=get_auth_headers(user))


def test_create_task_defaults(client, developer, project, columns):
    task = create_task(client, developer, project.id, columns[0].id, "  First  ")
    assert task["title"] == "First"
    assert task["priority"] == "medium"
    assert task["description"] == ""
    assert task["position"] == 0
    assert task["seq"] == 1
    assert task["project_code"] == "DEMO"


def test_seq_is_monotonic_per_project(client, admin_user, developer, project, columns, other_project):
    seqs = [create_task(client, developer, project.id, columns[i % 2].id, f"T{i}")["seq"] for i in range(3)]
    assert seqs == [1, 2, 3]

    other = create_task(client, admin_user, other_project.id, other_project.columns[0].id, "Elsewhere")
    assert other["seq"] == 1


def test_seq_is_not_reused_after_middle_delete(client, developer, project, columns):
    first = create_task(client, developer, project.id, columns[0].id, "A")
    create_task(client, developer, project.id, columns[0].id, "B")
    client.delete(f"/tasks/{first['id']}", headers=get_auth_headers(developer))

    assert create_task(client, developer, project.id, columns[0].id, "C")["seq"] == 3


def test_create_task_in_column_of_other_project(client, admin_user, project, other_project):
    resp = client.post("/tasks", json={
        "projectId": project.id, "columnId": other_project.columns[0].id, "title": "Mismatch",
    }, headers=get_auth_headers(admin_user))
    assert resp.status_code == 400


def test_create_task_validation(client, developer, project, columns):
    resp = client.post("/tasks", json={
        "projectId": project.id, "columnId": columns[0].id, "title": "Points", "story_points": 101,
    }, headers=get_auth_headers(developer))
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_board_lists_every_column(client, developer, project, columns):
    create_task(client, developer, project.id, columns[2].id, "Only")

    resp = client.get(f"/tasks/by-project/{project.id}", headers=get_auth_headers(developer))
    board = resp.json()["data"]
    assert [c["id"] for c in board["columns"]] == [c.id for c in columns]
    assert sorted(board["tasksByColumn"]) == sorted(str(c.id) for c in columns)
    assert [t["title"] for t in board["tasksByColumn"][str(columns[2].id)]] == ["Only"]


def test_board_requires_membership(client, outsider, project):
    resp = client.get(f"/tasks/by-project/{project.id}", headers=get_auth_headers(outsider))
    assert resp.status_code == 403


def test_demo_move_scenario(db, client, developer, project, columns):
    todo, in_progress = columns[0], columns[1]
    t1 = create_task(client, developer, project.id, todo.id, "T1")
    t2 = create_task(client, developer, project.id, todo.id, "T2")

    resp = _move(client, developer, t1["id"], in_progress.id, 0, sourceColumnId=todo.id, sourceIndex=0)
    assert resp.status_code == 200
    moved = resp.json()["data"]
    assert moved["column_id"] == in_progress.id
    assert moved["position"] == 0

    assert column_task_ids(client, developer, project.id, todo.id) == [t2["id"]]
    assert column_task_ids(client, developer, project.id, in_progress.id) == [t1["id"]]
    remaining = client.get(f"/tasks/{t2['id']}", headers=get_auth_headers(developer)).json()["data"]
    assert remaining["position"] == 0

    actions = [e.action for e in history.list_for_task(db, t1["id"])]
    assert actions == [TASK_MOVED, TASK_CREATED]


def test_move_to_current_slot_is_noop(db, client, developer, project, columns):
    tasks = [create_task(client, developer, project.id, columns[0].id, title)["id"] for title in "ABC"]

    resp = _move(client, developer, tasks[1], columns[0].id, 1)
    assert resp.status_code == 200
    assert column_task_ids(client, developer, project.id, columns[0].id) == tasks
    assert [e.action for e in history.list_for_task(db, tasks[1])] == [TASK_CREATED]


def test_move_within_column(client, developer, project, columns):
    tasks = [create_task(client, developer, project.id, columns[0].id, title)["id"] for title in "ABCD"]

    _move(client, developer, tasks[0], columns[0].id, 2)
    assert column_task_ids(client, developer, project.id, columns[0].id) == [tasks[1], tasks[2], tasks[0], tasks[3]]


def test_move_into_middle_of_other_column(client, developer, project, columns):
    source = [create_task(client, developer, project.id, columns[0].id, t)["id"] for t in ("A", "B", "C")]
    dest = [create_task(client, developer, project.id, columns[3].id, t)["id"] for t in ("X", "Y")]

    resp = _move(client, developer, source[1], columns[3].id, 1)
    assert resp.status_code == 200

    assert column_task_ids(client, developer, project.id, columns[0].id) == [source[0], source[2]]
    assert column_task_ids(client, developer, project.id, columns[3].id) == [dest[0], source[1], dest[1]]


def test_move_to_column_of_other_project_is_rejected(client, admin_user, project, columns, other_project):
    task = create_task(client, admin_user, project.id, columns[0].id, "Stay")

    resp = _move(client, admin_user, task["id"], other_project.columns[0].id, 0)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Cannot move a task to a column of another project"
    assert column_task_ids(client, admin_user, project.id, columns[0].id) == [task["id"]]


def test_move_to_missing_column(client, developer, project, columns):
    task = create_task(client, developer, project.id, columns[0].id, "Lost")
    resp = _move(client, developer, task["id"], 9999, 0)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Target column not found"


def test_update_records_changed_fields_only(db, client, developer, admin_user, project, columns):
    task = create_task(client, developer, project.id, columns[0].id, "Edit me", tag="api")

    resp = client.put(f"/tasks/{task['id']}", json={
        "title": "Edit me", "priority": "high", "assignee_id": admin_user.id, "tag": "api",
    }, headers=get_auth_headers(developer))
    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["assignee_name"] == "Admin"

    entries = history.list_for_task(db, task["id"])
    assert entries[0].action == TASK_UPDATED
    assert entries[0].payload == {"changes": [
        {"field": "priority", "oldValue": "medium", "newValue": "high"},
        {"field": "assignee_id", "oldValue": None, "newValue": admin_user.id},
    ]}


def test_update_without_changes_records_nothing(db, client, developer, project, columns):
    task = create_task(client, developer, project.id, columns[0].id, "Same")
    client.put(f"/tasks/{task['id']}", json={"title": "Same"}, headers=get_auth_headers(developer))
    assert [e.action for e in history.list_for_task(db, task["id"])] == [TASK_CREATED]


def test_update_with_unknown_assignee(client, developer, project, columns):
    task = create_task(client, developer, project.id, columns[0].id, "Who")
    resp = client.put(f"/tasks/{task['id']}", json={"assignee_id": 999}, headers=get_auth_headers(developer))
    assert resp.status_code == 400


def test_delete_task_compacts_column(client, developer, project, columns):
    headers = get_auth_headers(developer)
    tasks = [create_task(client, developer, project.id, columns[0].id, t)["id"] for t in "ABC"]

    resp = client.delete(f"/tasks/{tasks[0]}", headers=headers)
    assert resp.status_code == 200

    assert column_task_ids(client, developer, project.id, columns[0].id) == tasks[1:]
    positions = [client.get(f"/tasks/{t}", headers=headers).json()["data"]["position"] for t in tasks[1:]]
    assert positions == [0, 1]
    assert client.get(f"/tasks/{tasks[0]}", headers=headers).status_code == 404


def test_delete_task_writes_audit_log(client, developer, project, columns, caplog):
    task = create_task(client, developer, project.id, columns[0].id, "Audit")
    with caplog.at_level("INFO", logger="app.audit"):
        client.delete(f"/tasks/{task['id']}", headers=get_auth_headers(developer))
    assert any(TASK_DELETED in record.getMessage() for record in caplog.records)


def test_task_access_denied_for_outsider(client, outsider, developer, project, columns):
    task = create_task(client, developer, project.id, columns[0].id, "Mine")
    headers = get_auth_headers(outsider)
    assert client.get(f"/tasks/{task['id']}", headers=headers).status_code == 403
    assert client.put(f"/tasks/{task['id']}", json={"title": "x"}, headers=headers).status_code == 403
    assert _move(client, outsider, task["id"], columns[1].id, 0).status_code == 403
