"""Tests for role task endpoints and task files."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def employee(client: AsyncClient, admin: dict, register_user, login_user) -> dict:
    """Bob holds an EMPLOYEE role in the admin's default department."""
    await register_user("bob@example.com")
    found = await client.get(
        "/api/v1/users/search",
        params={"email": "bob@example.com"},
        headers=admin["headers"],
    )
    role = await client.post(
        f"/api/v1/departments/{admin['department_id']}/roles",
        json={
            "hierarchy_level": "EMPLOYEE",
            "job_title": "Analyst",
            "user_id": found.json()["data"]["id"],
        },
        headers=admin["headers"],
    )
    assert role.status_code == 201, role.text
    return {"role_id": role.json()["data"]["id"], "headers": await login_user("bob@example.com")}


async def _create_task(client: AsyncClient, admin: dict, **body) -> dict:
    response = await client.post(
        f"/api/v1/roles/{admin['admin_role_id']}/tasks",
        json={"title": "Write report", **body},
        headers=admin["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_task_defaults(client: AsyncClient, admin: dict) -> None:
    task = await _create_task(
        client, admin, task_rubric=[{"name": "Accuracy", "weight": 0.5}]
    )
    assert task["owner_role_id"] == admin["admin_role_id"]
    assert task["priority"] == "MEDIUM"
    assert task["status"] == "NOT_STARTED"
    assert task["task_rubric"][0]["name"] == "Accuracy"
    assert task["task_resources"] == []


async def test_owned_and_assigned_tasks(
    client: AsyncClient, admin: dict, employee: dict
) -> None:
    task = await _create_task(client, admin, assigned_role_ids=[employee["role_id"]])

    own = await client.get(
        f"/api/v1/roles/{admin['admin_role_id']}/tasks", headers=admin["headers"]
    )
    assert [t["id"] for t in own.json()["data"]["owned_tasks"]] == [task["id"]]
    assert own.json()["data"]["assigned_tasks"] == []

    theirs = await client.get(
        f"/api/v1/roles/{employee['role_id']}/tasks", headers=employee["headers"]
    )
    assert theirs.status_code == 200
    assert theirs.json()["data"]["owned_tasks"] == []
    assert [t["id"] for t in theirs.json()["data"]["assigned_tasks"]] == [task["id"]]

    single = await client.get(
        f"/api/v1/roles/{employee['role_id']}/tasks/{task['id']}",
        headers=employee["headers"],
    )
    assert single.status_code == 200


async def test_employee_cannot_create_tasks(
    client: AsyncClient, admin: dict, employee: dict
) -> None:
    response = await client.post(
        f"/api/v1/roles/{employee['role_id']}/tasks",
        json={"title": "Self-assigned"},
        headers=employee["headers"],
    )
    assert response.status_code == 403
    assert response.json()["error"] == "Insufficient permissions."


async def test_role_not_held_is_forbidden(
    client: AsyncClient, admin: dict, employee: dict
) -> None:
    response = await client.get(
        f"/api/v1/roles/{admin['admin_role_id']}/tasks", headers=employee["headers"]
    )
    assert response.status_code == 403
    assert response.json()["error"] == "Role not found for the user."


async def test_task_not_visible_to_unrelated_role(
    client: AsyncClient, admin: dict, employee: dict
) -> None:
    task = await _create_task(client, admin)
    response = await client.get(
        f"/api/v1/roles/{employee['role_id']}/tasks/{task['id']}",
        headers=employee["headers"],
    )
    assert response.status_code == 403


async def test_update_and_delete_task(client: AsyncClient, admin: dict) -> None:
    task = await _create_task(client, admin)
    url = f"/api/v1/roles/{admin['admin_role_id']}/tasks/{task['id']}"

    response = await client.put(
        url, json={"status": "IN_PROGRESS", "priority": "HIGH"}, headers=admin["headers"]
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "IN_PROGRESS"
    assert response.json()["data"]["priority"] == "HIGH"
    assert response.json()["data"]["title"] == "Write report"

    assert (await client.delete(url, headers=admin["headers"])).status_code == 200
    assert (await client.get(url, headers=admin["headers"])).status_code == 404


async def test_update_task_rejects_unknown_status(client: AsyncClient, admin: dict) -> None:
    task = await _create_task(client, admin)
    response = await client.put(
        f"/api/v1/roles/{admin['admin_role_id']}/tasks/{task['id']}",
        json={"status": "DONE-ISH"},
        headers=admin["headers"],
    )
    assert response.status_code == 400


async def test_task_file_lifecycle(client: AsyncClient, admin: dict) -> None:
    task = await _create_task(client, admin)
    base = f"/api/v1/roles/{admin['admin_role_id']}/tasks/{task['id']}/resources"

    uploaded = await client.post(
        base,
        files=[
            ("files", ("brief.txt", b"hello", "text/plain")),
            ("files", ("data.csv", b"a,b\n1,2\n", "text/csv")),
        ],
        headers=admin["headers"],
    )
    assert uploaded.status_code == 201, uploaded.text
    assert uploaded.json()["data"]["file_names"] == ["brief.txt", "data.csv"]

    task_now = await client.get(
        f"/api/v1/roles/{admin['admin_role_id']}/tasks/{task['id']}",
        headers=admin["headers"],
    )
    assert task_now.json()["data"]["task_resources"] == ["brief.txt", "data.csv"]

    link = await client.get(f"{base}/brief.txt", headers=admin["headers"])
    assert link.status_code == 200
    download = await client.get(link.json()["data"]["url"])
    assert download.status_code == 200
    assert download.content == b"hello"

    deleted = await client.delete(f"{base}/brief.txt", headers=admin["headers"])
    assert deleted.status_code == 200
    missing = await client.get(f"{base}/brief.txt", headers=admin["headers"])
    assert missing.status_code == 404


async def test_outputs_are_separate_from_resources(client: AsyncClient, admin: dict) -> None:
    task = await _create_task(client, admin)
    base = f"/api/v1/roles/{admin['admin_role_id']}/tasks/{task['id']}"
    await client.post(
        f"{base}/outputs",
        files=[("files", ("result.txt", b"done", "text/plain"))],
        headers=admin["headers"],
    )
    response = await client.get(base, headers=admin["headers"])
    assert response.json()["data"]["task_outputs"] == ["result.txt"]
    assert response.json()["data"]["task_resources"] == []
    missing = await client.get(f"{base}/resources/result.txt", headers=admin["headers"])
    assert missing.status_code == 404


async def test_unknown_download_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/storage/not-a-token")
    assert response.status_code == 404
