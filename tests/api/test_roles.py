"""Tests for role endpoints under /departments/{department_id}/roles."""

from httpx import AsyncClient


async def _user_id(client: AsyncClient, headers: dict, email: str) -> str:
    response = await client.get(
        "/api/v1/users/search", params={"email": email}, headers=headers
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]["id"]


async def _create_role(client: AsyncClient, admin: dict, **body) -> dict:
    payload = {"hierarchy_level": "MANAGER", "job_title": "Manager", **body}
    response = await client.post(
        f"/api/v1/departments/{admin['department_id']}/roles",
        json=payload,
        headers=admin["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_role_with_occupant_and_supervisor(
    client: AsyncClient, admin: dict, register_user, login_user
) -> None:
    await register_user("bob@example.com")
    bob_id = await _user_id(client, admin["headers"], "bob@example.com")
    role = await _create_role(
        client,
        admin,
        job_title="Sales Lead",
        user_id=bob_id,
        supervised_by=[admin["admin_role_id"]],
    )
    assert role["users"] == [bob_id]
    assert role["supervised_by"] == [admin["admin_role_id"]]

    boss = await client.get(
        f"/api/v1/departments/{admin['department_id']}/roles/{admin['admin_role_id']}",
        headers=admin["headers"],
    )
    assert boss.json()["data"]["supervises"] == [role["id"]]

    bob_headers = await login_user("bob@example.com")
    me = await client.get("/api/v1/users/me", headers=bob_headers)
    assert [m["role_id"] for m in me.json()["data"]["company_roles"]] == [role["id"]]


async def test_list_roles(client: AsyncClient, admin: dict) -> None:
    await _create_role(client, admin, job_title="Ops")
    response = await client.get(
        f"/api/v1/departments/{admin['department_id']}/roles", headers=admin["headers"]
    )
    assert response.status_code == 200
    titles = {r["job_title"] for r in response.json()["data"]}
    assert titles == {"Company Admin", "Ops"}


async def test_non_admin_cannot_create_role(
    client: AsyncClient, admin: dict, register_user
) -> None:
    outsider = await register_user("eve@example.com")
    response = await client.post(
        f"/api/v1/departments/{admin['department_id']}/roles",
        json={"hierarchy_level": "EMPLOYEE", "job_title": "Spy"},
        headers=outsider,
    )
    assert response.status_code == 403
    assert response.json()["error"] == "Not a company admin or in the same company."


async def test_create_role_in_missing_department(client: AsyncClient, admin: dict) -> None:
    response = await client.post(
        "/api/v1/departments/no-such-department/roles",
        json={"hierarchy_level": "EMPLOYEE", "job_title": "Ghost"},
        headers=admin["headers"],
    )
    assert response.status_code == 404


async def test_create_role_rejects_unknown_level(client: AsyncClient, admin: dict) -> None:
    response = await client.post(
        f"/api/v1/departments/{admin['department_id']}/roles",
        json={"hierarchy_level": "CEO", "job_title": "Boss"},
        headers=admin["headers"],
    )
    assert response.status_code == 400


async def test_update_role_supervision_and_fields(client: AsyncClient, admin: dict) -> None:
    a = await _create_role(client, admin, job_title="A")
    b = await _create_role(client, admin, job_title="B")
    url = f"/api/v1/departments/{admin['department_id']}/roles"

    response = await client.put(
        f"{url}/{a['id']}",
        json={"supervises": [b["id"]], "job_title": "A prime"},
        headers=admin["headers"],
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["supervises"] == [b["id"]]
    assert data["job_title"] == "A prime"

    b_now = await client.get(f"{url}/{b['id']}", headers=admin["headers"])
    assert b_now.json()["data"]["supervised_by"] == [a["id"]]

    await client.put(
        f"{url}/{b['id']}", json={"supervised_by": []}, headers=admin["headers"]
    )
    a_now = await client.get(f"{url}/{a['id']}", headers=admin["headers"])
    assert a_now.json()["data"]["supervises"] == []


async def test_update_role_self_supervision(client: AsyncClient, admin: dict) -> None:
    a = await _create_role(client, admin, job_title="A")
    response = await client.put(
        f"/api/v1/departments/{admin['department_id']}/roles/{a['id']}",
        json={"supervises": [a["id"]]},
        headers=admin["headers"],
    )
    assert response.status_code == 400


async def test_update_role_users(
    client: AsyncClient, admin: dict, register_user
) -> None:
    await register_user("bob@example.com")
    bob_id = await _user_id(client, admin["headers"], "bob@example.com")
    role = await _create_role(client, admin, job_title="Ops")
    url = f"/api/v1/departments/{admin['department_id']}/roles/{role['id']}"

    response = await client.put(url, json={"users": [bob_id]}, headers=admin["headers"])
    assert response.json()["data"]["users"] == [bob_id]

    response = await client.put(url, json={"users": []}, headers=admin["headers"])
    assert response.json()["data"]["users"] == []


async def test_delete_role(client: AsyncClient, admin: dict) -> None:
    role = await _create_role(
        client, admin, job_title="Temp", supervised_by=[admin["admin_role_id"]]
    )
    base = f"/api/v1/departments/{admin['department_id']}/roles"
    response = await client.delete(f"{base}/{role['id']}", headers=admin["headers"])
    assert response.status_code == 200

    missing = await client.get(f"{base}/{role['id']}", headers=admin["headers"])
    assert missing.status_code == 404
    boss = await client.get(f"{base}/{admin['admin_role_id']}", headers=admin["headers"])
    assert boss.json()["data"]["supervises"] == []
