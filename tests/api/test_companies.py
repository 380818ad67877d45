"""Tests for company and department endpoints."""

from httpx import AsyncClient

from app.infrastructure.security.jwt import verify_token


async def test_create_company_makes_caller_admin(
    client: AsyncClient, register_user
) -> None:
    headers = await register_user("ada@example.com")
    response = await client.post(
        "/api/v1/companies",
        json={"name": "Acme", "subscription_plan": "MONTHLY"},
        headers=headers,
    )
    assert response.status_code == 201
    data = response.json()["data"]
    company = data["company"]
    assert company["name"] == "Acme"
    assert company["subscription_plan"] == "MONTHLY"
    assert company["company_departments"] == [
        {"department_id": data["department_id"], "department_name": "Cascade"}
    ]

    claims = verify_token(data["access_token"])
    assert claims["company_roles"] == [
        {
            "company_id": company["id"],
            "department_id": data["department_id"],
            "role_id": data["admin_role_id"],
        }
    ]

    role = await client.get(
        f"/api/v1/departments/{data['department_id']}/roles/{data['admin_role_id']}",
        headers=headers,
    )
    assert role.status_code == 200
    assert role.json()["data"]["hierarchy_level"] == "COMPANY_ADMIN"


async def test_create_company_defaults_to_free_plan(
    client: AsyncClient, register_user, make_company
) -> None:
    headers = await register_user("ada@example.com")
    data, _ = await make_company(headers)
    assert data["company"]["subscription_plan"] == "FREE"


async def test_create_company_rejects_unknown_plan(
    client: AsyncClient, register_user
) -> None:
    headers = await register_user("ada@example.com")
    response = await client.post(
        "/api/v1/companies",
        json={"name": "Acme", "subscription_plan": "LIFETIME"},
        headers=headers,
    )
    assert response.status_code == 400


async def test_list_companies_uses_token_memberships(
    client: AsyncClient, admin: dict
) -> None:
    response = await client.get("/api/v1/companies", headers=admin["headers"])
    assert response.status_code == 200
    assert [c["id"] for c in response.json()["data"]] == [admin["company_id"]]


async def test_get_and_update_company(client: AsyncClient, admin: dict) -> None:
    url = f"/api/v1/companies/{admin['company_id']}"
    response = await client.put(
        url, json={"name": "Acme Ltd"}, headers=admin["headers"]
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Acme Ltd"
    assert response.json()["data"]["subscription_plan"] == "FREE"

    response = await client.get(url, headers=admin["headers"])
    assert response.json()["data"]["name"] == "Acme Ltd"


async def test_get_missing_company(client: AsyncClient, admin: dict) -> None:
    response = await client.get("/api/v1/companies/nope", headers=admin["headers"])
    assert response.status_code == 404
    assert response.json()["error"] == "Invalid company ID."


async def test_delete_company_cascades(client: AsyncClient, admin: dict) -> None:
    department = await client.post(
        f"/api/v1/companies/{admin['company_id']}/departments",
        json={"name": "Sales"},
        headers=admin["headers"],
    )
    assert department.status_code == 201

    response = await client.delete(
        f"/api/v1/companies/{admin['company_id']}", headers=admin["headers"]
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["departments_deleted"] == 2
    assert data["roles_deleted"] == 1
    assert data["memberships_removed"] == 1
    assert verify_token(data["access_token"])["company_roles"] == []

    fresh = {"Authorization": f"Bearer {data['access_token']}"}
    response = await client.get(
        f"/api/v1/companies/{admin['company_id']}", headers=fresh
    )
    assert response.status_code == 404
    response = await client.get("/api/v1/users/me", headers=fresh)
    assert response.json()["data"]["company_roles"] == []


async def test_department_crud(client: AsyncClient, admin: dict) -> None:
    base = f"/api/v1/companies/{admin['company_id']}/departments"
    created = await client.post(base, json={"name": "Sales"}, headers=admin["headers"])
    assert created.status_code == 201
    department = created.json()["data"]
    assert department["name"] == "Sales"
    assert department["roles"] == []

    listed = await client.get(base, headers=admin["headers"])
    assert {d["name"] for d in listed.json()["data"]} == {"Cascade", "Sales"}

    renamed = await client.put(
        f"{base}/{department['id']}", json={"name": "Revenue"}, headers=admin["headers"]
    )
    assert renamed.status_code == 200
    assert renamed.json()["data"]["name"] == "Revenue"

    company = await client.get(
        f"/api/v1/companies/{admin['company_id']}", headers=admin["headers"]
    )
    names = {
        d["department_name"] for d in company.json()["data"]["company_departments"]
    }
    assert names == {"Cascade", "Revenue"}

    deleted = await client.delete(f"{base}/{department['id']}", headers=admin["headers"])
    assert deleted.status_code == 200
    missing = await client.get(f"{base}/{department['id']}", headers=admin["headers"])
    assert missing.status_code == 404


async def test_department_create_moves_roles(client: AsyncClient, admin: dict) -> None:
    base = f"/api/v1/companies/{admin['company_id']}/departments"
    created = await client.post(
        base,
        json={"name": "Board", "roles": [admin["admin_role_id"]]},
        headers=admin["headers"],
    )
    assert created.status_code == 201
    department = created.json()["data"]
    assert department["roles"] == [admin["admin_role_id"]]

    me = await client.get("/api/v1/users/me", headers=admin["headers"])
    assert me.json()["data"]["company_roles"][0]["department_id"] == department["id"]


async def test_department_create_with_unknown_role(
    client: AsyncClient, admin: dict
) -> None:
    response = await client.post(
        f"/api/v1/companies/{admin['company_id']}/departments",
        json={"name": "Board", "roles": ["no-such-role"]},
        headers=admin["headers"],
    )
    assert response.status_code == 404
    listed = await client.get(
        f"/api/v1/companies/{admin['company_id']}/departments", headers=admin["headers"]
    )
    assert len(listed.json()["data"]) == 1


async def test_department_delete_detaches_memberships(
    client: AsyncClient, admin: dict
) -> None:
    url = f"/api/v1/companies/{admin['company_id']}/departments/{admin['department_id']}"
    response = await client.delete(url, headers=admin["headers"])
    assert response.status_code == 200
    me = await client.get("/api/v1/users/me", headers=admin["headers"])
    memberships = me.json()["data"]["company_roles"]
    assert memberships == [
        {
            "company_id": admin["company_id"],
            "department_id": None,
            "role_id": admin["admin_role_id"],
        }
    ]


async def test_department_cannot_take_roles_from_another_company(
    client: AsyncClient, admin: dict, register_user, make_company
) -> None:
    other_headers = await register_user("bea@example.com")
    other, other_headers = await make_company(other_headers, name="Rival")
    base = f"/api/v1/companies/{other['company']['id']}/departments"

    created = await client.post(
        base,
        json={"name": "Heist", "roles": [admin["admin_role_id"]]},
        headers=other_headers,
    )
    assert created.status_code == 404
    assert created.json()["error"] == "Invalid role ID was detected."

    updated = await client.put(
        f"{base}/{other['department_id']}",
        json={"roles": [admin["admin_role_id"]]},
        headers=other_headers,
    )
    assert updated.status_code == 404

    deleted = await client.delete(
        f"/api/v1/companies/{other['company']['id']}", headers=other_headers
    )
    assert deleted.status_code == 200

    role = await client.get(
        f"/api/v1/departments/{admin['department_id']}/roles/{admin['admin_role_id']}",
        headers=admin["headers"],
    )
    assert role.status_code == 200
    assert role.json()["data"]["department_id"] == admin["department_id"]
    departments = await client.get(
        f"/api/v1/companies/{admin['company_id']}/departments", headers=admin["headers"]
    )
    assert departments.status_code == 200


async def test_roles_of_deleted_department_can_be_rehomed(
    client: AsyncClient, admin: dict
) -> None:
    base = f"/api/v1/companies/{admin['company_id']}/departments"
    deleted = await client.delete(f"{base}/{admin['department_id']}", headers=admin["headers"])
    assert deleted.status_code == 200

    created = await client.post(
        base,
        json={"name": "Board", "roles": [admin["admin_role_id"]]},
        headers=admin["headers"],
    )
    assert created.status_code == 201
    department = created.json()["data"]
    assert department["roles"] == [admin["admin_role_id"]]
    me = await client.get("/api/v1/users/me", headers=admin["headers"])
    assert me.json()["data"]["company_roles"][0]["department_id"] == department["id"]
