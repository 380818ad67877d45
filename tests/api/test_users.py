"""Tests for /users endpoints: profile, search and profile image."""

from httpx import AsyncClient

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


async def test_get_me(client: AsyncClient, register_user) -> None:
    headers = await register_user("ada@example.com")
    response = await client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "ada@example.com"
    assert data["web_app_role"] == "USER"
    assert data["image"] == "default_user_image.png"
    assert data["company_roles"] == []
    assert "password" not in data
    assert "hashed_password" not in data


async def test_update_me(client: AsyncClient, register_user, login_user) -> None:
    headers = await register_user("ada@example.com")
    response = await client.put(
        "/api/v1/users/me",
        json={"first_name": "Augusta", "password": "NewHorse42!!"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["first_name"] == "Augusta"
    assert response.json()["data"]["last_name"] == "User"
    await login_user("ada@example.com", "NewHorse42!!")


async def test_update_me_requires_a_field(client: AsyncClient, register_user) -> None:
    headers = await register_user("ada@example.com")
    response = await client.put("/api/v1/users/me", json={}, headers=headers)
    assert response.status_code == 400


async def test_update_me_rejects_long_names(client: AsyncClient, register_user) -> None:
    headers = await register_user("ada@example.com")
    response = await client.put(
        "/api/v1/users/me", json={"last_name": "L" * 51}, headers=headers
    )
    assert response.status_code == 400
    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.json()["data"]["last_name"] == "User"


async def test_update_me_duplicate_email(client: AsyncClient, register_user) -> None:
    await register_user("bob@example.com")
    headers = await register_user("ada@example.com")
    response = await client.put(
        "/api/v1/users/me", json={"email": "bob@example.com"}, headers=headers
    )
    assert response.status_code == 409
    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.json()["data"]["email"] == "ada@example.com"


async def test_search_by_email(client: AsyncClient, register_user) -> None:
    await register_user("bob@example.com")
    headers = await register_user("ada@example.com")
    found = await client.get(
        "/api/v1/users/search", params={"email": "bob@example.com"}, headers=headers
    )
    assert found.status_code == 200
    assert found.json()["data"]["email"] == "bob@example.com"
    assert "web_app_role" not in found.json()["data"]

    missing = await client.get(
        "/api/v1/users/search", params={"email": "nobody@example.com"}, headers=headers
    )
    assert missing.status_code == 404


async def test_delete_me(client: AsyncClient, admin: dict) -> None:
    response = await client.delete("/api/v1/users/me", headers=admin["headers"])
    assert response.status_code == 200
    login = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@example.com", "password": "CorrectHorse42!"},
    )
    assert login.status_code == 400
    assert login.json()["error"] == "User does not exist."


async def test_profile_image_lifecycle(client: AsyncClient, register_user) -> None:
    headers = await register_user("ada@example.com")

    uploaded = await client.put(
        "/api/v1/users/me/image",
        files={"file": ("me.png", PNG, "image/png")},
        headers=headers,
    )
    assert uploaded.status_code == 200, uploaded.text
    download = await client.get(uploaded.json()["data"]["url"])
    assert download.status_code == 200
    assert download.content == PNG

    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.json()["data"]["image"].endswith("_me.png")

    link = await client.get("/api/v1/users/me/image", headers=headers)
    assert link.status_code == 200

    deleted = await client.delete("/api/v1/users/me/image", headers=headers)
    assert deleted.status_code == 200
    me = await client.get("/api/v1/users/me", headers=headers)
    assert me.json()["data"]["image"] == "default_user_image.png"

    again = await client.delete("/api/v1/users/me/image", headers=headers)
    assert again.status_code == 404


async def test_profile_image_rejects_other_types(
    client: AsyncClient, register_user
) -> None:
    headers = await register_user("ada@example.com")
    response = await client.put(
        "/api/v1/users/me/image",
        files={"file": ("anim.gif", b"GIF89a", "image/gif")},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Unsupported file type."
