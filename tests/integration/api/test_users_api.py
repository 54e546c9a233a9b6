import pytest
from httpx import AsyncClient

from tests.utils.http import bearer, cookie_header


async def user_id(client, access_token):
    response = await client.get("/auth/me", headers=bearer(access_token))
    return response.json()["user"]["id"]


@pytest.mark.asyncio
async def test_create_user_and_login(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")
    roles = await client.get("/roles", headers=bearer(admin))
    viewer = next(r for r in roles.json()["roles"] if r["name"] == "viewer")

    response = await client.post(
        "/users",
        json={
            "email": "New.Hire@Example.com",
            "password": "Welcome123!",
            "firstName": "New",
            "lastName": "Hire",
            "roleId": viewer["id"],
        },
        headers=bearer(admin),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "new.hire@example.com"
    assert data["status"] == "active"
    assert data["roleId"] == viewer["id"]
    assert "password" not in data
    assert "passwordHash" not in data

    access_token, _ = await login("new.hire@example.com", "Welcome123!")
    me = await client.get("/auth/me", headers=bearer(access_token))
    assert me.json()["user"]["permissions"] == ["documents.view"]


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")

    response = await client.post(
        "/users",
        json={"email": "alice@example.com", "password": "Welcome123!"},
        headers=bearer(admin),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_user_invalid_payload(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")

    response = await client.post(
        "/users", json={"email": "not-an-email", "password": "short"}, headers=bearer(admin)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_user_denied(client: AsyncClient, login):
    alice, _ = await login("alice@example.com")

    response = await client.post(
        "/users",
        json={"email": "x@example.com", "password": "Welcome123!"},
        headers=bearer(alice),
    )

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Missing permission: users.create"


@pytest.mark.asyncio
async def test_change_role(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")
    bob, _ = await login("bob@example.com")
    bob_id = await user_id(client, bob)
    roles = await client.get("/roles", headers=bearer(admin))
    viewer = next(r for r in roles.json()["roles"] if r["name"] == "viewer")

    response = await client.put(
        f"/users/{bob_id}/role", json={"roleId": viewer["id"]}, headers=bearer(admin)
    )

    assert response.status_code == 200
    assert response.json()["roleId"] == viewer["id"]


@pytest.mark.asyncio
async def test_remove_role(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")
    bob, _ = await login("bob@example.com")
    bob_id = await user_id(client, bob)

    response = await client.put(f"/users/{bob_id}/role", json={"roleId": None}, headers=bearer(admin))

    assert response.status_code == 200
    assert response.json()["roleId"] is None


@pytest.mark.asyncio
async def test_change_role_unknown_role(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")
    bob, _ = await login("bob@example.com")
    bob_id = await user_id(client, bob)

    response = await client.put(
        f"/users/{bob_id}/role",
        json={"roleId": "00000000-0000-0000-0000-000000000000"},
        headers=bearer(admin),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_change_role_denied(client: AsyncClient, login):
    alice, _ = await login("alice@example.com")
    alice_id = await user_id(client, alice)

    response = await client.put(f"/users/{alice_id}/role", json={"roleId": None}, headers=bearer(alice))

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Missing permission: users.manage_roles"


@pytest.mark.asyncio
async def test_suspend_and_reactivate(client: AsyncClient, login, test_data):
    admin, _ = await login("admin@example.com")
    bob, bob_refresh = await login("bob@example.com")
    bob_id = await user_id(client, bob)

    suspended = await client.put(
        f"/users/{bob_id}/status", json={"status": "suspended"}, headers=bearer(admin)
    )
    assert suspended.status_code == 200
    assert suspended.json()["status"] == "suspended"

    # Sessions are revoked and logging in is refused
    refresh = await client.post("/auth/refresh", headers=cookie_header(bob_refresh))
    assert refresh.status_code == 401
    relogin = await client.post(
        "/auth/login", json={"email": "bob@example.com", "password": test_data.get("password")}
    )
    assert relogin.json()["error"]["code"] == "ACCOUNT_INACTIVE"

    active = await client.put(
        f"/users/{bob_id}/status", json={"status": "active"}, headers=bearer(admin)
    )
    assert active.status_code == 200
    await login("bob@example.com")


@pytest.mark.asyncio
async def test_invalid_status(client: AsyncClient, login):
    admin, _ = await login("admin@example.com")
    bob, _ = await login("bob@example.com")
    bob_id = await user_id(client, bob)

    response = await client.put(
        f"/users/{bob_id}/status", json={"status": "banned"}, headers=bearer(admin)
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, login, test_data):
    admin, _ = await login("admin@example.com")
    bob, bob_refresh = await login("bob@example.com")
    bob_id = await user_id(client, bob)

    response = await client.delete(f"/users/{bob_id}", headers=bearer(admin))

    assert response.status_code == 200
    assert response.json() == {"id": bob_id, "revokedSessions": 1}

    # A deleted user cannot sign in, refresh or use an issued token
    relogin = await client.post(
        "/auth/login", json={"email": "bob@example.com", "password": test_data.get("password")}
    )
    assert relogin.status_code == 401
    assert (await client.post("/auth/refresh", headers=cookie_header(bob_refresh))).status_code == 401
    assert (await client.get("/auth/me", headers=bearer(bob))).status_code == 401

    again = await client.delete(f"/users/{bob_id}", headers=bearer(admin))
    assert again.status_code == 404

    # The email stays taken
    recreate = await client.post(
        "/users",
        json={"email": "bob@example.com", "password": "Welcome123!"},
        headers=bearer(admin),
    )
    assert recreate.status_code == 409
