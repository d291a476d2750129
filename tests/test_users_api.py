"""Tests for user management endpoints."""

from httpx import AsyncClient

from outage_journal.core.constants import Role

USERS = "/api/v1/auth/users"


async def test_admin_lists_users(client: AsyncClient, auth_headers):
    response = await client.get(USERS, headers=auth_headers(Role.ADMIN))
    assert response.status_code == 200
    usernames = [user["username"] for user in response.json()]
    assert usernames == ["reader", "editor", "senior", "admin"]
    assert all("hashedPassword" not in user for user in response.json())


async def test_non_admin_is_forbidden(client: AsyncClient, auth_headers):
    for role in (Role.READER, Role.EDITOR, Role.SENIOR):
        response = await client.get(USERS, headers=auth_headers(role))
        assert response.status_code == 403


async def test_create_user_and_login(client: AsyncClient, auth_headers):
    response = await client.post(
        USERS,
        json={"username": "dispatcher", "password": "night-shift", "name": "Night Dispatcher", "role": "EDITOR"},
        headers=auth_headers(Role.ADMIN),
    )
    assert response.status_code == 201
    assert response.json()["role"] == "EDITOR"

    login = await client.post(
        "/api/v1/auth/login", json={"username": "dispatcher", "password": "night-shift"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["name"] == "Night Dispatcher"


async def test_create_user_defaults_to_reader(client: AsyncClient, auth_headers):
    response = await client.post(
        USERS,
        json={"username": "viewer", "password": "pw", "name": "Viewer"},
        headers=auth_headers(Role.ADMIN),
    )
    assert response.status_code == 201
    assert response.json()["role"] == "READER"


async def test_duplicate_username_is_rejected(client: AsyncClient, auth_headers):
    response = await client.post(
        USERS,
        json={"username": "editor", "password": "pw", "name": "Another Editor"},
        headers=auth_headers(Role.ADMIN),
    )
    assert response.status_code == 400


async def test_unknown_role_is_rejected(client: AsyncClient, auth_headers):
    response = await client.post(
        USERS,
        json={"username": "boss", "password": "pw", "name": "Boss", "role": "OWNER"},
        headers=auth_headers(Role.ADMIN),
    )
    assert response.status_code == 400


async def test_blank_password_keeps_current(client: AsyncClient, users, auth_headers, user_password):
    reader = users[Role.READER]
    response = await client.put(
        f"{USERS}/{reader.id}",
        json={"name": "Promoted Reader", "role": "SENIOR", "password": ""},
        headers=auth_headers(Role.ADMIN),
    )
    assert response.status_code == 200
    assert response.json()["role"] == "SENIOR"
    assert response.json()["name"] == "Promoted Reader"

    login = await client.post(
        "/api/v1/auth/login", json={"username": "reader", "password": user_password}
    )
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "SENIOR"


async def test_update_password(client: AsyncClient, users, auth_headers, user_password):
    editor = users[Role.EDITOR]
    response = await client.put(
        f"{USERS}/{editor.id}", json={"password": "rotated"}, headers=auth_headers(Role.ADMIN)
    )
    assert response.status_code == 200

    old = await client.post("/api/v1/auth/login", json={"username": "editor", "password": user_password})
    new = await client.post("/api/v1/auth/login", json={"username": "editor", "password": "rotated"})
    assert old.status_code == 401
    assert new.status_code == 200


async def test_update_missing_user(client: AsyncClient, auth_headers):
    response = await client.put(f"{USERS}/999", json={"name": "Ghost"}, headers=auth_headers(Role.ADMIN))
    assert response.status_code == 404


async def test_delete_user(client: AsyncClient, users, auth_headers):
    admin_headers = auth_headers(Role.ADMIN)
    reader_headers = auth_headers(Role.READER)
    reader_id = users[Role.READER].id

    response = await client.delete(f"{USERS}/{reader_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    # The deleted user's token no longer resolves
    response = await client.get("/api/v1/auth/me", headers=reader_headers)
    assert response.status_code == 401
