from __future__ import annotations

PASSWORD = "secret-pass"


async def test_login_and_me(client, seeded_users):
    response = await client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": PASSWORD}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["user_id"] == str(seeded_users["admin"])
    assert payload["role"] == "ADMIN"

    me = await client.get(
        "/api/v1/me", headers={"Authorization": f"Bearer {payload['access_token']}"}
    )
    assert me.status_code == 200
    body = me.json()
    assert body["username"] == "admin"
    assert body["organization_id"] == str(seeded_users["farm_id"])
    assert body["organization_name"] == "Green Valley"
    assert body["claims"]["org"] == str(seeded_users["farm_id"])


async def test_login_rejects_bad_credentials(client, seeded_users):
    wrong = await client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": "nope"}
    )
    assert wrong.status_code == 401
    assert wrong.json()["code"] == "auth_error"

    unknown = await client.post(
        "/api/v1/auth/login", json={"username": "ghost", "password": PASSWORD}
    )
    assert unknown.status_code == 401


async def test_requests_without_valid_token_are_rejected(client, seeded_users):
    missing = await client.get("/api/v1/cattle")
    assert missing.status_code == 401

    garbage = await client.get("/api/v1/cattle", headers={"Authorization": "Bearer not-a-jwt"})
    assert garbage.status_code == 401

    health = await client.get("/api/v1/health")
    assert health.status_code == 200


async def test_admin_manages_users(client, seeded_users):
    admin_headers = seeded_users["admin_headers"]
    created = await client.post(
        "/api/v1/users",
        json={"username": "milker", "email": "Milker@Example.com", "password": "milk-123"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    user = created.json()
    assert user["role"] == "USER"
    assert user["email"] == "milker@example.com"
    assert user["organization_id"] == str(seeded_users["farm_id"])

    duplicate = await client.post(
        "/api/v1/users",
        json={"username": "milker", "email": "other@farm.com", "password": "milk-123"},
        headers=admin_headers,
    )
    assert duplicate.status_code == 409

    denied = await client.post(
        "/api/v1/users",
        json={"username": "sneaky", "email": "sneaky@example.com", "password": "milk-123"},
        headers=seeded_users["worker_headers"],
    )
    assert denied.status_code == 403

    listing = await client.get("/api/v1/users", headers=admin_headers)
    assert listing.status_code == 200
    body = listing.json()
    assert body["pagination"]["total"] == 3
    assert {u["username"] for u in body["users"]} == {"admin", "worker", "milker"}

    login = await client.post(
        "/api/v1/auth/login", json={"username": "milker", "password": "milk-123"}
    )
    assert login.status_code == 200

    worker_listing = await client.get("/api/v1/users", headers=seeded_users["worker_headers"])
    assert worker_listing.status_code == 403


async def test_current_organization(client, seeded_users):
    response = await client.get(
        "/api/v1/organizations/current", headers=seeded_users["other_admin_headers"]
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Hill Farm"
