from helpers.token_helper import create_access_token

from conftest import bearer


def test_register_returns_token_and_volunteer_account(client):
    res = client.post("/api/auth/register", json={"email": "New.Person@SRCS.org", "password": "secret1"})
    assert res.status_code == 201
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "new.person@srcs.org"
    assert body["user"]["name"] == "new.person"
    assert body["user"]["role"] == "volunteer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_duplicate_registration_conflicts(client, volunteer):
    res = client.post("/api/auth/register", json={"email": "VERA@srcs.org", "password": "secret1"})
    assert res.status_code == 409


def test_short_password_rejected(client):
    res = client.post("/api/auth/register", json={"email": "a@srcs.org", "password": "123"})
    assert res.status_code == 422


def test_login(client, volunteer):
    ok = client.post("/api/auth/login", json={"email": "vera@srcs.org", "password": "password123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["name"] == "Vera Volunteer"

    bad = client.post("/api/auth/login", json={"email": "vera@srcs.org", "password": "nope"})
    assert bad.status_code == 401


def test_me_requires_valid_token(client, volunteer):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    expired = create_access_token({"id": volunteer.id}, expires_minutes=-5)
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"}).status_code == 401

    no_id = create_access_token({"sub": "x"})
    assert client.get("/api/auth/me", headers={"Authorization": f"Bearer {no_id}"}).status_code == 401


def test_token_for_deleted_account_is_rejected(client, db_session, volunteer):
    headers = bearer(volunteer)
    db_session.delete(volunteer)
    db_session.commit()
    assert client.get("/api/auth/me", headers=headers).status_code == 401


def test_rename_self(client, volunteer_headers):
    res = client.put("/api/auth/me", json={"name": "Vera V."}, headers=volunteer_headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Vera V."


def test_role_change_applies_to_existing_tokens(client, volunteer, admin_headers, volunteer_headers):
    assert client.get("/stats", headers=volunteer_headers).status_code == 403

    res = client.put(f"/api/auth/users/{volunteer.id}/role", json={"role": "admin"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["role"] == "admin"

    assert client.get("/stats", headers=volunteer_headers).status_code == 200


def test_only_admins_assign_roles(client, other_volunteer, volunteer_headers):
    res = client.put(
        f"/api/auth/users/{other_volunteer.id}/role", json={"role": "admin"}, headers=volunteer_headers
    )
    assert res.status_code == 403


def test_role_change_for_missing_account(client, admin_headers):
    res = client.put("/api/auth/users/9999/role", json={"role": "admin"}, headers=admin_headers)
    assert res.status_code == 404
