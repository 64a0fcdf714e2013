from datetime import datetime, timedelta


def test_profile_missing_until_first_save(client, volunteer_headers):
    res = client.get("/api/profile", headers=volunteer_headers)
    assert res.status_code == 200
    assert res.json()["profile"] is None
    assert res.json()["profile_complete"] is False


def test_save_creates_then_patches(client, volunteer_headers):
    res = client.put(
        "/api/profile",
        json={"phone": "+94 77 123 4567", "skills": "First aid", "name": "Vera V."},
        headers=volunteer_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["profile_complete"] is True
    assert body["profile"]["phone"] == "+94 77 123 4567"
    assert body["account"]["name"] == "Vera V."

    res = client.put("/api/profile", json={"bio": "Weekend helper"}, headers=volunteer_headers)
    profile = res.json()["profile"]
    assert profile["bio"] == "Weekend helper"
    assert profile["skills"] == "First aid"


def test_unknown_fields_rejected(client, volunteer_headers):
    res = client.put("/api/profile", json={"role": "admin"}, headers=volunteer_headers)
    assert res.status_code == 422


def test_profile_requires_token(client):
    assert client.get("/api/profile").status_code == 401


def _utc(value):
    stamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return stamp.tzinfo is not None and stamp.utcoffset() == timedelta(0)


def test_saved_profile_timestamps_are_utc(client, volunteer_headers):
    res = client.put("/api/profile", json={"skills": "Logistics"}, headers=volunteer_headers)
    body = res.json()

    assert _utc(body["profile"]["created_at"])
    assert _utc(body["profile"]["updated_at"])
    assert _utc(body["account"]["created_at"])
