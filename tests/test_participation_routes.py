def test_join_twice_conflicts(client, event, volunteer_headers):
    first = client.post(f"/api/events/{event.id}/join", headers=volunteer_headers)
    assert first.status_code == 201
    assert first.json()["status"] == "joined"
    assert first.json()["volunteer_name"] == "Vera Volunteer"

    second = client.post(f"/api/events/{event.id}/join", headers=volunteer_headers)
    assert second.status_code == 409
    assert second.json()["detail"] == "Already joined this event"


def test_leave_and_rejoin(client, event, volunteer_headers):
    client.post(f"/api/events/{event.id}/join", headers=volunteer_headers)

    assert client.delete(f"/api/events/{event.id}/join", headers=volunteer_headers).status_code == 204
    assert client.delete(f"/api/events/{event.id}/join", headers=volunteer_headers).status_code == 404

    assert client.post(f"/api/events/{event.id}/join", headers=volunteer_headers).status_code == 201
    counts = client.get(f"/api/events/{event.id}/counts", headers=volunteer_headers).json()
    assert counts["participant_count"] == 1


def test_join_missing_event(client, volunteer_headers):
    assert client.post("/api/events/404/join", headers=volunteer_headers).status_code == 404


def test_admin_adds_participant_and_records_attendance(client, event, volunteer, admin_headers, volunteer_headers):
    res = client.post(
        f"/api/events/{event.id}/participants",
        json={"volunteer_id": volunteer.id},
        headers=admin_headers,
    )
    assert res.status_code == 201

    url = f"/api/events/{event.id}/participants/{volunteer.id}/attendance"
    assert client.put(url, json={"hours": 2}, headers=volunteer_headers).status_code == 403
    assert client.put(url, json={"hours": -3}, headers=admin_headers).status_code == 422

    res = client.put(url, json={"hours": 2}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["status"] == "attended"
    assert res.json()["hours"] == 2

    listing = client.get(f"/api/events/{event.id}/participants", headers=volunteer_headers).json()
    assert [(p["volunteer_id"], p["status"]) for p in listing] == [(volunteer.id, "attended")]

    counts = client.get(f"/api/events/{event.id}/counts", headers=volunteer_headers).json()
    assert (counts["participant_count"], counts["attended_count"]) == (1, 1)


def test_volunteers_cannot_add_participants(client, event, other_volunteer, volunteer_headers):
    res = client.post(
        f"/api/events/{event.id}/participants",
        json={"volunteer_id": other_volunteer.id},
        headers=volunteer_headers,
    )
    assert res.status_code == 403


def test_attendance_for_non_participant(client, event, volunteer, admin_headers):
    url = f"/api/events/{event.id}/participants/{volunteer.id}/attendance"
    assert client.put(url, json={"hours": 1}, headers=admin_headers).status_code == 404


def test_participants_of_missing_event(client, volunteer_headers):
    assert client.get("/api/events/31337/participants", headers=volunteer_headers).status_code == 404
