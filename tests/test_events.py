from datetime import timedelta

from api.events.participation_model import Participation
from api.user.user_model import UserRole
from utils.datetime_utils import utcnow

from conftest import bearer, make_account, make_event


def _payload(**overrides):
    data = {
        "title": "Blood Drive",
        "description": "Annual blood donation drive",
        "date": (utcnow() + timedelta(days=10)).isoformat(),
        "location": "Kandy",
    }
    data.update(overrides)
    return data


def test_admin_creates_event(client, admin_headers, admin_user):
    res = client.post("/api/events", json=_payload(), headers=admin_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "Blood Drive"
    assert body["created_by"] == admin_user.id
    assert body["created_by_name"] == "Ada Coordinator"
    assert body["participant_count"] == 0
    assert body["is_joined"] is False


def test_volunteer_cannot_create_event(client, volunteer_headers):
    res = client.post("/api/events", json=_payload(), headers=volunteer_headers)
    assert res.status_code == 403


def test_create_requires_token(client):
    assert client.post("/api/events", json=_payload()).status_code == 401


def test_list_filters_and_search(client, db_session, admin_user, volunteer, volunteer_headers):
    past = make_event(db_session, admin_user, title="Past Flood Relief", days_ahead=-5)
    soon = make_event(db_session, admin_user, title="Tree Planting", days_ahead=2, location="Galle")
    make_event(db_session, admin_user, title="First Aid Training", days_ahead=20)
    db_session.add(Participation(event_id=soon.id, volunteer_id=volunteer.id))
    db_session.commit()

    all_events = client.get("/api/events", headers=volunteer_headers).json()
    assert [e["title"] for e in all_events] == ["Past Flood Relief", "Tree Planting", "First Aid Training"]

    upcoming = client.get("/api/events", params={"filter": "upcoming"}, headers=volunteer_headers).json()
    assert past.id not in [e["id"] for e in upcoming]

    joined = client.get("/api/events", params={"filter": "joined"}, headers=volunteer_headers).json()
    assert [e["id"] for e in joined] == [soon.id]
    assert joined[0]["is_joined"] is True
    assert joined[0]["participant_count"] == 1

    found = client.get("/api/events", params={"q": "galle"}, headers=volunteer_headers).json()
    assert [e["id"] for e in found] == [soon.id]

    assert client.get("/api/events/joined", headers=volunteer_headers).json() == joined


def test_unknown_filter_is_rejected(client, volunteer_headers):
    res = client.get("/api/events", params={"filter": "someday"}, headers=volunteer_headers)
    assert res.status_code == 422


def test_get_missing_event(client, volunteer_headers):
    assert client.get("/api/events/999", headers=volunteer_headers).status_code == 404


def test_update_by_creator_or_admin_only(client, db_session, event, admin_headers, volunteer_headers):
    res = client.put(f"/api/events/{event.id}", json={"title": "Renamed"}, headers=volunteer_headers)
    assert res.status_code == 403

    res = client.put(f"/api/events/{event.id}", json={"title": "Renamed"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["title"] == "Renamed"
    assert res.json()["location"] == event.location


def test_update_rejects_null_fields(client, event, admin_headers):
    res = client.put(f"/api/events/{event.id}", json={"title": None}, headers=admin_headers)
    assert res.status_code == 422


def test_any_admin_may_modify_another_admins_event(client, db_session, event):
    second_admin = make_account(db_session, "second@srcs.org", role=UserRole.admin)
    res = client.put(f"/api/events/{event.id}", json={"location": "Jaffna"}, headers=bearer(second_admin))
    assert res.status_code == 200


def test_delete_event_removes_participations(client, db_session, event, volunteer, admin_headers, volunteer_headers):
    event_id = event.id
    assert client.post(f"/api/events/{event_id}/join", headers=volunteer_headers).status_code == 201

    assert client.delete(f"/api/events/{event_id}", headers=admin_headers).status_code == 204

    assert client.get(f"/api/events/{event_id}", headers=volunteer_headers).status_code == 404
    assert client.get("/api/events", params={"filter": "joined"}, headers=volunteer_headers).json() == []
    counts = client.get(f"/api/events/{event_id}/counts", headers=volunteer_headers).json()
    assert counts == {"event_id": event_id, "participant_count": 0, "attended_count": 0}
