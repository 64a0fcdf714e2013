from datetime import datetime, timedelta, timezone

import pytest

from api.events.participation_model import ParticipationStatus
from api.reports.reports_schema import AccountRecord, EventRecord, ParticipationRecord
from api.reports.reports_service import dashboard_stats, event_report, volunteer_report
from api.user.user_model import UserRole

from conftest import actor, make_event
from api.events.participation_service import ParticipationService

NOW = datetime(2026, 6, 30, 12, 0, tzinfo=timezone.utc)


def account(id, name=None, role=UserRole.volunteer):
    return AccountRecord(id=id, email=f"user{id}@srcs.org", name=name, role=role)


def event_rec(id, days_from_now=0, created_days_ago=0, title=None):
    return EventRecord(
        id=id,
        title=title or f"Event {id}",
        date=NOW + timedelta(days=days_from_now),
        location="Colombo",
        created_at=NOW - timedelta(days=created_days_ago),
    )


def part(event_id, volunteer_id, status=ParticipationStatus.joined, hours=0, days_ago=1):
    return ParticipationRecord(
        event_id=event_id,
        volunteer_id=volunteer_id,
        status=status,
        hours=hours,
        created_at=NOW - timedelta(days=days_ago),
    )


def test_attendance_rate_is_zero_without_participants():
    rows = event_report([event_rec(1)], [])
    assert rows[0].participant_count == 0
    assert rows[0].attendance_rate == 0


def test_event_report_counts_and_order():
    events = [event_rec(1, days_from_now=1), event_rec(2, days_from_now=5)]
    participations = [
        part(1, 10, ParticipationStatus.attended, hours=2),
        part(1, 11),
        part(1, 12, ParticipationStatus.cancelled),
        part(2, 10),
    ]

    rows = event_report(events, participations)

    assert [r.id for r in rows] == [2, 1]
    first = rows[1]
    assert (first.participant_count, first.attended_count) == (2, 1)
    assert first.attendance_rate == pytest.approx(0.5)


def test_volunteer_totals_for_joined_and_attended_events():
    accounts = [account(1, "V1"), account(2, "Admin", role=UserRole.admin)]
    participations = [
        part(100, 1, ParticipationStatus.attended, hours=4, days_ago=3),
        part(200, 1, days_ago=2),
    ]

    rows = volunteer_report(accounts, participations)
    assert [r.id for r in rows] == [1]
    assert rows[0].total_events == 2
    assert rows[0].total_hours == 4
    assert rows[0].last_activity == NOW - timedelta(days=2)

    stats = dashboard_stats(accounts, [event_rec(100), event_rec(200)], participations, NOW)
    assert stats.active_volunteers == 1
    assert stats.total_volunteers == 1


def test_volunteer_report_name_fallback_and_never_active():
    rows = volunteer_report([account(1, None), account(2, "Aaron")], [])
    assert [r.name for r in rows] == ["Aaron", "user1@srcs.org"]
    assert rows[0].last_activity is None
    assert rows[0].total_events == 0


def test_cancelled_rows_count_hours_but_not_events():
    rows = volunteer_report(
        [account(1, "V1")],
        [part(1, 1, ParticipationStatus.cancelled, hours=2), part(2, 1, hours=1)],
    )
    assert rows[0].total_events == 1
    assert rows[0].total_hours == 3


def test_active_volunteers_window():
    accounts = [account(1), account(2), account(3)]
    participations = [
        part(1, 1, days_ago=29),
        part(2, 1, days_ago=5),
        part(1, 2, days_ago=31),
    ]
    stats = dashboard_stats(accounts, [event_rec(1), event_rec(2)], participations, NOW)
    assert stats.active_volunteers == 1
    assert stats.total_participations == 3
    assert stats.total_events == 2


def test_recent_events_are_latest_five_created():
    events = [event_rec(i, created_days_ago=i) for i in range(1, 8)]
    stats = dashboard_stats([], events, [part(1, 1), part(1, 2)], NOW)
    assert [e.id for e in stats.recent_events] == [1, 2, 3, 4, 5]
    assert stats.recent_events[0].participant_count == 2


# ─── HTTP ──────────────────────────────────────────────────────────────────────

def test_stats_requires_token(client):
    assert client.get("/stats").status_code == 401


def test_stats_forbidden_for_volunteers(client, volunteer_headers):
    assert client.get("/stats", headers=volunteer_headers).status_code == 403


def test_stats_for_admin(client, db_session, admin_user, volunteer, admin_headers):
    evt = make_event(db_session, admin_user)
    ParticipationService(db_session).join(evt.id, volunteer.id, actor(volunteer))

    body = client.get("/stats", headers=admin_headers).json()
    assert body["total_volunteers"] == 1
    assert body["total_events"] == 1
    assert body["total_participations"] == 1
    assert body["active_volunteers"] == 1
    assert body["recent_events"][0]["participant_count"] == 1


def test_reports_endpoint(client, db_session, admin_user, volunteer, admin_headers):
    evt = make_event(db_session, admin_user, title="River Cleanup")
    ledger = ParticipationService(db_session)
    ledger.join(evt.id, volunteer.id, actor(volunteer))
    ledger.record_attendance(evt.id, volunteer.id, 3, actor(admin_user))

    events = client.get("/reports/events", headers=admin_headers).json()["events"]
    assert events[0]["title"] == "River Cleanup"
    assert events[0]["attendance_rate"] == 1.0

    volunteers = client.get("/reports/volunteers", headers=admin_headers).json()["volunteers"]
    assert volunteers == [
        {
            "id": volunteer.id,
            "name": "Vera Volunteer",
            "email": "vera@srcs.org",
            "total_events": 1,
            "total_hours": 3,
            "last_activity": volunteers[0]["last_activity"],
        }
    ]

    assert client.get("/api/reports/volunteers", headers=admin_headers).json()["volunteers"] == volunteers


def test_reports_csv_download(client, db_session, admin_user, volunteer, admin_headers):
    res = client.get("/reports/volunteers", params={"format": "csv"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert res.text.splitlines() == [
        "Name,Email,Total Events,Total Hours,Last Activity",
        '"Vera Volunteer","vera@srcs.org",0,0,Never',
    ]


def test_unknown_report_type(client, admin_headers):
    assert client.get("/reports/donors", headers=admin_headers).status_code == 400
