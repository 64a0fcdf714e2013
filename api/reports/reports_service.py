"""
Read-only aggregation over already-fetched accounts, events and participations.

Every function recomputes from the records it is handed; nothing is cached
and nothing is written back.
"""
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Sequence

from sqlalchemy.orm import Session

from api.user.user_model import User, UserRole
from api.events.events_model import Event
from api.events.participation_model import Participation, ParticipationStatus
from api.reports.reports_schema import (
    AccountRecord,
    DashboardStats,
    EventRecord,
    EventReportRow,
    ParticipationRecord,
    RecentEvent,
    Snapshot,
    VolunteerReportRow,
)
from config.settings import settings
from utils.datetime_utils import as_utc

logger = logging.getLogger(__name__)


def _tally(participations: Sequence[ParticipationRecord]) -> Dict[int, List[int]]:
    """event_id -> [participant_count, attended_count]"""
    counts: Dict[int, List[int]] = defaultdict(lambda: [0, 0])
    for p in participations:
        if p.status == ParticipationStatus.cancelled:
            continue
        counts[p.event_id][0] += 1
        if p.status == ParticipationStatus.attended:
            counts[p.event_id][1] += 1
    return counts


def event_report(
    events: Sequence[EventRecord],
    participations: Sequence[ParticipationRecord],
) -> List[EventReportRow]:
    counts = _tally(participations)
    rows = []
    for event in sorted(events, key=lambda e: (e.date, e.id), reverse=True):
        participants, attended = counts.get(event.id, (0, 0))
        rows.append(EventReportRow(
            id=event.id,
            title=event.title,
            date=event.date,
            location=event.location,
            participant_count=participants,
            attended_count=attended,
            attendance_rate=(attended / participants) if participants else 0.0,
        ))
    return rows


def volunteer_report(
    accounts: Sequence[AccountRecord],
    participations: Sequence[ParticipationRecord],
) -> List[VolunteerReportRow]:
    by_volunteer: Dict[int, List[ParticipationRecord]] = defaultdict(list)
    for p in participations:
        by_volunteer[p.volunteer_id].append(p)

    rows = []
    for account in accounts:
        if account.role != UserRole.volunteer:
            continue
        mine = by_volunteer.get(account.id, [])
        rows.append(VolunteerReportRow(
            id=account.id,
            name=account.name or account.email,
            email=account.email,
            total_events=sum(1 for p in mine if p.status != ParticipationStatus.cancelled),
            total_hours=sum(p.hours or 0 for p in mine),
            last_activity=max((p.created_at for p in mine), default=None),
        ))
    rows.sort(key=lambda r: (r.name.lower(), r.id))
    return rows


def dashboard_stats(
    accounts: Sequence[AccountRecord],
    events: Sequence[EventRecord],
    participations: Sequence[ParticipationRecord],
    now: datetime,
) -> DashboardStats:
    now = as_utc(now)
    window_start = now - timedelta(days=settings.ACTIVE_VOLUNTEER_WINDOW_DAYS)
    active = {p.volunteer_id for p in participations if p.created_at >= window_start}

    counts = _tally(participations)
    recent = sorted(events, key=lambda e: (e.created_at, e.id), reverse=True)[: settings.RECENT_EVENTS_LIMIT]

    return DashboardStats(
        total_volunteers=sum(1 for a in accounts if a.role == UserRole.volunteer),
        total_events=len(events),
        total_participations=len(participations),
        active_volunteers=len(active),
        recent_events=[
            RecentEvent(
                id=e.id,
                title=e.title,
                date=e.date,
                location=e.location,
                created_at=e.created_at,
                participant_count=counts.get(e.id, (0, 0))[0],
            )
            for e in recent
        ],
    )


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def snapshot(self) -> Snapshot:
        """Fetch the three entity sets the reports are computed from."""
        snapshot = Snapshot(
            accounts=[AccountRecord.model_validate(u) for u in self.db.query(User).all()],
            events=[EventRecord.model_validate(e) for e in self.db.query(Event).all()],
            participations=[
                ParticipationRecord.model_validate(p) for p in self.db.query(Participation).all()
            ],
        )
        logger.debug(
            "report snapshot: %s accounts, %s events, %s participations",
            len(snapshot.accounts), len(snapshot.events), len(snapshot.participations),
        )
        return snapshot
