from typing import Iterable, List, Optional
from datetime import datetime

from api.reports.reports_schema import EventReportRow, VolunteerReportRow

EVENT_HEADERS = ["Title", "Date", "Location", "Participants", "Attended"]
VOLUNTEER_HEADERS = ["Name", "Email", "Total Events", "Total Hours", "Last Activity"]


def quote(value: Optional[str]) -> str:
    """Quote a text field, doubling embedded quotes."""
    return '"' + (value or "").replace('"', '""') + '"'


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def _join(header: List[str], rows: Iterable[List[str]]) -> str:
    return "\n".join([",".join(header)] + [",".join(row) for row in rows])


def events_to_csv(rows: Iterable[EventReportRow]) -> str:
    return _join(EVENT_HEADERS, (
        [
            quote(row.title),
            format_date(row.date),
            quote(row.location),
            str(row.participant_count),
            str(row.attended_count),
        ]
        for row in rows
    ))


def volunteers_to_csv(rows: Iterable[VolunteerReportRow]) -> str:
    return _join(VOLUNTEER_HEADERS, (
        [
            quote(row.name),
            quote(row.email),
            str(row.total_events),
            str(row.total_hours),
            format_date(row.last_activity) if row.last_activity else "Never",
        ]
        for row in rows
    ))
