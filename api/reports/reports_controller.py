from typing import Union

from fastapi import HTTPException, Response, status
from sqlalchemy.orm import Session

from api.reports.reports_schema import (
    DashboardStats,
    EventReportResponse,
    VolunteerReportResponse,
)
from api.reports.reports_service import (
    ReportService,
    dashboard_stats,
    event_report,
    volunteer_report,
)
from helpers.csv_helper import events_to_csv, volunteers_to_csv
from utils.datetime_utils import utcnow

REPORT_TYPES = ("events", "volunteers")


def get_stats(db: Session) -> DashboardStats:
    snap = ReportService(db).snapshot()
    return dashboard_stats(snap.accounts, snap.events, snap.participations, utcnow())


def get_report(
    db: Session, report_type: str, format: str = "json"
) -> Union[EventReportResponse, VolunteerReportResponse, Response]:
    if report_type not in REPORT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid report type. Use one of: {', '.join(REPORT_TYPES)}",
        )

    snap = ReportService(db).snapshot()
    if report_type == "events":
        rows = event_report(snap.events, snap.participations)
        if format == "csv":
            return _csv_response(events_to_csv(rows), report_type)
        return EventReportResponse(events=rows)

    rows = volunteer_report(snap.accounts, snap.participations)
    if format == "csv":
        return _csv_response(volunteers_to_csv(rows), report_type)
    return VolunteerReportResponse(volunteers=rows)


def _csv_response(content: str, report_type: str) -> Response:
    filename = f"{report_type}_report_{utcnow():%Y-%m-%d}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
