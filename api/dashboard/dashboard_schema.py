from typing import List
from pydantic import BaseModel

from api.events.events_schema import EventRead
from api.notifications.notifications_schema import NotificationRead


class DashboardResponse(BaseModel):
    total_events: int
    upcoming_events_count: int
    total_volunteers: int
    my_participations: int
    upcoming_events: List[EventRead]
    recent_notifications: List[NotificationRead]
