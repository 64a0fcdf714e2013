from typing import Optional

from sqlalchemy.orm import Session

from api.notifications.notifications_schema import (
    NotificationCreate,
    NotificationList,
    NotificationRead,
    MarkAllReadResponse,
)
from api.notifications.notifications_service import NotificationService
from helpers.errors import Forbidden


def fetch_notifications(db: Session, current_user: dict, limit: Optional[int] = None) -> NotificationList:
    service = NotificationService(db)
    notifications = service.list_for(current_user["id"], limit=limit)
    return NotificationList(
        unread_count=service.unread_count(current_user["id"]),
        notifications=[NotificationRead.model_validate(n) for n in notifications],
    )


def send_notification(db: Session, data: NotificationCreate, current_user: dict) -> NotificationRead:
    recipient_id = data.user_id if data.user_id is not None else current_user["id"]
    if recipient_id != current_user["id"] and current_user["role"] != "admin":
        raise Forbidden("Only admins can notify other accounts")

    notification = NotificationService(db).send(recipient_id, data.message, data.type)
    return NotificationRead.model_validate(notification)


def mark_notification_read(db: Session, notification_id: int, current_user: dict) -> NotificationRead:
    notification = NotificationService(db).mark_read(notification_id, current_user["id"])
    return NotificationRead.model_validate(notification)


def mark_all_notifications_read(db: Session, current_user: dict) -> MarkAllReadResponse:
    return MarkAllReadResponse(updated=NotificationService(db).mark_all_read(current_user["id"]))
