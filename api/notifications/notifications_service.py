import logging
from typing import List, Optional

from blinker import signal
from sqlalchemy.orm import Session

from api.user.user_model import User
from api.events.events_model import Event
from api.events.participation_model import Participation
from api.notifications.notifications_model import Notification, NotificationType
from api.notifications.notifications_schema import NotificationRead
from api.notifications.notification_hub import NotificationHub, notification_hub
from helpers.errors import Forbidden, NotFound
from config.settings import settings

logger = logging.getLogger(__name__)

# ------------------------------------------
# Define signals
# ------------------------------------------
event_joined        = signal("event_joined")
attendance_recorded = signal("attendance_recorded")
event_deleted       = signal("event_deleted")


class NotificationService:
    def __init__(self, db: Session, hub: Optional[NotificationHub] = None):
        self.db = db
        self.hub = hub if hub is not None else notification_hub

    def send(
        self,
        recipient_id: int,
        message: str,
        type: NotificationType = NotificationType.general,
    ) -> Notification:
        """Insert, commit, then push the committed row to live subscribers."""
        if not self.db.get(User, recipient_id):
            raise NotFound(f"Account {recipient_id} not found")

        notification = Notification(
            user_id=recipient_id,
            message=message,
            type=type,
            read_status=False,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)

        delivered = self.hub.publish(NotificationRead.model_validate(notification))
        logger.info(
            "notification %s sent to %s (%s live subscriber(s))",
            notification.id, recipient_id, delivered,
        )
        return notification

    def mark_read(self, notification_id: int, actor_id: int) -> Notification:
        notification = self.db.get(Notification, notification_id)
        if not notification:
            raise NotFound(f"Notification {notification_id} not found")
        if notification.user_id != actor_id:
            raise Forbidden("Only the recipient can mark a notification as read")

        if not notification.read_status:
            notification.read_status = True
            self.db.commit()
            self.db.refresh(notification)
        return notification

    def mark_all_read(self, actor_id: int) -> int:
        updated = (
            self.db.query(Notification)
            .filter(Notification.user_id == actor_id, Notification.read_status.is_(False))
            .update({Notification.read_status: True}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated

    def list_for(self, actor_id: int, limit: Optional[int] = None) -> List[Notification]:
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == actor_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit or settings.NOTIFICATIONS_PAGE_SIZE)
            .all()
        )

    def unread_count(self, actor_id: int) -> int:
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == actor_id, Notification.read_status.is_(False))
            .count()
        )


# ------------------------------------------
# Listeners. Notifications are a best-effort side effect: the ledger write
# they follow is already committed, so a failure here is logged and dropped.
# ------------------------------------------
@event_joined.connect
def on_event_joined(sender, **kwargs):
    db: Session = kwargs["db"]
    participation: Participation = kwargs["participation"]
    try:
        event = db.get(Event, participation.event_id)
        volunteer = db.get(User, participation.volunteer_id)
        if not event or event.created_by == participation.volunteer_id:
            return
        name = volunteer.display_name if volunteer else "A volunteer"
        NotificationService(db).send(
            event.created_by,
            f"{name} joined your event '{event.title}'.",
            NotificationType.event,
        )
    except Exception:
        db.rollback()
        logger.exception("could not notify creator about join of event %s", participation.event_id)


@attendance_recorded.connect
def on_attendance_recorded(sender, **kwargs):
    db: Session = kwargs["db"]
    participation: Participation = kwargs["participation"]
    try:
        event = db.get(Event, participation.event_id)
        title = event.title if event else "an event"
        NotificationService(db).send(
            participation.volunteer_id,
            f"Your attendance at '{title}' was recorded ({participation.hours} hours). Thank you!",
            NotificationType.event,
        )
    except Exception:
        db.rollback()
        logger.exception("could not notify volunteer %s about attendance", participation.volunteer_id)


@event_deleted.connect
def on_event_deleted(sender, **kwargs):
    db: Session = kwargs["db"]
    title: str = kwargs["title"]
    volunteer_ids: List[int] = kwargs.get("volunteer_ids", [])
    service = NotificationService(db)
    for volunteer_id in volunteer_ids:
        try:
            service.send(volunteer_id, f"The event '{title}' has been cancelled.", NotificationType.alert)
        except Exception:
            db.rollback()
            logger.exception("could not notify volunteer %s about deleted event", volunteer_id)
