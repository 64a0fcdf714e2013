# api/notifications/notifications_model.py

from sqlalchemy import (
    Column,
    Integer,
    Text,
    Boolean,
    Enum,
    ForeignKey,
    DateTime,
    func,
)
from sqlalchemy.orm import relationship
import enum
from config.database import Base
from utils.datetime_utils import utcnow


class NotificationType(str, enum.Enum):
    event   = "event"
    general = "general"
    alert   = "alert"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    type = Column(
        Enum(NotificationType, name="notification_type"),
        nullable=False,
        default=NotificationType.general,
    )
    read_status = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="notifications")
