# api/notifications/notifications_schema.py
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, field_validator
from datetime import datetime
from typing import List, Optional

from api.notifications.notifications_model import NotificationType
from utils.datetime_utils import as_utc


class NotificationRead(BaseModel):
    id: int
    user_id: int
    message: str
    type: NotificationType
    read: bool = Field(..., validation_alias=AliasChoices("read_status", "read"))
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class NotificationCreate(BaseModel):
    """Omit user_id to notify yourself; admins may target any account."""
    user_id: Optional[int] = None
    message: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.general

    model_config = ConfigDict(extra="forbid")


class NotificationList(BaseModel):
    unread_count: int
    notifications: List[NotificationRead]


class MarkAllReadResponse(BaseModel):
    updated: int
