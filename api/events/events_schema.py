# api/events/events_schema.py

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime

from utils.datetime_utils import as_utc


# ─── Base / Create / Update ────────────────────────────────────────────────────
class EventBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str
    date: datetime
    location: str = Field(..., min_length=1, max_length=255)


class EventCreate(EventBase):
    model_config = ConfigDict(extra="forbid")

    @field_validator("date")
    @classmethod
    def store_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class EventUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator("date")
    @classmethod
    def store_as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


# ─── "Read" Schema for Everyone ───────────────────────────────────────────────
class EventRead(EventBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_by: int
    created_at: datetime
    updated_at: datetime

    # extras
    participant_count: int = 0
    attended_count: int = 0
    created_by_name: Optional[str] = None
    is_joined: bool = False

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class EventCounts(BaseModel):
    event_id: int
    participant_count: int
    attended_count: int
