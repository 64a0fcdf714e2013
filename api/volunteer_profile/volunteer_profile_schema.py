from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.user.user_schema import UserResponse
from utils.datetime_utils import as_utc


class VolunteerProfileBase(BaseModel):
    phone: Optional[str] = Field(None, max_length=30)
    location: Optional[str] = Field(None, max_length=150)
    skills: Optional[str] = None
    bio: Optional[str] = None


class VolunteerProfileSave(VolunteerProfileBase):
    """Profile form payload; `name` renames the owning account."""
    name: Optional[str] = Field(None, min_length=1, max_length=150)

    model_config = ConfigDict(extra="forbid")


class VolunteerProfileResponse(VolunteerProfileBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class ProfileView(BaseModel):
    account: UserResponse
    profile: Optional[VolunteerProfileResponse] = None
    profile_complete: bool
