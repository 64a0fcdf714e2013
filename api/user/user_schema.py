from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from api.user.user_model import UserRole
from utils.datetime_utils import as_utc


# ----- Shared Schemas -----
class UserBase(BaseModel):
    email: EmailStr = Field(
        ...,
        description="Valid email address required"
    )
    name: Optional[str] = Field(
        None,
        max_length=150,
        description="Display name"
    )

    model_config = ConfigDict(from_attributes=True)


# ----- Registration Schema -----
class UserRegister(BaseModel):
    email: EmailStr = Field(
        ...,
        description="A valid email address"
    )
    password: str = Field(
        ...,
        min_length=6,
        description="At least 6 characters"
    )
    name: Optional[str] = Field(
        None,
        max_length=150,
        description="Display name; defaults to the part of the email before '@'"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


# ----- Response Schema -----
class UserResponse(UserBase):
    id: int
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


# ----- Update Schemas -----
class UserUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)

    model_config = ConfigDict(extra="forbid")


class RoleUpdate(BaseModel):
    role: UserRole


# ----- Auth Schemas -----
class LoginRequest(BaseModel):
    email: EmailStr = Field(
        ..., description="Registered user email"
    )
    password: str = Field(
        ..., min_length=1, description="User password"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
