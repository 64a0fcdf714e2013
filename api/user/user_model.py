# api/user/user_model.py
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from config.database import Base
from utils.datetime_utils import utcnow
import enum


class UserRole(str, enum.Enum):
    volunteer = 'volunteer'
    admin     = 'admin'


class User(Base):
    __tablename__ = 'users'

    id          = Column(Integer, primary_key=True, index=True)
    # always stored lower-cased, which makes the unique index case-insensitive
    email       = Column(String(255), nullable=False, unique=True, index=True)
    name        = Column(String(150), nullable=True)
    password    = Column(String(255), nullable=False)
    role        = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.volunteer)
    created_at  = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at  = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    profile = relationship(
        "VolunteerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    created_events = relationship(
        "Event",
        back_populates="creator",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    participations = relationship(
        "Participation",
        back_populates="volunteer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    notifications = relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value if self.role else None})>"
