# File: api/volunteer_profile/volunteer_profile_model.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from config.database import Base
from utils.datetime_utils import utcnow


class VolunteerProfile(Base):
    __tablename__ = "volunteer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    # Contact
    phone      = Column(String(30), nullable=True)
    location   = Column(String(150), nullable=True)

    # Free text
    skills     = Column(Text, nullable=True)
    bio        = Column(Text, nullable=True)

    # Audit
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="profile", uselist=False)
