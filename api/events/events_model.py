from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from config.database import Base
from utils.datetime_utils import utcnow


class Event(Base):
    __tablename__ = "events"

    id          = Column(Integer, primary_key=True, index=True)
    title       = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date        = Column(DateTime(timezone=True), nullable=False, index=True)
    location    = Column(String(255), nullable=False)
    created_by  = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at  = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at  = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(),
                         onupdate=utcnow, nullable=False)

    creator = relationship("User", back_populates="created_events")

    participations = relationship(
        "Participation",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Event(id={self.id}, title='{self.title}')>"
