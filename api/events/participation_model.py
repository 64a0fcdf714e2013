from sqlalchemy import Column, Integer, Enum, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from config.database import Base
from utils.datetime_utils import utcnow


class ParticipationStatus(str, enum.Enum):
    joined    = 'joined'
    attended  = 'attended'
    cancelled = 'cancelled'


class Participation(Base):
    __tablename__ = 'event_participants'
    __table_args__ = (
        # One participation per volunteer per event; concurrent joins race on this index
        UniqueConstraint('event_id', 'volunteer_id', name='uq_event_volunteer'),
        CheckConstraint('hours >= 0', name='ck_event_participants_hours_non_negative'),
    )

    id           = Column(Integer, primary_key=True, index=True)
    event_id     = Column(Integer, ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True)
    volunteer_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    status       = Column(
        Enum(ParticipationStatus, name='participation_status'),
        nullable=False,
        default=ParticipationStatus.joined
    )
    hours        = Column(Integer, nullable=False, default=0)
    created_at   = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at   = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False
    )

    event     = relationship("Event", back_populates="participations")
    volunteer = relationship("User", back_populates="participations")
