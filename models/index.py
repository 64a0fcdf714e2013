from config.database import engine, SessionLocal, Base

# Importing every model registers its table on Base.metadata and lets the
# string-based relationship() targets resolve.
from api.user.user_model import User, UserRole
from api.volunteer_profile.volunteer_profile_model import VolunteerProfile
from api.events.events_model import Event
from api.events.participation_model import Participation, ParticipationStatus
from api.notifications.notifications_model import Notification, NotificationType

models = {
    model.__tablename__: model
    for model in (User, VolunteerProfile, Event, Participation, Notification)
}

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "models",
    "User",
    "UserRole",
    "VolunteerProfile",
    "Event",
    "Participation",
    "ParticipationStatus",
    "Notification",
    "NotificationType",
]
