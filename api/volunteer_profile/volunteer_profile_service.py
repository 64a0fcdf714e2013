# api/volunteer_profile/volunteer_profile_service.py

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from api.user.user_model import User
from api.volunteer_profile.volunteer_profile_model import VolunteerProfile
from helpers.errors import NotFound

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("phone", "location", "skills", "bio")


def get_user_with_profile(db: Session, user_id: int) -> Optional[User]:
    """
    Retrieve the User and its VolunteerProfile (if any) in one query.
    Returns None if no User with that ID exists.
    """
    return (
        db.query(User)
        .options(selectinload(User.profile))
        .filter(User.id == user_id)
        .first()
    )


def load_profile(db: Session, user_id: int) -> Tuple[User, Optional[VolunteerProfile]]:
    user = get_user_with_profile(db, user_id)
    if not user:
        raise NotFound(f"Account {user_id} not found")
    return user, user.profile


def save_profile(db: Session, user_id: int, data: dict) -> Tuple[User, VolunteerProfile]:
    """
    Create the profile on first save, otherwise patch only the provided
    fields. A `name` key renames the account itself.
    """
    user, profile = load_profile(db, user_id)

    if profile is None:
        profile = VolunteerProfile(user_id=user.id)
        db.add(profile)
        logger.info("creating volunteer profile for account %s", user.id)

    for key in PROFILE_FIELDS:
        if key in data:
            setattr(profile, key, data[key])

    name = data.get("name")
    if name and name != user.name:
        user.name = name

    db.commit()
    db.refresh(profile)
    db.refresh(user)
    return user, profile
