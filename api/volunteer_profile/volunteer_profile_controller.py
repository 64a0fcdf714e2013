from sqlalchemy.orm import Session

from api.user.user_schema import UserResponse
from api.volunteer_profile.volunteer_profile_schema import (
    ProfileView,
    VolunteerProfileResponse,
    VolunteerProfileSave,
)
from api.volunteer_profile.volunteer_profile_service import load_profile, save_profile


def _view(user, profile) -> ProfileView:
    return ProfileView(
        account=UserResponse.model_validate(user),
        profile=VolunteerProfileResponse.model_validate(profile) if profile else None,
        profile_complete=profile is not None,
    )


def get_my_profile(db: Session, current_user: dict) -> ProfileView:
    user, profile = load_profile(db, current_user["id"])
    return _view(user, profile)


def save_my_profile(payload: VolunteerProfileSave, db: Session, current_user: dict) -> ProfileView:
    user, profile = save_profile(db, current_user["id"], payload.model_dump(exclude_unset=True))
    return _view(user, profile)
