from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.volunteer_profile.volunteer_profile_controller import get_my_profile, save_my_profile
from api.volunteer_profile.volunteer_profile_schema import ProfileView, VolunteerProfileSave

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileView)
def read_profile(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    """A missing profile is reported with profile_complete=false."""
    return get_my_profile(db, current_user)


@router.put("", response_model=ProfileView)
def write_profile(
    payload: VolunteerProfileSave,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return save_my_profile(payload, db, current_user)
