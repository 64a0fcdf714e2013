from sqlalchemy.orm import Session

from api.user.user_model import UserRole
from api.user.user_schema import (
    UserRegister,
    UserResponse,
    LoginRequest,
    TokenResponse,
    UserUpdate,
)
from api.user.user_service import (
    create_user,
    authenticate_user,
    get_user_or_404,
    update_user_name,
    assign_role,
)
from helpers.token_helper import create_user_token


def register_user(req: UserRegister, db: Session) -> TokenResponse:
    """Sign-up: every new account starts as a volunteer."""
    user = create_user(db, req)
    return TokenResponse(
        access_token=create_user_token(user),
        user=UserResponse.model_validate(user),
    )


def login_user(credentials: LoginRequest, db: Session) -> TokenResponse:
    user = authenticate_user(db, credentials.email, credentials.password)
    return TokenResponse(
        access_token=create_user_token(user),
        user=UserResponse.model_validate(user),
    )


def get_current_account(current_user: dict, db: Session) -> UserResponse:
    user = get_user_or_404(db, current_user["id"])
    return UserResponse.model_validate(user)


def update_account(data: UserUpdate, current_user: dict, db: Session) -> UserResponse:
    user = update_user_name(db, current_user["id"], data.name, actor_id=current_user["id"])
    return UserResponse.model_validate(user)


def set_account_role(user_id: int, role: UserRole, db: Session) -> UserResponse:
    return UserResponse.model_validate(assign_role(db, user_id, role))
