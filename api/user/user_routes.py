from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import admin_required
from api.user.user_controller import (
    register_user,
    login_user,
    get_current_account,
    update_account,
    set_account_role,
)
from api.user.user_schema import (
    UserRegister,
    LoginRequest,
    UserUpdate,
    RoleUpdate,
    UserResponse,
    TokenResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ─── Sign-up / Sign-in ─────────────────────────────────────────────────────────
@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED
)
def register(req: UserRegister, db: Session = Depends(get_db)):
    """
    Create a volunteer account and return a bearer token for it.
    """
    return register_user(req, db)


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    return login_user(credentials, db)


# ─── Current session ───────────────────────────────────────────────────────────
@router.get("/me", response_model=UserResponse)
def me(
    current_user=Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    return get_current_account(current_user, db)


@router.put("/me", response_model=UserResponse)
def edit_me(
    data: UserUpdate,
    current_user=Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    return update_account(data, current_user, db)


# ─── Role assignment (admin) ───────────────────────────────────────────────────
@router.put(
    "/users/{user_id}/role",
    response_model=UserResponse,
    dependencies=[Depends(admin_required)],
)
def change_role(
    user_id: int,
    data: RoleUpdate,
    db: Session = Depends(get_db)
):
    return set_account_role(user_id, data.role, db)
