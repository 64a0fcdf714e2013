import logging
from typing import Optional

from passlib.context import CryptContext
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from api.user.user_model import User, UserRole
from api.user.user_schema import UserRegister
from helpers.errors import Forbidden, NotFound, Unauthorized

logger = logging.getLogger(__name__)

# Initialize password hashing context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash the given password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify that the plain password matches the hashed password."""
    return pwd_context.verify(plain, hashed)


def default_name_for(email: str) -> str:
    return email.split("@", 1)[0]


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound(f"Account {user_id} not found")
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, data: UserRegister, role: UserRole = UserRole.volunteer) -> User:
    """
    Create a new account. The email unique index is the source of truth for
    duplicates, so a racing registration still ends in a 409.
    """
    user = User(
        email=data.email.strip().lower(),
        name=data.name or default_name_for(data.email),
        password=hash_password(data.password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered."
        )
    db.refresh(user)
    logger.info("account %s registered as %s", user.id, user.role.value)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password):
        raise Unauthorized("Email or password incorrect")
    return user


def update_user_name(db: Session, user_id: int, name: str, actor_id: int) -> User:
    if user_id != actor_id:
        raise Forbidden("Only the account owner may change the display name")
    user = get_user_or_404(db, user_id)
    user.name = name
    db.commit()
    db.refresh(user)
    return user


def assign_role(db: Session, user_id: int, role: UserRole) -> User:
    user = get_user_or_404(db, user_id)
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info("account %s role set to %s", user.id, role.value)
    return user
