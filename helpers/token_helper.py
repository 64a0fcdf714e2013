import jwt
import datetime
from typing import Any, Dict, Optional

from config.settings import settings  # must define SECRET_KEY and ALGORITHM
from api.user.user_model import User


def create_access_token(
    payload: Dict[str, Any],
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=minutes)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: User, expires_minutes: Optional[int] = None) -> str:
    """
    Generate a JWT for a User. Only the account id is embedded; the role is
    looked up again on every request so role changes apply on the next read.
    """
    return create_access_token({"id": user.id}, expires_minutes)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Raises jwt.InvalidTokenError (or a subclass) on a bad token."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
