from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
from sqlalchemy.orm import Session
from config.database import get_db
from api.user.user_model import User
from helpers.errors import Unauthorized
from helpers.token_helper import decode_access_token

# auto_error=False so a missing header is a 401, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


def current_user_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.display_name,
        "role": user.role.value,
        "roles": [user.role.value],
    }


def resolve_token(token: Optional[str], db: Session) -> Dict[str, Any]:
    """Resolve a bearer token to the current account, reading the role fresh."""
    if not token:
        raise Unauthorized("Missing bearer token")
    try:
        decoded = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    user_id = decoded.get("id")
    if not user_id:
        # token was structurally OK but payload missing
        raise Unauthorized("Invalid token payload")

    user = db.get(User, user_id)
    if not user:
        raise Unauthorized("Account no longer exists")

    return current_user_dict(user)


def auth_middleware(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
):
    token = credentials.credentials if credentials else None
    return resolve_token(token, db)
