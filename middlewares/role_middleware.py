from fastapi import Depends
from typing import List, Dict, Any
from middlewares.auth_middleware import auth_middleware
from helpers.errors import Forbidden


def role_middleware(required_roles: List[str] = None):
    # avoid mutable default args
    required_roles = required_roles or []

    def dependency(user: Dict[str, Any] = Depends(auth_middleware)):
        # auth_middleware already raises 401 for bad tokens, so user is guaranteed
        if required_roles and user.get("role") not in required_roles:
            raise Forbidden(f"Admin access required: requires one of roles {required_roles}")
        return user

    return dependency


admin_required = role_middleware(required_roles=["admin"])
