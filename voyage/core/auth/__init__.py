from voyage.core.auth.models import User, UserRole
from voyage.core.auth.service import AuthService
from voyage.core.auth.jwt import create_access_token, create_refresh_token, decode_token
from voyage.core.auth.dependencies import get_current_user, require_permission, require_roles

__all__ = [
    "User",
    "UserRole",
    "AuthService",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "get_current_user",
    "require_permission",
    "require_roles",
]
