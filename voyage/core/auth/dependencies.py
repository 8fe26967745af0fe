from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.jwt import decode_token
from voyage.core.auth.models import User, UserRole
from voyage.core.auth.permissions import roles_for
from voyage.core.auth.service import AuthService
from voyage.core.database import get_db
from voyage.core.exceptions import AuthenticationError, AuthorizationError, NoAgencyError


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Usage:
        @router.get("/me")
        async def get_me(user: User = Depends(get_current_user)):
            return user
    """
    if not authorization:
        raise AuthenticationError("Authorization header required")

    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")

    token = authorization.replace("Bearer ", "")

    payload = decode_token(token, token_type="access")
    user_id = int(payload["sub"])

    auth_service = AuthService(db)
    user = await auth_service.get_user_by_id(user_id)

    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is deactivated")

    return user


def require_roles(*roles: UserRole):
    """
    Dependency factory to require specific roles.

    Usage:
        @router.post("/packages")
        async def create_package(
            user: User = Depends(require_roles(UserRole.SUPER_ADMIN))
        ):
            ...
    """

    async def role_checker(
        current_user: User = Depends(get_current_user),
    ) -> User:
        if not current_user.has_role(*roles):
            allowed = ", ".join(r.value for r in roles)
            raise AuthorizationError(f"Required role: {allowed}")
        return current_user

    return role_checker


def require_permission(permission: str, agency_scoped: bool = True):
    """
    Dependency factory to require a permission string such as ``clients.read``.

    With ``agency_scoped`` the user must also belong to an agency, since the
    route reads or writes that agency's data.
    """

    async def permission_checker(
        current_user: User = Depends(get_current_user),
    ) -> User:
        if agency_scoped and current_user.agency_id is None:
            raise NoAgencyError()
        if not current_user.has_role(*roles_for(permission)):
            raise AuthorizationError(f"Missing permission: {permission}")
        return current_user

    return permission_checker


# Convenience dependencies
CurrentUser = Annotated[User, Depends(get_current_user)]
SuperAdminUser = Annotated[User, Depends(require_roles(UserRole.SUPER_ADMIN))]
