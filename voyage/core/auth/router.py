from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import CurrentUser, require_permission
from voyage.core.auth.models import ROLE_LABELS, User, UserRole
from voyage.core.auth.schemas import (
    AgencySummary,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RefreshRequest,
    RoleResponse,
    SubscriptionSummary,
    TokenResponse,
    UserResponse,
)
from voyage.core.auth.service import AuthService
from voyage.core.database import get_db
from voyage.shared.schemas import ApiResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
roles_router = APIRouter(prefix="/roles", tags=["Roles"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: Request,
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate user and return tokens."""
    auth_service = AuthService(db)

    ip_address = request.client.host if request.client else None

    user, access_token, refresh_token = await auth_service.authenticate(
        email=data.email,
        password=data.password,
        ip_address=ip_address,
    )

    return ApiResponse(
        data=LoginResponse(
            user=UserResponse.model_validate(user),
            access_token=access_token,
            refresh_token=refresh_token,
        ),
        message="Login successful",
    )


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
async def refresh_tokens(
    data: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    """Refresh access token using refresh token."""
    auth_service = AuthService(db)

    access_token, refresh_token = await auth_service.refresh_tokens(data.refresh_token)

    return ApiResponse(
        data=TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
        ),
        message="Tokens refreshed",
    )


def _profile(user: User) -> ProfileResponse:
    agency = None
    if user.agency is not None:
        current = user.agency.current_subscription
        agency = AgencySummary(
            id=user.agency.id,
            business_name=user.agency.business_name,
            subscription=SubscriptionSummary(
                start_date=current.start_date,
                end_date=current.end_date,
                package_name=current.package.package_name if current.package else None,
            )
            if current
            else None,
        )
    return ProfileResponse(
        **UserResponse.model_validate(user).model_dump(),
        branch_name=user.branch.branch_name if user.branch else None,
        agency=agency,
    )


@router.get("/me", response_model=ApiResponse[ProfileResponse])
async def get_current_user_info(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Get current authenticated user with agency and subscription summary."""
    user = await AuthService(db).get_user_profile(current_user.id)
    return ApiResponse(
        data=_profile(user),
        message="User info retrieved",
    )


@roles_router.get("", response_model=ApiResponse[list[RoleResponse]])
async def list_roles(
    current_user: User = Depends(require_permission("roles.read", agency_scoped=False)),
):
    """Roles that can be assigned to staff. Agency admins cannot grant super admin."""
    roles = [role for role in UserRole if current_user.is_super_admin or role != UserRole.SUPER_ADMIN]
    return ApiResponse(
        data=[RoleResponse(value=role.value, label=ROLE_LABELS[role]) for role in roles],
    )
