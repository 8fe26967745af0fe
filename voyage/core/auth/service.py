from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.auth.jwt import create_access_token, create_refresh_token, decode_token
from voyage.core.auth.models import User, UserRole
from voyage.core.auth.password import hash_password, verify_password
from voyage.core.audit import AuditAction, create_audit_log
from voyage.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateError,
    NoAgencyError,
    SubscriptionExpiredError,
)
from voyage.modules.agencies.models import Agency
from voyage.modules.subscriptions.models import Subscription


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_profile(self, user_id: int) -> User | None:
        """Get user with agency, current subscription and branch loaded."""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(
                selectinload(User.agency)
                .selectinload(Agency.current_subscription)
                .selectinload(Subscription.package),
                selectinload(User.branch),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole,
        agency_id: int | None = None,
        branch_id: int | None = None,
        mobile1: str | None = None,
        created_by_id: int | None = None,
    ) -> User:
        """Create a new user."""
        existing = await self.get_user_by_email(email)
        if existing:
            raise DuplicateError("User", "email", email)

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name,
            mobile1=mobile1,
            role=role.value,
            is_active=True,
            agency_id=agency_id,
            branch_id=branch_id,
        )

        self.session.add(user)
        await self.session.flush()

        await create_audit_log(
            self.session,
            action=AuditAction.CREATE,
            entity_type="User",
            entity_id=user.id,
            user_id=created_by_id,
            agency_id=agency_id,
            entity_identifier=user.email,
            new_values={"email": user.email, "role": user.role, "name": user.name},
        )

        return user

    async def _check_subscription(self, user: User) -> None:
        """Agency staff may only sign in while their agency's subscription runs."""
        if user.is_super_admin:
            return
        if user.agency_id is None:
            raise NoAgencyError()

        result = await self.session.execute(
            select(Agency)
            .where(Agency.id == user.agency_id)
            .options(selectinload(Agency.current_subscription))
        )
        agency = result.scalar_one_or_none()
        if agency is None:
            raise NoAgencyError()

        current = agency.current_subscription
        if current is None or current.end_date < date.today():
            raise SubscriptionExpiredError()

    async def authenticate(
        self, email: str, password: str, ip_address: str | None = None
    ) -> tuple[User, str, str]:
        """
        Authenticate user and return tokens.

        Returns:
            Tuple of (user, access_token, refresh_token)

        Raises:
            AuthenticationError: If credentials are invalid
            AuthorizationError: If the account is inactive or the agency subscription expired
        """
        user = await self.get_user_by_email(email)

        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthorizationError("Account is inactive")

        await self._check_subscription(user)

        user.last_login_at = datetime.now(timezone.utc)
        await self.session.flush()

        access_token = create_access_token(user.id, user.role, user.agency_id)
        refresh_token = create_refresh_token(user.id)

        await create_audit_log(
            self.session,
            action=AuditAction.LOGIN,
            entity_type="User",
            entity_id=user.id,
            user_id=user.id,
            agency_id=user.agency_id,
            entity_identifier=user.email,
            ip_address=ip_address,
        )

        return user, access_token, refresh_token

    async def refresh_tokens(self, refresh_token: str) -> tuple[str, str]:
        """
        Refresh access token using refresh token.

        Returns:
            Tuple of (new_access_token, new_refresh_token)
        """
        payload = decode_token(refresh_token, token_type="refresh")

        user_id = int(payload["sub"])
        user = await self.get_user_by_id(user_id)

        if not user:
            raise AuthenticationError("User not found")

        if not user.is_active:
            raise AuthenticationError("User account is deactivated")

        await self._check_subscription(user)

        new_access_token = create_access_token(user.id, user.role, user.agency_id)
        new_refresh_token = create_refresh_token(user.id)

        return new_access_token, new_refresh_token
