"""Service for Staff module: the agency's users."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User, UserRole
from voyage.core.auth.password import hash_password
from voyage.core.exceptions import (
    AuthorizationError,
    ConflictError,
    DuplicateError,
    LimitReachedError,
    NotFoundError,
    ValidationError,
)
from voyage.modules.branches.models import Branch
from voyage.modules.follow_ups.models import FollowUp
from voyage.modules.staff.schemas import StaffCreate, StaffUpdate
from voyage.modules.subscriptions.service import current_package
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import apply_sort, contains, paginate

logger = logging.getLogger(__name__)

SORTABLE = {
    "id": User.id,
    "name": User.name,
    "email": User.email,
    "role": User.role,
    "created_at": User.created_at,
}


class StaffService:
    """Service for managing agency staff accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    def _scoped(self, actor: User):
        query = select(User).where(User.agency_id == actor.agency_id)
        if actor.branch_scope is not None:
            query = query.where(User.branch_id == actor.branch_scope)
        return query.options(selectinload(User.branch))

    async def get_staff_by_id(self, user_id: int, actor: User) -> User:
        """Get a staff member visible to ``actor``."""
        result = await self.db.execute(
            self._scoped(actor)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User", user_id)
        return user

    async def _ensure_email_free(self, email: str, exclude_id: int | None = None) -> None:
        query = select(User.id).where(func.lower(User.email) == email.lower())
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        if (await self.db.execute(query)).first():
            raise DuplicateError("User", "email", email)

    async def _resolve_branch(self, role: UserRole, branch_id: int | None, actor: User) -> int | None:
        """
        Branch a staff member is attached to.

        Agency admins work across branches; everybody else needs a branch of
        the actor's agency. Branch admins can only staff their own branch.
        """
        if role == UserRole.ADMIN:
            if not actor.is_agency_admin:
                raise AuthorizationError("Only an agency admin can create admins")
            return None
        if actor.branch_scope is not None:
            branch_id = actor.branch_scope
        if branch_id is None:
            raise ValidationError("Branch is required", field="branch_id")
        result = await self.db.execute(
            select(Branch.id).where(Branch.id == branch_id, Branch.agency_id == actor.agency_id)
        )
        if result.first() is None:
            raise ValidationError(f"Branch with id={branch_id} does not exist", field="branch_id")
        return branch_id

    async def _check_branch_capacity(self, agency_id: int, branch_id: int | None) -> None:
        if branch_id is None:
            return
        package = await current_package(self.db, agency_id)
        result = await self.db.execute(
            select(func.count()).select_from(User).where(User.branch_id == branch_id)
        )
        if result.scalar_one() >= package.users_per_branch:
            raise LimitReachedError(
                f"Your package allows {package.users_per_branch} user(s) per branch. "
                "Upgrade the package to add more.",
                field="branch_id",
            )

    async def create_staff(self, data: StaffCreate, actor: User) -> User:
        """Create a staff member in the actor's agency."""
        await self._ensure_email_free(data.email)
        branch_id = await self._resolve_branch(data.role, data.branch_id, actor)
        await self._check_branch_capacity(actor.agency_id, branch_id)

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            name=data.name,
            communication_email=data.communication_email,
            mobile1=data.mobile1,
            mobile2=data.mobile2,
            role=data.role.value,
            is_active=True,
            agency_id=actor.agency_id,
            branch_id=branch_id,
        )
        self.db.add(user)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="User",
            entity_id=user.id,
            user_id=actor.id,
            agency_id=actor.agency_id,
            entity_identifier=user.email,
            new_values={"email": user.email, "name": user.name, "role": user.role, "branch_id": branch_id},
        )
        await self.db.commit()
        return await self.get_staff_by_id(user.id, actor)

    async def list_staff(
        self,
        actor: User,
        search: str | None = None,
        role: UserRole | None = None,
        is_active: bool | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        query = self._scoped(actor)
        condition = contains(search, User.name, User.email, User.mobile1)
        if condition is not None:
            query = query.where(condition)
        if role is not None:
            query = query.where(User.role == role.value)
        if is_active is not None:
            query = query.where(User.is_active == is_active)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_staff(self, actor: User) -> list[User]:
        result = await self.db.execute(self._scoped(actor).order_by(User.name))
        return list(result.scalars().all())

    async def update_staff(self, user_id: int, data: StaffUpdate, actor: User) -> User:
        user = await self.get_staff_by_id(user_id, actor)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("email") and changes["email"] != user.email:
            await self._ensure_email_free(changes["email"], exclude_id=user_id)

        if "role" in changes or "branch_id" in changes:
            role = changes.get("role") or UserRole(user.role)
            branch_id = await self._resolve_branch(
                role, changes.get("branch_id", user.branch_id), actor
            )
            if branch_id is not None and branch_id != user.branch_id:
                await self._check_branch_capacity(actor.agency_id, branch_id)
            changes["role"] = role.value
            changes["branch_id"] = branch_id

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if value is None and field in ("name", "email", "role"):
                continue
            if getattr(user, field) != value:
                old_values[field] = getattr(user, field)
                setattr(user, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="User",
                entity_id=user.id,
                user_id=actor.id,
                agency_id=actor.agency_id,
                entity_identifier=user.email,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        return await self.get_staff_by_id(user_id, actor)

    async def change_password(self, user_id: int, password: str, actor: User) -> None:
        user = await self.get_staff_by_id(user_id, actor)
        user.password_hash = hash_password(password)
        await self.audit.log(
            action=AuditAction.CHANGE_PASSWORD,
            entity_type="User",
            entity_id=user.id,
            user_id=actor.id,
            agency_id=actor.agency_id,
            entity_identifier=user.email,
        )
        await self.db.commit()

    async def set_active(self, user_id: int, is_active: bool, actor: User) -> User:
        """Activate or deactivate a staff member. Nobody can deactivate themselves."""
        user = await self.get_staff_by_id(user_id, actor)
        if user.id == actor.id and not is_active:
            raise ValidationError("You cannot deactivate your own account")
        if user.is_active != is_active:
            user.is_active = is_active
            await self.audit.log(
                action=AuditAction.ACTIVATE if is_active else AuditAction.DEACTIVATE,
                entity_type="User",
                entity_id=user.id,
                user_id=actor.id,
                agency_id=actor.agency_id,
                entity_identifier=user.email,
                old_values={"is_active": not is_active},
                new_values={"is_active": is_active},
            )
        await self.db.commit()
        return await self.get_staff_by_id(user_id, actor)

    async def delete_staff(self, user_id: int, actor: User) -> None:
        user = await self.get_staff_by_id(user_id, actor)
        if user.id == actor.id:
            raise ValidationError("You cannot delete your own account")

        follow_ups = await self.db.execute(
            select(func.count()).select_from(FollowUp).where(FollowUp.user_id == user_id)
        )
        if follow_ups.scalar_one():
            raise ConflictError(
                "Cannot delete this user because they recorded follow-ups. "
                "Deactivate the account instead."
            )

        await self.db.delete(user)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="User",
            entity_id=user_id,
            user_id=actor.id,
            agency_id=actor.agency_id,
            entity_identifier=user.email,
        )
        await self.db.commit()
        logger.info("Deleted user %s of agency %s", user_id, actor.agency_id)
