"""Service for Branches module."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.auth.models import User
from voyage.core.exceptions import ConflictError, LimitReachedError
from voyage.modules.bookings.models import Booking
from voyage.modules.branches.models import Branch
from voyage.modules.branches.schemas import BranchCreate, BranchUpdate
from voyage.modules.group_bookings.models import GroupBooking
from voyage.modules.subscriptions.service import current_package
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import apply_sort, contains, ensure_unique, get_owned, paginate

SORTABLE = {
    "id": Branch.id,
    "branch_name": Branch.branch_name,
    "contact_name": Branch.contact_name,
    "created_at": Branch.created_at,
}


class BranchService:
    """Service for agency branches."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _count(self, model, *conditions) -> int:
        result = await self.db.execute(select(func.count()).select_from(model).where(*conditions))
        return result.scalar_one()

    async def create_branch(self, agency_id: int, data: BranchCreate, created_by_id: int) -> Branch:
        """Create a branch while the package allows more of them."""
        package = await current_package(self.db, agency_id)
        if await self._count(Branch, Branch.agency_id == agency_id) >= package.number_of_branches:
            raise LimitReachedError(
                f"Your package allows {package.number_of_branches} branch(es). "
                "Upgrade the package to add more."
            )
        await ensure_unique(
            self.db, Branch.branch_name, data.branch_name, "Branch", Branch.agency_id == agency_id
        )

        branch = Branch(agency_id=agency_id, **data.model_dump())
        self.db.add(branch)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Branch",
            entity_id=branch.id,
            user_id=created_by_id,
            agency_id=agency_id,
            entity_identifier=branch.branch_name,
            new_values=data.model_dump(),
        )
        await self.db.commit()
        await self.db.refresh(branch)
        return branch

    async def get_branch_by_id(self, branch_id: int, agency_id: int) -> Branch:
        return await get_owned(self.db, Branch, branch_id, agency_id, "Branch")

    async def list_branches(
        self,
        agency_id: int,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Branch], int]:
        query = select(Branch).where(Branch.agency_id == agency_id)
        condition = contains(search, Branch.branch_name, Branch.contact_name, Branch.contact_email)
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_branches(self, agency_id: int) -> list[Branch]:
        result = await self.db.execute(
            select(Branch).where(Branch.agency_id == agency_id).order_by(Branch.branch_name)
        )
        return list(result.scalars().all())

    async def update_branch(
        self, branch_id: int, agency_id: int, data: BranchUpdate, updated_by_id: int
    ) -> Branch:
        branch = await self.get_branch_by_id(branch_id, agency_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("branch_name") and changes["branch_name"] != branch.branch_name:
            await ensure_unique(
                self.db,
                Branch.branch_name,
                changes["branch_name"],
                "Branch",
                Branch.agency_id == agency_id,
                exclude_id=branch_id,
            )

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(branch, field) != value:
                old_values[field] = getattr(branch, field)
                setattr(branch, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Branch",
                entity_id=branch_id,
                user_id=updated_by_id,
                agency_id=agency_id,
                old_values=old_values,
                new_values=new_values,
            )
        await self.db.commit()
        await self.db.refresh(branch)
        return branch

    async def delete_branch(self, branch_id: int, agency_id: int, deleted_by_id: int) -> None:
        """Delete a branch that has no staff and no bookings."""
        branch = await self.get_branch_by_id(branch_id, agency_id)

        in_use = (
            await self._count(User, User.branch_id == branch_id)
            + await self._count(Booking, Booking.branch_id == branch_id)
            + await self._count(GroupBooking, GroupBooking.branch_id == branch_id)
        )
        if in_use:
            raise ConflictError(
                "Cannot delete this branch because staff or bookings are assigned to it. "
                "Please remove those first."
            )

        await self.db.delete(branch)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Branch",
            entity_id=branch_id,
            user_id=deleted_by_id,
            agency_id=agency_id,
            entity_identifier=branch.branch_name,
        )
        await self.db.commit()
