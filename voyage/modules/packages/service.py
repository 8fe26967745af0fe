"""Service for Packages module."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.audit.service import AuditAction, AuditService
from voyage.core.exceptions import ConflictError, DuplicateError, NotFoundError
from voyage.modules.packages.models import Package
from voyage.modules.packages.schemas import PackageCreate, PackageUpdate
from voyage.modules.subscriptions.models import Subscription
from voyage.shared.schemas import SortOrder
from voyage.shared.utils.query import apply_sort, contains, paginate

SORTABLE = {
    "id": Package.id,
    "package_name": Package.package_name,
    "cost": Package.cost,
    "period_in_months": Package.period_in_months,
}


class PackageService:
    """Service for managing subscription packages."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.audit = AuditService(db)

    async def _ensure_unique_name(self, name: str, exclude_id: int | None = None) -> None:
        query = select(Package.id).where(Package.package_name == name)
        if exclude_id is not None:
            query = query.where(Package.id != exclude_id)
        if (await self.db.execute(query)).first():
            raise DuplicateError("Package", "package_name", name)

    async def create_package(self, data: PackageCreate, created_by_id: int) -> Package:
        """Create a new package."""
        await self._ensure_unique_name(data.package_name)

        package = Package(**data.model_dump())
        self.db.add(package)
        await self.db.flush()

        await self.audit.log(
            action=AuditAction.CREATE,
            entity_type="Package",
            entity_id=package.id,
            user_id=created_by_id,
            new_values=data.model_dump(),
        )

        await self.db.commit()
        await self.db.refresh(package)
        return package

    async def get_package_by_id(self, package_id: int) -> Package:
        """Get package by ID."""
        result = await self.db.execute(select(Package).where(Package.id == package_id))
        package = result.scalar_one_or_none()
        if not package:
            raise NotFoundError("Package", package_id)
        return package

    async def list_packages(
        self,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Package], int]:
        """List packages with search and sorting."""
        query = select(Package)
        condition = contains(search, Package.package_name)
        if condition is not None:
            query = query.where(condition)
        query = apply_sort(query, sort_by, sort_order, SORTABLE)
        return await paginate(self.db, query, page, limit)

    async def list_all_packages(self) -> list[Package]:
        """All packages for selection lists."""
        result = await self.db.execute(select(Package).order_by(Package.package_name))
        return list(result.scalars().all())

    async def update_package(
        self, package_id: int, data: PackageUpdate, updated_by_id: int
    ) -> Package:
        """Update a package. Existing subscriptions keep the cost they were sold at."""
        package = await self.get_package_by_id(package_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "package_name" in changes and changes["package_name"] != package.package_name:
            await self._ensure_unique_name(changes["package_name"], exclude_id=package_id)

        old_values = {}
        new_values = {}
        for field, value in changes.items():
            if getattr(package, field) != value:
                old_values[field] = getattr(package, field)
                setattr(package, field, value)
                new_values[field] = value

        if new_values:
            await self.audit.log(
                action=AuditAction.UPDATE,
                entity_type="Package",
                entity_id=package_id,
                user_id=updated_by_id,
                old_values=old_values,
                new_values=new_values,
            )

        await self.db.commit()
        await self.db.refresh(package)
        return package

    async def delete_package(self, package_id: int, deleted_by_id: int) -> None:
        """Delete a package that no subscription uses."""
        package = await self.get_package_by_id(package_id)

        in_use = await self.db.execute(
            select(func.count()).select_from(Subscription).where(Subscription.package_id == package_id)
        )
        if in_use.scalar_one():
            raise ConflictError(
                "Cannot delete this package because subscriptions use it. Please remove those first."
            )

        await self.db.delete(package)
        await self.audit.log(
            action=AuditAction.DELETE,
            entity_type="Package",
            entity_id=package_id,
            user_id=deleted_by_id,
            entity_identifier=package.package_name,
        )
        await self.db.commit()
