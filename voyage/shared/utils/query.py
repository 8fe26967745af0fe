"""Query helpers shared by services: tenant lookups, uniqueness, search, sorting, pagination."""

from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.exceptions import ConflictError, DuplicateError, NotFoundError, ValidationError
from voyage.shared.schemas import SortOrder


def contains(term: str | None, *columns: Any):
    """OR of case-insensitive substring matches, or None when there is no term."""
    if not term:
        return None
    pattern = f"%{term}%"
    return or_(*(column.ilike(pattern) for column in columns))


def apply_sort(
    query: Select,
    sort_by: str | None,
    sort_order: SortOrder | str | None,
    columns: dict[str, Any],
    default: str = "id",
) -> Select:
    """Order by a whitelisted column; unknown keys fall back to the default column."""
    column = columns.get(sort_by or default, columns[default])
    if str(sort_order) == SortOrder.DESC.value:
        return query.order_by(column.desc())
    return query.order_by(column.asc())


async def paginate(db: AsyncSession, query: Select, page: int, limit: int) -> tuple[list[Any], int]:
    """Run a select with offset/limit and return (items, total)."""
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    offset = (page - 1) * limit
    result = await db.execute(query.offset(offset).limit(limit))
    return list(result.scalars().unique().all()), total


async def get_owned(
    db: AsyncSession,
    model: Any,
    obj_id: int,
    agency_id: int,
    resource: str,
    *options: Any,
) -> Any:
    """
    Fetch a row by id within one agency.

    Rows of other agencies are reported as missing so that ids do not leak
    across tenants.
    """
    query = select(model).where(model.id == obj_id, model.agency_id == agency_id)
    if options:
        query = query.options(*options)
    result = await db.execute(query.execution_options(populate_existing=True))
    obj = result.scalar_one_or_none()
    if obj is None:
        raise NotFoundError(resource, obj_id)
    return obj


async def ensure_unique(
    db: AsyncSession,
    column: Any,
    value: Any,
    resource: str,
    *scope: Any,
    exclude_id: int | None = None,
) -> None:
    """Raise DuplicateError when ``column == value`` already exists within ``scope``."""
    model = column.class_
    query = select(model.id).where(func.lower(column) == str(value).lower(), *scope)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    if (await db.execute(query)).first():
        raise DuplicateError(resource, column.key, value)


async def ensure_not_referenced(db: AsyncSession, obj_id: int, resource: str, *columns: Any) -> None:
    """Raise ConflictError while any of the foreign-key ``columns`` still points at ``obj_id``."""
    for column in columns:
        query = select(func.count()).select_from(column.class_).where(column == obj_id)
        if (await db.execute(query)).scalar_one():
            raise ConflictError(
                f"Cannot delete this {resource} because it is referenced in related data. "
                "Please remove those first."
            )


async def ensure_references(
    db: AsyncSession, agency_id: int, references: dict[str, tuple[Any, int | None]]
) -> None:
    """
    Check that referenced rows exist within the agency.

    ``references`` maps a request field name to ``(model, id)``; ids that are
    None are skipped.
    """
    for field_name, (model, ref_id) in references.items():
        if ref_id is None:
            continue
        result = await db.execute(
            select(model.id).where(model.id == ref_id, model.agency_id == agency_id)
        )
        if result.first() is None:
            raise ValidationError(f"{model.__name__} with id={ref_id} does not exist", field=field_name)
