from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base Pydantic schema reading straight from ORM rows."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ApiResponse(BaseSchema, Generic[T]):
    """Envelope of every successful JSON response: ``{success, data, message}``."""

    success: bool = True
    data: T
    message: str | None = None


class ErrorDetail(BaseSchema):
    """One offending input; ``field`` is a dotted path such as ``details.0.city_id``."""

    field: str | None = None
    message: str


class ErrorResponse(BaseSchema):
    success: bool = False
    data: None = None
    message: str
    errors: list[ErrorDetail] = []


class PaginatedResponse(BaseSchema, Generic[T]):
    """One page of a list endpoint."""

    items: list[T]
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def create(cls, items: list[T], total: int, page: int, limit: int) -> "PaginatedResponse[T]":
        pages = -(-total // limit) if limit > 0 else 0
        return cls(items=items, total=total, page=page, limit=limit, pages=pages)


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class OptionResponse(BaseSchema):
    """Id/name pair for drop-down lists (``/all`` endpoints)."""

    id: int
    name: str
