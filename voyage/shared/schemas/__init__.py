from voyage.shared.schemas.base import (
    ApiResponse,
    BaseSchema,
    ErrorDetail,
    ErrorResponse,
    OptionResponse,
    PaginatedResponse,
    SortOrder,
)

__all__ = [
    "ApiResponse",
    "BaseSchema",
    "ErrorDetail",
    "ErrorResponse",
    "OptionResponse",
    "PaginatedResponse",
    "SortOrder",
]
