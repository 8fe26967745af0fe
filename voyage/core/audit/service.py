from enum import StrEnum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.audit.models import AuditLog


class AuditAction(StrEnum):
    """Standard audit actions."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"

    # Domain-specific actions
    RENEW_SUBSCRIPTION = "RENEW_SUBSCRIPTION"
    ISSUE_INVOICE = "ISSUE_INVOICE"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"
    ADD_FOLLOW_UP = "ADD_FOLLOW_UP"


def _jsonable(values: dict[str, Any] | None) -> dict[str, Any] | None:
    """Dates and decimals are stored as strings in the JSON columns."""
    if values is None:
        return None
    return {
        key: value if value is None or isinstance(value, (str, int, float, bool)) else str(value)
        for key, value in values.items()
    }


class AuditService:
    """Service for creating audit logs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def log(
        self,
        action: str | AuditAction,
        entity_type: str,
        entity_id: int,
        user_id: int | None = None,
        agency_id: int | None = None,
        entity_identifier: str | None = None,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        ip_address: str | None = None,
    ) -> AuditLog:
        """Create an audit log entry in the current transaction."""
        audit_log = AuditLog(
            user_id=user_id,
            agency_id=agency_id,
            action=str(action),
            entity_type=entity_type,
            entity_id=entity_id,
            entity_identifier=entity_identifier,
            old_values=_jsonable(old_values),
            new_values=_jsonable(new_values),
            ip_address=ip_address,
        )

        self.db.add(audit_log)
        await self.db.flush()

        return audit_log


async def create_audit_log(session: AsyncSession, **kwargs: Any) -> AuditLog:
    """Create an audit log entry without holding an AuditService."""
    return await AuditService(session).log(**kwargs)
