from voyage.core.audit.models import AuditLog
from voyage.core.audit.service import AuditAction, AuditService, create_audit_log

__all__ = ["AuditLog", "AuditAction", "AuditService", "create_audit_log"]
