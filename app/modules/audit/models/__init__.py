from .audit_log_models import AuditLog

__all__ = ["AuditLog"]
