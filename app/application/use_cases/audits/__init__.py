"""Audit use cases."""

from app.application.use_cases.audits.audit_operations import (
    AuditService,
    build_audit_note,
)

__all__ = ["AuditService", "build_audit_note"]
