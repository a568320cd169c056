"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.audit_repo import AuditRepository

__all__ = [
    "AuditRepository",
]
