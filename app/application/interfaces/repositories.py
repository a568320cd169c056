"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit import AuditCreate, AuditResult


# Audit repository interface
class IAuditRepository(Protocol):
    """Protocol for the local audit store (DIP). Each method is one statement."""

    async def create(self, data: AuditCreate) -> AuditResult:
        """Insert one audit record; return it with server-assigned id and created_at."""

    async def get_by_id(self, audit_id: int) -> AuditResult | None:
        """Return audit by id, or None."""

    async def list_all(self) -> list[AuditResult]:
        """Return all audits, newest first."""

    async def list_by_user(self, user_name: str) -> list[AuditResult]:
        """Return audits performed by user_name, newest first."""

    async def mark_resolved(
        self, audit_id: int, resolved_at: datetime, resolved_by: str
    ) -> AuditResult | None:
        """Set status=resolved on an unresolved mismatch; None if no row qualified."""

    async def delete(self, audit_id: int) -> bool:
        """Delete audit by id; return True if a row was removed."""
