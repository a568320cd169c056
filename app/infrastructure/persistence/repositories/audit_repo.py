"""Audit repository. Implements IAuditRepository.

Every write is a single statement committed immediately, so callers that
interleave remote calls (resolve batches) never hold a transaction open
across network I/O.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit import AuditCreate, AuditResult
from app.domain.enums import AuditStatus
from app.infrastructure.persistence.models.audit import Audit
from app.shared.utils.datetime import ensure_utc


def _orm_to_result(row: Audit) -> AuditResult:
    """Map ORM to application DTO."""
    return AuditResult(
        id=row.id,
        asset_id=row.asset_id,
        asset_tag=row.asset_tag,
        asset_name=row.asset_name,
        sap_asset_number=row.sap_asset_number,
        expected_location_id=row.expected_location_id,
        expected_location_name=row.expected_location_name,
        actual_location_id=row.actual_location_id,
        actual_location_name=row.actual_location_name,
        status=AuditStatus(row.status),
        notes=row.notes,
        user_name=row.user_name,
        snipeit_audit_posted=bool(row.snipeit_audit_posted),
        created_at=ensure_utc(row.created_at),
        resolved_at=ensure_utc(row.resolved_at),
        resolved_by=row.resolved_by,
    )


class AuditRepository:
    """Audit store over the `audits` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, data: AuditCreate) -> AuditResult:
        """Insert one audit; return it with id and created_at populated."""
        row = Audit(
            asset_id=data.asset_id,
            asset_tag=data.asset_tag,
            asset_name=data.asset_name,
            sap_asset_number=data.sap_asset_number or None,
            expected_location_id=data.expected_location_id,
            expected_location_name=data.expected_location_name,
            actual_location_id=data.actual_location_id,
            actual_location_name=data.actual_location_name,
            status=data.status.value,
            notes=data.notes,
            user_name=data.user_name,
            snipeit_audit_posted=data.snipeit_audit_posted,
        )
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def get_by_id(self, audit_id: int) -> AuditResult | None:
        """Return audit by id, or None."""
        result = await self.db.execute(select(Audit).where(Audit.id == audit_id))
        row = result.scalar_one_or_none()
        return _orm_to_result(row) if row is not None else None

    async def list_all(self) -> list[AuditResult]:
        """Return all audits (newest first)."""
        stmt = select(Audit).order_by(Audit.created_at.desc(), Audit.id.desc())
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def list_by_user(self, user_name: str) -> list[AuditResult]:
        """Return audits performed by user_name (newest first)."""
        stmt = (
            select(Audit)
            .where(Audit.user_name == user_name)
            .order_by(Audit.created_at.desc(), Audit.id.desc())
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]

    async def mark_resolved(
        self, audit_id: int, resolved_at: datetime, resolved_by: str
    ) -> AuditResult | None:
        """Resolve an unresolved mismatch in one conditional UPDATE.

        Returns the updated record, or None when the row is gone, not a
        mismatch, or already resolved (a concurrent resolve won).
        """
        stmt = (
            update(Audit)
            .where(
                Audit.id == audit_id,
                Audit.status == AuditStatus.MISMATCH.value,
                Audit.resolved_at.is_(None),
            )
            .values(
                status=AuditStatus.RESOLVED.value,
                resolved_at=resolved_at,
                resolved_by=resolved_by,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        if result.rowcount == 0:
            return None
        # The row may already sit in the identity map with pre-update values.
        refreshed = await self.db.execute(
            select(Audit)
            .where(Audit.id == audit_id)
            .execution_options(populate_existing=True)
        )
        row = refreshed.scalar_one_or_none()
        return _orm_to_result(row) if row is not None else None

    async def delete(self, audit_id: int) -> bool:
        """Delete audit by id; return True if a row was removed."""
        result = await self.db.execute(delete(Audit).where(Audit.id == audit_id))
        await self.db.commit()
        return result.rowcount > 0
