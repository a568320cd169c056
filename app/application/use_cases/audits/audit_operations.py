"""Audit reconciliation: submit, list, delete, and resolve mismatches.

Submitting mirrors the audit to Snipe-IT best-effort and always keeps the
local record. Resolving pushes the observed location to Snipe-IT and then
closes the local mismatch, one audit at a time.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.application.dtos.audit import (
    AuditCreate,
    AuditResult,
    AuditSubmission,
    AuditSubmissionResult,
    ResolveBatchResult,
    ResolveItemResult,
)
from app.application.interfaces.repositories import IAuditRepository
from app.application.interfaces.services import IAssetDirectory
from app.domain.enums import AuditStatus
from app.domain.exceptions import (
    RemoteServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DEFAULT_RESOLVER = "Admin"


def build_audit_note(submission: AuditSubmission, status: AuditStatus) -> str:
    """Operator notes, or a generated summary when none were given."""
    if submission.notes:
        return submission.notes
    return (
        f"Audit performed. Status: {status.value}. "
        f"Expected: {submission.expected_location_name}, "
        f"Found at: {submission.actual_location_name}"
    )


def _remote_error_text(exc: RemoteServiceException) -> str:
    """Prefer Snipe-IT's "messages" field, else the exception message."""
    payload = exc.payload
    if isinstance(payload, dict) and payload.get("messages"):
        messages = payload["messages"]
        return messages if isinstance(messages, str) else str(messages)
    if isinstance(payload, str) and payload:
        return payload
    return exc.message


class AuditService:
    """Submit and resolve audits against the local store and the remote directory."""

    def __init__(
        self,
        audit_repo: IAuditRepository,
        directory: IAssetDirectory,
    ) -> None:
        self.audit_repo = audit_repo
        self.directory = directory

    @traced("audits.submit")
    async def submit_audit(
        self, token: str, submission: AuditSubmission
    ) -> AuditSubmissionResult:
        """Record one audit.

        Status is decided purely from location id equality. The remote audit
        post is best-effort: its outcome only sets snipeit_audit_posted, and
        the local insert happens either way.
        """
        status = AuditStatus.for_locations(
            submission.expected_location_id, submission.actual_location_id
        )
        remote = await self.directory.post_audit(
            token,
            submission.asset_tag,
            submission.actual_location_id,
            build_audit_note(submission, status),
        )
        if not remote.success:
            logger.warning(
                "Snipe-IT audit post failed for asset %s; saving locally only: %s",
                submission.asset_tag,
                remote.error,
            )

        created = await self.audit_repo.create(
            AuditCreate(
                asset_id=submission.asset_id,
                asset_tag=submission.asset_tag,
                asset_name=submission.asset_name,
                sap_asset_number=submission.sap_asset_number,
                expected_location_id=submission.expected_location_id,
                expected_location_name=submission.expected_location_name,
                actual_location_id=submission.actual_location_id,
                actual_location_name=submission.actual_location_name,
                status=status,
                notes=submission.notes,
                user_name=submission.user_name,
                snipeit_audit_posted=remote.success,
            )
        )
        return AuditSubmissionResult(
            id=created.id,
            status=status,
            snipeit_audit_posted=remote.success,
        )

    async def list_audits(self) -> list[AuditResult]:
        return await self.audit_repo.list_all()

    async def list_user_audits(self, user_name: str) -> list[AuditResult]:
        return await self.audit_repo.list_by_user(user_name)

    async def delete_audit(self, audit_id: int) -> None:
        """Delete one audit record.

        Raises:
            ResourceNotFoundException: no audit with this id.
        """
        if not await self.audit_repo.delete(audit_id):
            raise ResourceNotFoundException("audit", str(audit_id))

    async def _resolve_one(
        self, token: str, audit_id: int, resolved_by: str
    ) -> ResolveItemResult:
        try:
            audit = await self.audit_repo.get_by_id(audit_id)
        except Exception as e:
            logger.exception("Could not load audit %s for resolve", audit_id)
            return ResolveItemResult(id=audit_id, success=False, error=str(e))
        if audit is None:
            return ResolveItemResult(id=audit_id, success=False, error="Audit not found")
        if audit.resolved_at is not None:
            return ResolveItemResult(id=audit_id, success=False, error="Already resolved")
        if audit.status != AuditStatus.MISMATCH:
            return ResolveItemResult(
                id=audit_id, success=False, error="Audit is not a mismatch"
            )

        try:
            await self.directory.update_asset_location(
                token, audit.asset_id, audit.actual_location_id
            )
        except RemoteServiceException as e:
            logger.error("Error resolving audit %s: %s", audit_id, e.payload)
            return ResolveItemResult(
                id=audit_id, success=False, error=_remote_error_text(e)
            )
        except Exception as e:
            # Remote outcome unknown (bad URL, undecodable body); the record stays a mismatch.
            logger.exception("Location patch failed for audit %s", audit_id)
            return ResolveItemResult(id=audit_id, success=False, error=str(e))

        # Remote now holds the corrected location; a failure below leaves the
        # two sides diverged, which remote_updated=True reports.
        try:
            resolved = await self.audit_repo.mark_resolved(
                audit_id, utc_now(), resolved_by
            )
        except Exception as e:
            logger.exception("Local resolve failed after remote patch for audit %s", audit_id)
            return ResolveItemResult(
                id=audit_id, success=False, error=str(e), remote_updated=True
            )
        if resolved is None:
            return ResolveItemResult(
                id=audit_id, success=False, error="Already resolved", remote_updated=True
            )
        return ResolveItemResult(id=audit_id, success=True, remote_updated=True)

    @traced("audits.resolve")
    async def resolve_audits(
        self,
        token: str,
        audit_ids: Sequence[int],
        resolved_by: str | None = None,
    ) -> ResolveBatchResult:
        """Resolve mismatches: patch each asset's remote location, then close the record.

        Ids are processed sequentially. A failing id is recorded and never
        aborts the rest of the batch.

        Args:
            token: Snipe-IT API token.
            audit_ids: Audit ids to resolve (non-empty).
            resolved_by: Resolver name (defaults to "Admin").

        Returns:
            ResolveBatchResult with counts and itemized outcomes.

        Raises:
            ValidationException: audit_ids is empty.
        """
        if not audit_ids:
            raise ValidationException("audit_ids array is required", field="audit_ids")
        resolver = resolved_by or DEFAULT_RESOLVER

        results: list[ResolveItemResult] = []
        errors: list[ResolveItemResult] = []
        for audit_id in audit_ids:
            outcome = await self._resolve_one(token, audit_id, resolver)
            (results if outcome.success else errors).append(outcome)

        logger.info(
            "Resolve batch finished: resolved=%d failed=%d", len(results), len(errors)
        )
        return ResolveBatchResult(
            resolved=len(results),
            failed=len(errors),
            results=tuple(results),
            errors=tuple(errors),
        )
