"""DTOs for audit records (submit, read-model, resolve batch)."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import AuditStatus


@dataclass(frozen=True)
class AuditSubmission:
    """Input for one performed audit (scan or manual entry)."""

    asset_id: int
    asset_tag: str
    actual_location_id: int
    actual_location_name: str
    asset_name: str | None = None
    sap_asset_number: str | None = None
    expected_location_id: int | None = None
    expected_location_name: str | None = None
    notes: str | None = None
    user_name: str | None = None


@dataclass(frozen=True)
class AuditCreate:
    """Row to insert: submission fields plus computed status and remote flag."""

    asset_id: int
    asset_tag: str
    asset_name: str | None
    sap_asset_number: str | None
    expected_location_id: int | None
    expected_location_name: str | None
    actual_location_id: int
    actual_location_name: str
    status: AuditStatus
    notes: str | None
    user_name: str | None
    snipeit_audit_posted: bool


@dataclass(frozen=True)
class AuditResult:
    """Single audit record (read-model for list/get)."""

    id: int
    asset_id: int
    asset_tag: str
    asset_name: str | None
    sap_asset_number: str | None
    expected_location_id: int | None
    expected_location_name: str | None
    actual_location_id: int
    actual_location_name: str
    status: AuditStatus
    notes: str | None
    user_name: str | None
    snipeit_audit_posted: bool
    created_at: datetime
    resolved_at: datetime | None
    resolved_by: str | None


@dataclass(frozen=True)
class AuditSubmissionResult:
    """Outcome of submit_audit. Returned whether or not the remote post succeeded."""

    id: int
    status: AuditStatus
    snipeit_audit_posted: bool


@dataclass(frozen=True)
class ResolveItemResult:
    """Outcome for one audit id in a resolve batch.

    remote_updated is True when the remote location patch went through; with
    success False it marks a remote/local divergence for operators to fix.
    """

    id: int
    success: bool
    error: str | None = None
    remote_updated: bool = False


@dataclass(frozen=True)
class ResolveBatchResult:
    """Aggregate of a resolve batch: counts plus itemized successes and errors."""

    resolved: int
    failed: int
    results: tuple[ResolveItemResult, ...] = field(default_factory=tuple)
    errors: tuple[ResolveItemResult, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        return self.failed == 0
