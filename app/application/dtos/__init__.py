"""Application DTOs (no ORM dependency)."""

from app.application.dtos.asset import (
    AssetSnapshot,
    AssetSummary,
    RemoteCallResult,
    SnapshotLookup,
)
from app.application.dtos.audit import (
    AuditCreate,
    AuditResult,
    AuditSubmission,
    AuditSubmissionResult,
    ResolveBatchResult,
    ResolveItemResult,
)

__all__ = [
    "AssetSnapshot",
    "AssetSummary",
    "AuditCreate",
    "AuditResult",
    "AuditSubmission",
    "AuditSubmissionResult",
    "RemoteCallResult",
    "ResolveBatchResult",
    "ResolveItemResult",
    "SnapshotLookup",
]
