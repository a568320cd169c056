"""DTOs for remote assets: normalized summary and the classified snapshot."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AssetSummary:
    """Normalized projection of one remote asset with derived audit flags."""

    id: int | None
    asset_tag: str | None
    name: str | None
    serial: str | None
    model: str | None
    category: str | None
    location: str | None
    location_id: int | None
    assigned_to: str | None
    status: str | None
    sap_asset_number: str | None
    last_audit_date: str | None
    next_audit_date: str | None
    never_audited: bool
    not_audited_this_year: bool
    audit_overdue: bool


@dataclass(frozen=True)
class AssetSnapshot:
    """Classified view of the whole remote inventory.

    never_audited and not_audited_this_year are disjoint; audit_overdue is
    computed independently and may overlap either.
    """

    total: int
    never_audited: tuple[AssetSummary, ...]
    not_audited_this_year: tuple[AssetSummary, ...]
    audit_overdue: tuple[AssetSummary, ...]
    all_assets: tuple[AssetSummary, ...]


@dataclass(frozen=True)
class SnapshotLookup:
    """Snapshot plus cache metadata (hit flag and age in seconds)."""

    snapshot: AssetSnapshot
    cached: bool
    cache_age: int


@dataclass(frozen=True)
class RemoteCallResult:
    """Result of a best-effort remote call. Callers branch on success; nothing is raised."""

    success: bool
    payload: Any = None
    error: Any = None
