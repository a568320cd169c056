"""Asset API schemas: classified snapshot and location change.

Single asset, location and user lookups return Snipe-IT's JSON unchanged,
so they have no schema here.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AssetSummaryResponse(BaseModel):
    """One asset in the snapshot, with derived audit flags."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    asset_tag: str | None = None
    name: str | None = None
    serial: str | None = None
    model: str | None = None
    category: str | None = None
    location: str | None = None
    location_id: int | None = None
    assigned_to: str | None = None
    status: str | None = None
    sap_asset_number: str | None = None
    last_audit_date: str | None = None
    next_audit_date: str | None = None
    never_audited: bool
    not_audited_this_year: bool
    audit_overdue: bool


class SnapshotResponse(BaseModel):
    """Response for GET /api/snipeit/assets. cache_age is in seconds."""

    total: int
    never_audited: list[AssetSummaryResponse]
    not_audited_this_year: list[AssetSummaryResponse]
    audit_overdue: list[AssetSummaryResponse]
    all_assets: list[AssetSummaryResponse]
    cached: bool
    cache_age: int


class LocationUpdateRequest(BaseModel):
    """Payload for PATCH /api/assets/{id}/location. Missing or zero id is rejected with 400."""

    location_id: int | None = None


class LocationUpdateResponse(BaseModel):
    success: bool = True
    asset: dict[str, Any] = Field(default_factory=dict)
