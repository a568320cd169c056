"""Audit API schemas: submit, list, and resolve."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import AuditStatus


class AuditSubmitRequest(BaseModel):
    """Payload for POST /api/audit (one scan or manual entry)."""

    asset_id: int
    asset_tag: str = Field(..., min_length=1)
    asset_name: str | None = None
    sap_asset_number: str | None = None
    expected_location_id: int | None = None
    expected_location_name: str | None = None
    actual_location_id: int
    actual_location_name: str = Field(..., min_length=1)
    notes: str | None = None
    user_name: str | None = None


class AuditSubmitResponse(BaseModel):
    """Submit outcome; snipeit_audit_posted is False when only the local save happened."""

    success: bool = True
    id: int
    status: AuditStatus
    snipeit_audit_posted: bool


class AuditResponse(BaseModel):
    """One stored audit record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: int
    asset_tag: str
    asset_name: str | None = None
    sap_asset_number: str | None = None
    expected_location_id: int | None = None
    expected_location_name: str | None = None
    actual_location_id: int
    actual_location_name: str
    status: AuditStatus
    notes: str | None = None
    user_name: str | None = None
    snipeit_audit_posted: bool
    created_at: datetime
    resolved_at: datetime | None = None
    resolved_by: str | None = None


class ResolveRequest(BaseModel):
    """Payload for POST /api/audits/resolve."""

    audit_ids: list[int] = Field(default_factory=list)
    resolved_by: str | None = None


class ResolveItemResponse(BaseModel):
    """Per-id resolve outcome. remote_updated with success False means the sides diverged."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    success: bool
    error: str | None = None
    remote_updated: bool = False


class ResolveResponse(BaseModel):
    """Resolve batch report."""

    success: bool
    resolved: int
    failed: int
    results: list[ResolveItemResponse]
    errors: list[ResolveItemResponse]


class SuccessResponse(BaseModel):
    success: bool = True
