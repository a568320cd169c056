"""Pydantic request/response schemas for the API."""

from app.schemas.admin import AdminVerifyRequest
from app.schemas.asset import (
    AssetSummaryResponse,
    LocationUpdateRequest,
    LocationUpdateResponse,
    SnapshotResponse,
)
from app.schemas.audit import (
    AuditResponse,
    AuditSubmitRequest,
    AuditSubmitResponse,
    ResolveItemResponse,
    ResolveRequest,
    ResolveResponse,
    SuccessResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AdminVerifyRequest",
    "AssetSummaryResponse",
    "AuditResponse",
    "AuditSubmitRequest",
    "AuditSubmitResponse",
    "HealthResponse",
    "LocationUpdateRequest",
    "LocationUpdateResponse",
    "ResolveItemResponse",
    "ResolveRequest",
    "ResolveResponse",
    "SnapshotResponse",
    "SuccessResponse",
]
