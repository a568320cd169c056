"""Asset API: lookup by identifier, detail, and single location change."""

from typing import Any

from fastapi import APIRouter, Query, Request

from app.api.v1.dependencies import AdminGate, ApiToken, AssetServiceDep
from app.core.limiter import limit_writes
from app.schemas.asset import LocationUpdateRequest, LocationUpdateResponse

router = APIRouter()


@router.get("/search")
async def search_asset(
    token: ApiToken,
    asset_svc: AssetServiceDep,
    query: str | None = Query(None, description="Asset tag or SAP asset number"),
) -> dict[str, Any]:
    """Find one asset: exact tag lookup first, then a search matched on tag or SAP number."""
    return await asset_svc.find_asset(token, query)


@router.get("/{asset_id}")
async def get_asset(
    asset_id: int, token: ApiToken, asset_svc: AssetServiceDep
) -> dict[str, Any]:
    return await asset_svc.get_asset(token, asset_id)


@router.patch("/{asset_id}/location", response_model=LocationUpdateResponse)
@limit_writes
async def update_asset_location(
    request: Request,
    asset_id: int,
    body: LocationUpdateRequest,
    _admin: AdminGate,
    token: ApiToken,
    asset_svc: AssetServiceDep,
) -> LocationUpdateResponse:
    """Move one asset to location_id in Snipe-IT (admin). 400 when location_id is missing."""
    asset = await asset_svc.update_asset_location(token, asset_id, body.location_id)
    return LocationUpdateResponse(asset=asset or {})
