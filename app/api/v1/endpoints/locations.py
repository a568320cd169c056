"""Location API: top-level Snipe-IT locations for the audit picker."""

from typing import Any

from fastapi import APIRouter

from app.api.v1.dependencies import ApiToken, AssetServiceDep

router = APIRouter()


@router.get("")
async def list_locations(token: ApiToken, asset_svc: AssetServiceDep) -> list[dict[str, Any]]:
    """Return locations without a parent, as Snipe-IT reports them."""
    return await asset_svc.list_locations(token)
