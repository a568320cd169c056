"""Current user API: who owns the X-API-Token."""

from typing import Any

from fastapi import APIRouter

from app.api.v1.dependencies import ApiToken, AssetServiceDep

router = APIRouter()


@router.get("")
async def get_current_user(token: ApiToken, asset_svc: AssetServiceDep) -> dict[str, Any]:
    return await asset_svc.get_current_user(token)
