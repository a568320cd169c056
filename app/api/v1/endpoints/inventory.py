"""Inventory API: classified Snipe-IT asset snapshot for the admin dashboard."""

from fastapi import APIRouter, Query, Request

from app.api.v1.dependencies import AdminGate, ApiToken, AssetServiceDep
from app.application.dtos.asset import AssetSummary, SnapshotLookup
from app.core.limiter import limit_snapshot
from app.schemas.asset import AssetSummaryResponse, SnapshotResponse

router = APIRouter()


def _summaries(items: tuple[AssetSummary, ...]) -> list[AssetSummaryResponse]:
    return [AssetSummaryResponse.model_validate(item) for item in items]


def _to_snapshot_response(lookup: SnapshotLookup) -> SnapshotResponse:
    snapshot = lookup.snapshot
    return SnapshotResponse(
        total=snapshot.total,
        never_audited=_summaries(snapshot.never_audited),
        not_audited_this_year=_summaries(snapshot.not_audited_this_year),
        audit_overdue=_summaries(snapshot.audit_overdue),
        all_assets=_summaries(snapshot.all_assets),
        cached=lookup.cached,
        cache_age=lookup.cache_age,
    )


@router.get("/assets", response_model=SnapshotResponse)
@limit_snapshot
async def get_asset_snapshot(
    request: Request,
    _admin: AdminGate,
    token: ApiToken,
    asset_svc: AssetServiceDep,
    refresh: bool = Query(False, description="Bypass the cache and refetch every asset"),
) -> SnapshotResponse:
    """Every asset bucketed by audit staleness; served from cache for 10 minutes."""
    lookup = await asset_svc.get_snapshot(token, force_refresh=refresh)
    return _to_snapshot_response(lookup)
