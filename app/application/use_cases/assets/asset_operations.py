"""Asset operations: lookups and location changes (delegate to IAssetDirectory), cached snapshot."""

from __future__ import annotations

from typing import Any

from app.application.dtos.asset import SnapshotLookup
from app.application.interfaces.services import IAssetDirectory
from app.application.services.asset_snapshot_cache import AssetSnapshotCache
from app.domain.exceptions import ValidationException
from app.shared.telemetry.tracing import traced


class AssetService:
    """Read assets and locations from the remote directory; serve the staleness snapshot."""

    def __init__(
        self,
        directory: IAssetDirectory,
        snapshot_cache: AssetSnapshotCache,
    ) -> None:
        self.directory = directory
        self.snapshot_cache = snapshot_cache

    async def list_locations(self, token: str) -> list[dict[str, Any]]:
        return await self.directory.list_top_level_locations(token)

    async def find_asset(self, token: str, query: str | None) -> dict[str, Any]:
        """Look an asset up by tag or SAP number (rejects an empty query before any remote call)."""
        if not query or not query.strip():
            raise ValidationException("Search query required", field="query")
        return await self.directory.find_asset_by_identifier(token, query.strip())

    async def get_asset(self, token: str, asset_id: int) -> dict[str, Any]:
        return await self.directory.get_asset(token, asset_id)

    async def get_current_user(self, token: str) -> dict[str, Any]:
        return await self.directory.get_current_user(token)

    async def update_asset_location(
        self, token: str, asset_id: int, location_id: int | None
    ) -> dict[str, Any]:
        """Patch one asset's location in the remote directory.

        Raises:
            ValidationException: location_id missing or zero.
        """
        if not location_id:
            raise ValidationException("location_id is required", field="location_id")
        return await self.directory.update_asset_location(token, asset_id, location_id)

    @traced("assets.snapshot")
    async def get_snapshot(self, token: str, force_refresh: bool = False) -> SnapshotLookup:
        """Return the classified inventory, from cache unless stale or forced."""
        return await self.snapshot_cache.get(
            lambda: self.directory.fetch_all_assets(token),
            force_refresh=force_refresh,
        )
