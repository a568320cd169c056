"""Asset use cases."""

from app.application.use_cases.assets.asset_operations import AssetService

__all__ = ["AssetService"]
