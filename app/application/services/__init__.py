"""Application services: staleness classification and the asset snapshot cache."""

from app.application.services.asset_snapshot_cache import AssetSnapshotCache
from app.application.services.staleness_classifier import (
    classify_assets,
    extract_date,
    parse_date,
    resolve_sap_asset_number,
    sap_value_matches,
)

__all__ = [
    "AssetSnapshotCache",
    "classify_assets",
    "extract_date",
    "parse_date",
    "resolve_sap_asset_number",
    "sap_value_matches",
]
