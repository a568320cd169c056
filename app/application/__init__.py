"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (audit store, Snipe-IT client).
"""

from app.application.interfaces import IAssetDirectory, IAuditRepository
from app.application.services.asset_snapshot_cache import AssetSnapshotCache
from app.application.use_cases import AssetService, AuditService

__all__ = [
    "AssetService",
    "AssetSnapshotCache",
    "AuditService",
    "IAssetDirectory",
    "IAuditRepository",
]
