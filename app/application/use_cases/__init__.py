"""Application use cases: one entry point per workflow."""

from app.application.use_cases.assets import AssetService
from app.application.use_cases.audits import AuditService

__all__ = [
    "AssetService",
    "AuditService",
]
