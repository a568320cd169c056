"""Domain layer: enums and exceptions. No infrastructure imports."""

from app.domain.enums import AuditStatus
from app.domain.exceptions import (
    AssetAuditException,
    AssetNotFoundException,
    AuthenticationException,
    RemoteServiceException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "AuditStatus",
    "AssetAuditException",
    "AssetNotFoundException",
    "AuthenticationException",
    "RemoteServiceException",
    "ResourceNotFoundException",
    "ValidationException",
]
