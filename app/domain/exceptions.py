"""Errors raised by the audit service.

Each class carries the HTTP status the API answers with, so the
exception handlers in app.core stay a single lookup.
"""

from typing import Any


class AssetAuditException(Exception):
    """Base class; serialized as ``{"error", "message", "details"}``.

    Attributes:
        message: Text shown to the caller.
        error_code: Stable machine-readable code.
        details: Extra context (field name, audit id, remote payload).
        http_status: Status code used when this reaches the API boundary.
    """

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AssetAuditException):
    """Bad input the schema layer cannot catch: blank search term, empty id list."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else None)


class AuthenticationException(AssetAuditException):
    """Missing or wrong admin password or Snipe-IT token."""

    http_status = 401

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(AssetAuditException):
    """A local record (an audit) does not exist."""

    http_status = 404

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AssetNotFoundException(AssetAuditException):
    """Neither an asset tag nor a SAP number matched the scanned identifier."""

    http_status = 404

    def __init__(self, identifier: str) -> None:
        super().__init__(
            "Asset not found. Please check the asset tag or SAP number.",
            "ASSET_NOT_FOUND",
            {"identifier": identifier},
        )


class RemoteServiceException(AssetAuditException):
    """Snipe-IT failed, was unreachable, or answered with an error.

    ``status_code`` is the remote status (502 for transport failures) and
    ``payload`` the decoded remote body; both are passed to the caller as-is.
    """

    http_status = 502

    def __init__(self, message: str, status_code: int = 502, payload: Any = None) -> None:
        self.status_code = status_code
        self.payload = payload
        if 400 <= status_code <= 599:
            self.http_status = status_code
        super().__init__(
            message,
            "REMOTE_SERVICE_ERROR",
            {"remote_status": status_code, "remote_payload": payload},
        )
