"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.asset import RemoteCallResult


# Remote asset directory interface
class IAssetDirectory(Protocol):
    """Protocol for the remote asset directory (Snipe-IT).

    Every call takes the caller's API token. Failures raise
    RemoteServiceException carrying the remote status and payload, except
    post_audit, which is best-effort and reports through RemoteCallResult.
    """

    async def list_top_level_locations(self, token: str) -> list[dict[str, Any]]:
        """Return locations that have no parent."""

    async def find_asset_by_identifier(self, token: str, term: str) -> dict[str, Any]:
        """Find by exact tag, then by tag/SAP number among search results."""

    async def get_asset(self, token: str, asset_id: int) -> dict[str, Any]:
        """Return one asset by remote id."""

    async def get_current_user(self, token: str) -> dict[str, Any]:
        """Return the user owning the token."""

    async def post_audit(
        self, token: str, asset_tag: str, location_id: int, note: str
    ) -> RemoteCallResult:
        """Record an audit remotely. Never raises for remote failure."""

    async def update_asset_location(
        self, token: str, asset_id: int, location_id: int
    ) -> dict[str, Any]:
        """Set the asset's default location; return the remote payload."""

    async def fetch_all_assets(self, token: str) -> list[dict[str, Any]]:
        """Return every asset, fetched page by page."""
