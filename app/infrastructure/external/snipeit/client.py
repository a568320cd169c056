"""Snipe-IT REST client (remote asset directory).

Thin async wrapper over the Snipe-IT v1 API: locations, hardware lookup,
search, audit posting, location patching and paginated inventory fetch.
The caller's API token is forwarded per call as a bearer credential; the
client holds no per-user state. No retries: remote failures surface as
RemoteServiceException with the remote status and payload unchanged.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from app.application.dtos.asset import RemoteCallResult
from app.application.services.staleness_classifier import sap_value_matches
from app.domain.exceptions import (
    AssetNotFoundException,
    RemoteServiceException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 500
DEFAULT_SEARCH_LIMIT = 50

# Snipe-IT answers some rejected writes with HTTP 200 and this body shape.
_ERROR_STATUS = "error"
_SOFT_ERROR_STATUS_CODE = 422


def _decode_body(response: httpx.Response) -> Any:
    """Return JSON body, raw text when not JSON, or None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_soft_error(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.get("status") == _ERROR_STATUS


class SnipeITClient:
    """Async Snipe-IT API client. Implements IAssetDirectory.

    Uses a shared httpx.AsyncClient (created in the app lifespan) for
    connection reuse; timeouts are whatever that client was built with.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Shared async HTTP client.
            api_url: Snipe-IT API base (e.g. https://assets.example.com/api/v1).
            page_size: Rows per page for fetch_all_assets.
            search_limit: Max rows scanned by the identifier search fallback.
        """
        self._http = http_client
        self._api_url = api_url.rstrip("/")
        self.page_size = page_size
        self.search_limit = search_limit

    @staticmethod
    def _headers(token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        *,
        error_message: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one API call and return the decoded body.

        Raises:
            RemoteServiceException: transport error (502) or non-2xx (remote status).
        """
        url = f"{self._api_url}{path}"
        try:
            response = await self._http.request(
                method, url, headers=self._headers(token), params=params, json=json
            )
        except httpx.HTTPError as e:
            logger.error("%s: %s %s transport error: %s", error_message, method, path, e)
            raise RemoteServiceException(error_message, 502, str(e)) from e
        payload = _decode_body(response)
        if response.is_error:
            logger.error(
                "%s: %s %s status=%d payload=%s",
                error_message,
                method,
                path,
                response.status_code,
                payload,
            )
            raise RemoteServiceException(error_message, response.status_code, payload)
        return payload

    @traced("snipeit.list_top_level_locations")
    async def list_top_level_locations(self, token: str) -> list[dict[str, Any]]:
        """Return locations without a parent (the ones offered for selection)."""
        payload = await self._request(
            "GET", "/locations", token, error_message="Failed to fetch locations"
        )
        rows = (payload or {}).get("rows") or []
        return [loc for loc in rows if not loc.get("parent_id")]

    @traced("snipeit.find_asset_by_identifier")
    async def find_asset_by_identifier(self, token: str, term: str) -> dict[str, Any]:
        """Find an asset by tag or SAP number.

        Phase one asks for the exact tag. If that fails for any reason, phase
        two searches (bounded by search_limit) and scans the rows for an exact
        case-insensitive tag, then for a matching SAP custom field.

        Raises:
            ValidationException: term is empty.
            AssetNotFoundException: neither phase matched.
            RemoteServiceException: the search call itself failed.
        """
        search_term = (term or "").strip()
        if not search_term:
            raise ValidationException("Search query required", field="query")

        try:
            by_tag = await self._request(
                "GET",
                f"/hardware/bytag/{quote(search_term, safe='')}",
                token,
                error_message="Failed to fetch asset by tag",
            )
        except RemoteServiceException:
            by_tag = None
        if isinstance(by_tag, dict) and by_tag.get("id"):
            add_span_attributes(**{"snipeit.lookup_phase": "tag"})
            return by_tag
        logger.info("Asset not found by tag, searching by SAP number...")

        payload = await self._request(
            "GET",
            "/hardware",
            token,
            error_message="Failed to search asset",
            params={"search": search_term, "limit": self.search_limit},
        )
        assets: list[dict[str, Any]] = (payload or {}).get("rows") or []

        wanted = search_term.lower()
        for asset in assets:
            tag = asset.get("asset_tag")
            if isinstance(tag, str) and tag.lower() == wanted:
                add_span_attributes(**{"snipeit.lookup_phase": "search_tag"})
                return asset
        for asset in assets:
            if sap_value_matches(asset.get("custom_fields"), search_term):
                add_span_attributes(**{"snipeit.lookup_phase": "search_sap"})
                return asset

        raise AssetNotFoundException(search_term)

    @traced("snipeit.get_asset")
    async def get_asset(self, token: str, asset_id: int) -> dict[str, Any]:
        """Return one hardware record by remote id."""
        return await self._request(
            "GET", f"/hardware/{asset_id}", token, error_message="Failed to fetch asset"
        )

    @traced("snipeit.get_current_user")
    async def get_current_user(self, token: str) -> dict[str, Any]:
        """Return the Snipe-IT user that owns token."""
        return await self._request(
            "GET", "/users/me", token, error_message="Failed to fetch user"
        )

    @traced("snipeit.post_audit")
    async def post_audit(
        self, token: str, asset_tag: str, location_id: int, note: str
    ) -> RemoteCallResult:
        """Record an audit in Snipe-IT. Best-effort: failures are returned, not raised."""
        try:
            payload = await self._request(
                "POST",
                "/hardware/audit",
                token,
                error_message="Error posting audit to Snipe-IT",
                json={"asset_tag": asset_tag, "location_id": location_id, "note": note},
            )
        except RemoteServiceException as e:
            return RemoteCallResult(success=False, error=e.payload)
        if _is_soft_error(payload):
            logger.error("Error posting audit to Snipe-IT: %s", payload.get("messages"))
            return RemoteCallResult(success=False, payload=payload, error=payload.get("messages"))
        return RemoteCallResult(success=True, payload=payload)

    @traced("snipeit.update_asset_location")
    async def update_asset_location(
        self, token: str, asset_id: int, location_id: int
    ) -> dict[str, Any]:
        """Set the asset's default (rtd) location.

        Raises:
            RemoteServiceException: non-2xx, or a 200 body with status "error".
        """
        message = "Failed to update asset location"
        payload = await self._request(
            "PATCH",
            f"/hardware/{asset_id}",
            token,
            error_message=message,
            json={"rtd_location_id": location_id},
        )
        if _is_soft_error(payload):
            logger.error("%s: asset=%s payload=%s", message, asset_id, payload)
            raise RemoteServiceException(message, _SOFT_ERROR_STATUS_CODE, payload)
        return payload

    @traced("snipeit.fetch_all_assets")
    async def fetch_all_assets(self, token: str) -> list[dict[str, Any]]:
        """Fetch the whole inventory, page_size rows at a time, ordered by tag.

        Stops when a page is short (or empty) or the accumulated count reaches
        the total reported by Snipe-IT.
        """
        all_assets: list[dict[str, Any]] = []
        offset = 0
        while True:
            payload = await self._request(
                "GET",
                "/hardware",
                token,
                error_message="Failed to fetch assets from Snipe-IT",
                params={
                    "limit": self.page_size,
                    "offset": offset,
                    "sort": "asset_tag",
                    "order": "asc",
                },
            )
            payload = payload or {}
            rows = payload.get("rows") or []
            total = payload.get("total")
            all_assets.extend(rows)
            logger.info("Fetched %d of %s assets...", len(all_assets), total)

            if len(rows) < self.page_size:
                break
            if isinstance(total, int) and len(all_assets) >= total:
                break
            offset += self.page_size

        add_span_attributes(**{"snipeit.asset_count": len(all_assets)})
        return all_assets
