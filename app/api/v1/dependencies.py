"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for credentials, DB sessions and application
services. Services are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.

Two credentials travel as headers:
- X-API-Token: the caller's own Snipe-IT token, forwarded to every remote call.
- X-Admin-Password: the shared admin secret gating dashboard operations.
"""

from __future__ import annotations

import hmac
from typing import Annotated

import httpx
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.asset_snapshot_cache import AssetSnapshotCache
from app.application.use_cases.assets import AssetService
from app.application.use_cases.audits import AuditService
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.external.snipeit import SnipeITClient
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import AuditRepository


def admin_password_matches(candidate: str | None) -> bool:
    """Constant-time comparison against ADMIN_PASSWORD."""
    if not candidate:
        return False
    expected = get_settings().admin_password.get_secret_value()
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    x_admin_password: Annotated[str | None, Header()] = None,
) -> None:
    """Reject the request with 401 unless X-Admin-Password matches."""
    if not admin_password_matches(x_admin_password):
        raise AuthenticationException("Admin password required")


async def require_api_token(
    x_api_token: Annotated[str | None, Header()] = None,
) -> str:
    """Return the caller's Snipe-IT token; 401 when the header is missing."""
    if not x_api_token or not x_api_token.strip():
        raise AuthenticationException("API token required")
    return x_api_token.strip()


async def get_audit_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuditRepository:
    return AuditRepository(db)


def get_asset_directory(request: Request) -> SnipeITClient:
    """Snipe-IT client over the shared HTTP client from the lifespan."""
    settings = get_settings()
    http_client = getattr(request.app.state, "snipeit_http_client", None)
    if http_client is None:
        # Lifespan not run (e.g. bare ASGITransport); closed with the process.
        http_client = httpx.AsyncClient(timeout=settings.snipeit_timeout_seconds)
        request.app.state.snipeit_http_client = http_client
    return SnipeITClient(
        http_client,
        settings.snipeit_api_url,
        page_size=settings.asset_page_size,
        search_limit=settings.asset_search_limit,
    )


def get_snapshot_cache(request: Request) -> AssetSnapshotCache:
    """Process-wide snapshot cache; created lazily when the lifespan did not run."""
    cache = getattr(request.app.state, "asset_cache", None)
    if cache is None:
        cache = AssetSnapshotCache(
            ttl_ms=get_settings().asset_cache_ttl_seconds * 1000
        )
        request.app.state.asset_cache = cache
    return cache


async def get_audit_service(
    audit_repo: Annotated[AuditRepository, Depends(get_audit_repo)],
    directory: Annotated[SnipeITClient, Depends(get_asset_directory)],
) -> AuditService:
    return AuditService(audit_repo=audit_repo, directory=directory)


async def get_asset_service(
    directory: Annotated[SnipeITClient, Depends(get_asset_directory)],
    snapshot_cache: Annotated[AssetSnapshotCache, Depends(get_snapshot_cache)],
) -> AssetService:
    return AssetService(directory=directory, snapshot_cache=snapshot_cache)


# Shorthands for route signatures.
ApiToken = Annotated[str, Depends(require_api_token)]
AdminGate = Annotated[None, Depends(require_admin)]
AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]
AssetServiceDep = Annotated[AssetService, Depends(get_asset_service)]
AuditRepoDep = Annotated[AuditRepository, Depends(get_audit_repo)]
