"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import admin, assets, audits, health, inventory, locations, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
api_router.include_router(inventory.router, prefix="/snipeit", tags=["inventory"])
api_router.include_router(users.router, prefix="/user", tags=["user"])
api_router.include_router(audits.router, tags=["audits"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
