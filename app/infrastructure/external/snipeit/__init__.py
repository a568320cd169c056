"""Snipe-IT: remote asset directory client.

SnipeITClient implements IAssetDirectory over the Snipe-IT v1 REST API
using a shared httpx.AsyncClient.
"""

from app.infrastructure.external.snipeit.client import SnipeITClient

__all__ = ["SnipeITClient"]
