"""Per-request time limit, answering 504 when it runs out.

A forced asset refresh walks every Snipe-IT page, so REQUEST_TIMEOUT_SECONDS
should sit well above SNIPEIT_TIMEOUT_SECONDS. Zero or less disables it.
Raw ASGI.
"""

import asyncio
import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)


async def _send_gateway_timeout(send: Callable, timeout_seconds: int) -> None:
    body = {
        "error": "GATEWAY_TIMEOUT",
        "message": f"Request timed out after {timeout_seconds} seconds",
        "details": {"timeout_seconds": timeout_seconds},
    }
    await send(
        {
            "type": "http.response.start",
            "status": 504,
            "headers": [(b"content-type", b"application/json")],
        }
    )
    await send({"type": "http.response.body", "body": json.dumps(body).encode()})


def TimeoutMiddleware(app: Callable, timeout_seconds: int) -> Callable:
    if timeout_seconds <= 0:
        return app

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        started = False

        async def tracking_send(message: dict) -> None:
            nonlocal started
            started = started or message["type"] == "http.response.start"
            await send(message)

        try:
            await asyncio.wait_for(app(scope, receive, tracking_send), timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s cancelled after %ss",
                scope.get("method", ""),
                scope.get("path", ""),
                timeout_seconds,
            )
            # Once headers are out, the client just sees the connection end.
            if not started:
                await _send_gateway_timeout(send, timeout_seconds)

    return asgi_app
