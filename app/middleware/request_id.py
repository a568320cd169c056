"""Request ID and access log middleware.

Forwards a sanitized X-Request-ID (or mints one), echoes it on the response
and logs one line per request with method, path, status and duration.
Raw ASGI (no BaseHTTPMiddleware) so export downloads stream untouched.
"""

import logging
import re
import time
import uuid
from typing import Callable

logger = logging.getLogger("app.access")

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)

# Probes are not worth an access line each.
_QUIET_PATHS = frozenset({"/api/health"})


def _header_value(scope: dict, name: str) -> str | None:
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def _sanitize_request_id(raw: str | None) -> str:
    """Keep a client id only when it is short and log-safe; otherwise mint a UUID."""
    candidate = (raw or "").strip()
    if not REQUEST_ID_ALLOWED_PATTERN.match(candidate):
        return uuid.uuid4().hex
    return candidate


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request id to scope state and the response; log the outcome."""
    encoded_name = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        request_id = _sanitize_request_id(_header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status_holder = {"status": 500}

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
                headers = [
                    h for h in message.get("headers", []) if h[0].lower() != encoded_name
                ]
                headers.append((encoded_name, request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            path = scope.get("path", "")
            if path not in _QUIET_PATHS:
                logger.info(
                    "%s %s -> %s (%.1f ms) request_id=%s",
                    scope.get("method", ""),
                    path,
                    status_holder["status"],
                    (time.perf_counter() - started) * 1000,
                    request_id,
                )

    return asgi_app
