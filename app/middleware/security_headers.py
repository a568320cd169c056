"""Security headers middleware.

JSON and spreadsheet responses get a locked-down policy; the HTML landing
page at "/" is allowed its own inline styles. Raw ASGI.
"""

from typing import Callable

API_CSP = "default-src 'none'; frame-ancestors 'none'"
PAGE_CSP = (
    "default-src 'self'; style-src 'unsafe-inline'; frame-ancestors 'none'"
)

COMMON_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}

# Paths serving browser-rendered HTML (FastAPI docs load assets from a CDN).
_PAGE_PATHS = frozenset({"/"})
_DOCS_PATHS = frozenset({"/docs", "/redoc", "/docs/oauth2-redirect"})


def _policy_for(path: str) -> str | None:
    if path in _DOCS_PATHS:
        return None
    if path in _PAGE_PATHS:
        return PAGE_CSP
    return API_CSP


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Add security headers without overriding any the route already set."""
    base = headers if headers is not None else COMMON_HEADERS
    base_list = [(k.lower().encode(), v.encode()) for k, v in base.items()]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        extra = list(base_list)
        policy = _policy_for(scope.get("path", ""))
        if policy is not None:
            extra.append((b"content-security-policy", policy.encode()))

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                out = list(message.get("headers", []))
                present = {name.lower() for name, _ in out}
                out.extend((n, v) for n, v in extra if n not in present)
                message["headers"] = out
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
