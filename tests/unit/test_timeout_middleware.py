"""TimeoutMiddleware against bare ASGI apps."""

import asyncio

from httpx import ASGITransport, AsyncClient

from app.middleware import TimeoutMiddleware


async def _slow_app(scope, receive, send) -> None:
    await asyncio.sleep(5)


async def _fast_app(scope, receive, send) -> None:
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


async def test_slow_request_gets_504() -> None:
    app = TimeoutMiddleware(_slow_app, timeout_seconds=0.05)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/api/snipeit/assets")

    assert response.status_code == 504
    assert response.json()["error"] == "GATEWAY_TIMEOUT"


async def test_fast_request_passes_through() -> None:
    app = TimeoutMiddleware(_fast_app, timeout_seconds=5)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/")

    assert response.status_code == 200
    assert response.text == "ok"


def test_non_positive_timeout_disables_wrapper() -> None:
    assert TimeoutMiddleware(_fast_app, timeout_seconds=0) is _fast_app
