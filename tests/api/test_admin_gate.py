"""Credential checks: admin secret and Snipe-IT token headers."""

from httpx import AsyncClient


async def test_verify_accepts_correct_password(client: AsyncClient, admin_password: str) -> None:
    response = await client.post("/api/admin/verify", json={"password": admin_password})
    assert response.status_code == 200
    assert response.json() == {"success": True}


async def test_verify_rejects_wrong_password(client: AsyncClient) -> None:
    response = await client.post("/api/admin/verify", json={"password": "nope"})
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "AUTHENTICATION_ERROR"
    assert body["message"] == "Invalid password"


async def test_admin_routes_require_admin_header(client: AsyncClient) -> None:
    for method, path in (
        ("GET", "/api/audits"),
        ("GET", "/api/audits/export"),
        ("DELETE", "/api/audits/1"),
        ("GET", "/api/snipeit/assets"),
    ):
        response = await client.request(method, path, headers={"X-API-Token": "t"})
        assert response.status_code == 401, path
        assert response.json()["message"] == "Admin password required"


async def test_wrong_admin_password_is_rejected(client: AsyncClient) -> None:
    response = await client.get("/api/audits", headers={"X-Admin-Password": "guess"})
    assert response.status_code == 401


async def test_remote_routes_require_api_token(client: AsyncClient, fake_directory) -> None:
    for path in ("/api/locations", "/api/user", "/api/assets/3", "/api/assets/search?query=x"):
        response = await client.get(path)
        assert response.status_code == 401, path
        assert response.json()["message"] == "API token required"
    fake_directory.get_asset.assert_not_called()


async def test_admin_with_token_missing_is_rejected_on_resolve(
    client: AsyncClient, admin_password: str
) -> None:
    response = await client.post(
        "/api/audits/resolve",
        json={"audit_ids": [1]},
        headers={"X-Admin-Password": admin_password},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "API token required"
