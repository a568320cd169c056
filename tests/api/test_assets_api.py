"""Asset, location, user and inventory snapshot endpoints with a faked Snipe-IT."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

from app.domain.exceptions import AssetNotFoundException, RemoteServiceException


async def test_locations_pass_through(client: AsyncClient, token_headers, fake_directory) -> None:
    fake_directory.list_top_level_locations.return_value = [{"id": 1, "name": "HQ"}]

    response = await client.get("/api/locations", headers=token_headers)

    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "HQ"}]
    fake_directory.list_top_level_locations.assert_awaited_once_with("test-snipeit-token")


async def test_current_user(client: AsyncClient, token_headers, fake_directory) -> None:
    fake_directory.get_current_user.return_value = {"id": 4, "username": "amy"}
    response = await client.get("/api/user", headers=token_headers)
    assert response.json()["username"] == "amy"


async def test_search_requires_query(client: AsyncClient, token_headers, fake_directory) -> None:
    response = await client.get("/api/assets/search?query=", headers=token_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Search query required"
    fake_directory.find_asset_by_identifier.assert_not_called()


async def test_search_returns_asset(client: AsyncClient, token_headers, fake_directory) -> None:
    fake_directory.find_asset_by_identifier.return_value = {"id": 9, "asset_tag": "T-9"}

    response = await client.get("/api/assets/search", params={"query": " T-9 "}, headers=token_headers)

    assert response.status_code == 200
    assert response.json()["id"] == 9
    fake_directory.find_asset_by_identifier.assert_awaited_once_with("test-snipeit-token", "T-9")


async def test_search_not_found_is_404(client: AsyncClient, token_headers, fake_directory) -> None:
    fake_directory.find_asset_by_identifier = AsyncMock(side_effect=AssetNotFoundException("X"))

    response = await client.get("/api/assets/search?query=X", headers=token_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Asset not found. Please check the asset tag or SAP number."


async def test_remote_status_is_surfaced(client: AsyncClient, token_headers, fake_directory) -> None:
    fake_directory.get_asset = AsyncMock(
        side_effect=RemoteServiceException("Failed to fetch asset", 403, {"messages": "Forbidden"})
    )

    response = await client.get("/api/assets/3", headers=token_headers)

    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "REMOTE_SERVICE_ERROR"
    assert body["details"]["remote_payload"] == {"messages": "Forbidden"}


async def test_patch_location_requires_location_id(
    client: AsyncClient, admin_headers, fake_directory
) -> None:
    response = await client.patch("/api/assets/3/location", json={}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "location_id is required"
    fake_directory.update_asset_location.assert_not_called()


async def test_patch_location(client: AsyncClient, admin_headers, fake_directory) -> None:
    fake_directory.update_asset_location.return_value = {"status": "success"}

    response = await client.patch(
        "/api/assets/3/location", json={"location_id": 12}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "asset": {"status": "success"}}
    fake_directory.update_asset_location.assert_awaited_once_with("test-snipeit-token", 3, 12)


async def test_snapshot_is_cached_until_refresh(
    client: AsyncClient, admin_headers, fake_directory
) -> None:
    fake_directory.fetch_all_assets.return_value = [
        {"id": 1, "asset_tag": "A", "last_audit_date": None},
        {"id": 2, "asset_tag": "B", "last_audit_date": {"datetime": "2001-01-01 00:00:00"}},
    ]

    first = await client.get("/api/snipeit/assets", headers=admin_headers)
    second = await client.get("/api/snipeit/assets", headers=admin_headers)
    forced = await client.get("/api/snipeit/assets?refresh=true", headers=admin_headers)

    assert first.status_code == 200
    body = first.json()
    assert body["cached"] is False and body["cache_age"] == 0
    assert body["total"] == 2
    assert [a["id"] for a in body["never_audited"]] == [1]
    assert [a["id"] for a in body["not_audited_this_year"]] == [2]
    assert second.json()["cached"] is True
    assert second.json()["all_assets"] == body["all_assets"]
    assert forced.json()["cached"] is False
    assert fake_directory.fetch_all_assets.await_count == 2
