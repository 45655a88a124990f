"""
Integration tests for the asset and asset category routers.

Run all tests:
    pytest tests/apps/inventory/routers/test_assets.py -v
"""

import pytest
from httpx import AsyncClient

ROOM_PAYLOAD = {"name": "Kamar B-201", "length_m": 3.5, "width_m": 3.0}


def asset_payload(room_id: int, **overrides) -> dict:
    payload = {
        "room_id": room_id,
        "name": "Single bed",
        "category": "tempat_tidur",
        "length_cm": 200,
        "width_cm": 90,
        "height_cm": 45,
        "clearance_front_cm": 60,
        "function_zone": "sleeping",
        "must_be_near_wall": True,
        "can_rotate": False,
        "condition": "good",
    }
    payload.update(overrides)
    return payload


async def create_room(client: AsyncClient, headers: dict | None = None) -> int:
    response = await client.post("/api/rooms", json=ROOM_PAYLOAD, headers=headers)
    assert response.status_code == 201
    return response.json()["id"]


async def create_asset(client: AsyncClient, room_id: int, **overrides) -> dict:
    response = await client.post(
        "/api/assets", json=asset_payload(room_id, **overrides)
    )
    assert response.status_code == 201
    return response.json()


class TestCreateAsset:

    @pytest.mark.asyncio
    async def test_create_asset(self, authenticated_client, test_account):
        room_id = await create_room(authenticated_client)

        response = await authenticated_client.post(
            "/api/assets", json=asset_payload(room_id, cannot_adjacent_to=[3])
        )

        assert response.status_code == 201
        data = response.json()
        assert data["room_id"] == room_id
        assert data["user_id"] == test_account.id
        assert data["category"] == "tempat_tidur"
        assert data["function_zone"] == "sleeping"
        assert data["condition"] == "good"
        assert data["clearance_front_cm"] == 60
        assert data["clearance_sides_cm"] == 0
        assert data["can_rotate"] is False
        assert data["must_be_near_window"] is False
        assert data["cannot_adjacent_to"] == [3]

    @pytest.mark.asyncio
    async def test_minimal_asset_uses_defaults(self, authenticated_client):
        room_id = await create_room(authenticated_client)

        response = await authenticated_client.post(
            "/api/assets",
            json={
                "room_id": room_id,
                "name": "Box",
                "length_cm": 40,
                "width_cm": 40,
                "height_cm": 40,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["category"] is None
        assert data["can_rotate"] is True
        assert data["clearance_back_cm"] == 0

    @pytest.mark.asyncio
    async def test_create_in_foreign_room(
        self, authenticated_client, other_auth_headers
    ):
        foreign_room = await create_room(authenticated_client, other_auth_headers)

        response = await authenticated_client.post(
            "/api/assets", json=asset_payload(foreign_room)
        )

        assert response.status_code == 404
        assert response.json() == {
            "detail": "Room not found or does not belong to the user"
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"length_cm": 0},
            {"height_cm": -10},
            {"clearance_front_cm": -1},
            {"category": "sofa"},
            {"function_zone": "kitchen"},
            {"condition": "broken"},
        ],
    )
    async def test_rejects_invalid_payload(self, authenticated_client, overrides):
        room_id = await create_room(authenticated_client)

        response = await authenticated_client.post(
            "/api/assets", json=asset_payload(room_id, **overrides)
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.post("/api/assets", json=asset_payload(1))

        assert response.status_code in (401, 403)


class TestReadAssets:

    @pytest.mark.asyncio
    async def test_list_room_assets(self, authenticated_client):
        room_id = await create_room(authenticated_client)
        other_room_id = await create_room(authenticated_client)
        bed = await create_asset(authenticated_client, room_id)
        desk = await create_asset(authenticated_client, room_id, name="Desk")
        await create_asset(authenticated_client, other_room_id, name="Chair")

        response = await authenticated_client.get(f"/api/assets/room/{room_id}")

        assert response.status_code == 200
        ids = [asset["id"] for asset in response.json()["assets"]]
        assert ids == [desk["id"], bed["id"]]

    @pytest.mark.asyncio
    async def test_list_foreign_room_assets(
        self, authenticated_client, other_auth_headers
    ):
        room_id = await create_room(authenticated_client)

        response = await authenticated_client.get(
            f"/api/assets/room/{room_id}", headers=other_auth_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_asset(self, authenticated_client):
        room_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.get(f"/api/assets/{asset['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Single bed"

    @pytest.mark.asyncio
    async def test_get_foreign_asset(self, authenticated_client, other_auth_headers):
        room_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.get(
            f"/api/assets/{asset['id']}", headers=other_auth_headers
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Asset not found"}


class TestUpdateAsset:

    @pytest.mark.asyncio
    async def test_partial_update(self, authenticated_client):
        room_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.put(
            f"/api/assets/{asset['id']}",
            json={"condition": "needs_repair", "notes": "Broken leg"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["condition"] == "needs_repair"
        assert data["notes"] == "Broken leg"
        assert data["length_cm"] == 200
        assert data["category"] == "tempat_tidur"

    @pytest.mark.asyncio
    async def test_move_to_own_room(self, authenticated_client):
        room_id = await create_room(authenticated_client)
        target_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.put(
            f"/api/assets/{asset['id']}", json={"room_id": target_id}
        )

        assert response.status_code == 200
        assert response.json()["room_id"] == target_id

    @pytest.mark.asyncio
    async def test_move_to_foreign_room(
        self, authenticated_client, other_auth_headers
    ):
        room_id = await create_room(authenticated_client)
        foreign_room = await create_room(authenticated_client, other_auth_headers)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.put(
            f"/api/assets/{asset['id']}", json={"room_id": foreign_room}
        )

        assert response.status_code == 404
        current = await authenticated_client.get(f"/api/assets/{asset['id']}")
        assert current.json()["room_id"] == room_id

    @pytest.mark.asyncio
    async def test_rejects_invalid_size(self, authenticated_client):
        room_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.put(
            f"/api/assets/{asset['id']}", json={"width_cm": 0}
        )

        assert response.status_code == 422


class TestDeleteAsset:

    @pytest.mark.asyncio
    async def test_delete_asset(self, authenticated_client):
        room_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.delete(f"/api/assets/{asset['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Asset deleted successfully",
            "success": True,
        }
        gone = await authenticated_client.get(f"/api/assets/{asset['id']}")
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_foreign_asset(
        self, authenticated_client, other_auth_headers
    ):
        room_id = await create_room(authenticated_client)
        asset = await create_asset(authenticated_client, room_id)

        response = await authenticated_client.delete(
            f"/api/assets/{asset['id']}", headers=other_auth_headers
        )

        assert response.status_code == 404


class TestAssetCategories:

    @pytest.mark.asyncio
    async def test_list_categories(self, authenticated_client):
        response = await authenticated_client.get("/api/asset-categories")

        assert response.status_code == 200
        categories = response.json()["categories"]
        assert len(categories) == 5
        assert categories[0] == {"value": "tempat_tidur", "label": "Tempat Tidur"}
        assert {c["value"] for c in categories} == {
            "tempat_tidur",
            "meja",
            "lemari",
            "kursi",
            "lainnya",
        }

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/api/asset-categories")

        assert response.status_code in (401, 403)
