"""
Asset router for the inventory app.

All endpoints require a bearer token. Assets are only visible to their
owner, and can only be placed in rooms the owner has.
Mounted under /api/assets and /api/asset-categories.
"""

from fastapi import APIRouter, status

from app.apps.inventory.schemas import (
    AssetCategoryListResponse,
    AssetCategoryResponse,
    AssetCreate,
    AssetListResponse,
    AssetResponse,
    AssetUpdate,
)
from app.apps.inventory.services import asset_service
from app.core.config import request_logger
from app.core.dependencies import CurrentUser, DBSession
from app.core.enums import AssetCategory
from app.core.schemas import MessageResponse

router = APIRouter(prefix="/assets")
category_router = APIRouter(prefix="/asset-categories")


@router.post(
    "",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an asset",
    description="""
## Add an Asset

Creates an asset in one of the caller's rooms.

### Allowed Values

- `category`: tempat_tidur, meja, lemari, kursi, lainnya
- `function_zone`: sleeping, study, storage, leisure
- `condition`: new, good, fair, needs_repair

### Error Responses

| Status | Reason |
|--------|--------|
| `404 Not Found` | Room not found or does not belong to the user |
| `422 Unprocessable Entity` | Invalid sizes or values |
""",
)
async def create_asset(
    data: AssetCreate,
    user: CurrentUser,
    session: DBSession,
) -> AssetResponse:
    async with session.begin():
        asset = await asset_service.create_asset(
            session, user.id, data.model_dump(), commit_self=False
        )
    request_logger.info(f"POST /assets - user={user.id} asset={asset.id}")
    return AssetResponse.model_validate(asset)


@router.get(
    "/room/{room_id}",
    response_model=AssetListResponse,
    summary="List assets in a room",
    description="Lists the assets in one of the caller's rooms, newest first.",
)
async def list_room_assets(
    room_id: int,
    user: CurrentUser,
    session: DBSession,
) -> AssetListResponse:
    async with session.begin():
        assets = await asset_service.list_room_assets(session, room_id, user.id)
    return AssetListResponse(
        assets=[AssetResponse.model_validate(asset) for asset in assets]
    )


@router.get(
    "/{asset_id}",
    response_model=AssetResponse,
    summary="Get an asset",
    description="Returns one of the caller's assets. Unknown or foreign assets return 404.",
)
async def get_asset(
    asset_id: int,
    user: CurrentUser,
    session: DBSession,
) -> AssetResponse:
    async with session.begin():
        asset = await asset_service.get_asset(session, asset_id, user.id)
    return AssetResponse.model_validate(asset)


@router.put(
    "/{asset_id}",
    response_model=AssetResponse,
    summary="Update an asset",
    description="""
## Update an Asset

Partial update: only the fields present in the body change. Moving the
asset with `room_id` requires the target room to belong to the caller.
""",
)
async def update_asset(
    asset_id: int,
    data: AssetUpdate,
    user: CurrentUser,
    session: DBSession,
) -> AssetResponse:
    async with session.begin():
        asset = await asset_service.update_asset(
            session,
            asset_id,
            user.id,
            data.model_dump(exclude_unset=True, exclude_none=True),
            commit_self=False,
        )
    request_logger.info(f"PUT /assets/{asset_id} - user={user.id}")
    return AssetResponse.model_validate(asset)


@router.delete(
    "/{asset_id}",
    response_model=MessageResponse,
    summary="Delete an asset",
)
async def delete_asset(
    asset_id: int,
    user: CurrentUser,
    session: DBSession,
) -> MessageResponse:
    async with session.begin():
        await asset_service.delete_asset(session, asset_id, user.id, commit_self=False)
    request_logger.info(f"DELETE /assets/{asset_id} - user={user.id}")
    return MessageResponse(message="Asset deleted successfully")


@category_router.get(
    "",
    response_model=AssetCategoryListResponse,
    summary="List asset categories",
    description="Lists the categories an asset can be filed under.",
)
async def list_asset_categories(user: CurrentUser) -> AssetCategoryListResponse:
    return AssetCategoryListResponse(
        categories=[
            AssetCategoryResponse(value=category, label=category.label)
            for category in AssetCategory
        ]
    )


__all__ = ["router", "category_router"]
