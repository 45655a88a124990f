"""
Room router for the inventory app.

All endpoints require a bearer token and only ever see the caller's rooms.
Mounted under /api/rooms.
"""

from fastapi import APIRouter, status

from app.apps.inventory.schemas import (
    RoomCreate,
    RoomListResponse,
    RoomResponse,
    RoomUpdate,
)
from app.apps.inventory.services import room_service
from app.core.config import request_logger
from app.core.dependencies import CurrentUser, DBSession
from app.core.schemas import MessageResponse

router = APIRouter(prefix="/rooms")


@router.post(
    "",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a room",
    description="""
## Add a Room

Creates a room owned by the caller.

### Request Body

| Field | Type | Required | Description |
|-------|------|----------|-------------|
| `name` | string | Yes | Room name (1-100 chars) |
| `length_m` | number | Yes | Length in meters (> 0) |
| `width_m` | number | Yes | Width in meters (> 0) |
| `door_position` | string | No | Wall the door is on |
| `door_width_cm` | integer | No | Door width in centimeters |
| `window_position` | string | No | Wall the window is on |
| `window_width_cm` | integer | No | Window width in centimeters |
| `power_outlet_positions` | string[] | No | Where the outlets are |
| `photo_url` | string | No | Photo of the room |
| `notes` | string | No | Free-form notes |
""",
)
async def create_room(
    data: RoomCreate,
    user: CurrentUser,
    session: DBSession,
) -> RoomResponse:
    async with session.begin():
        room = await room_service.create_room(
            session, user.id, data.model_dump(), commit_self=False
        )
    request_logger.info(f"POST /rooms - user={user.id} room={room.id}")
    return RoomResponse.model_validate(room)


@router.get(
    "",
    response_model=RoomListResponse,
    summary="List rooms",
    description="Lists the caller's rooms, newest first.",
)
async def list_rooms(
    user: CurrentUser,
    session: DBSession,
) -> RoomListResponse:
    async with session.begin():
        rooms = await room_service.list_rooms(session, user.id)
    return RoomListResponse(
        rooms=[RoomResponse.model_validate(room) for room in rooms]
    )


@router.get(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Get a room",
    description="Returns one of the caller's rooms. Unknown or foreign rooms return 404.",
)
async def get_room(
    room_id: int,
    user: CurrentUser,
    session: DBSession,
) -> RoomResponse:
    async with session.begin():
        room = await room_service.get_room(session, room_id, user.id)
    return RoomResponse.model_validate(room)


@router.put(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Update a room",
    description="""
## Update a Room

Partial update: only the fields present in the body change. Unknown or
foreign rooms return 404.
""",
)
async def update_room(
    room_id: int,
    data: RoomUpdate,
    user: CurrentUser,
    session: DBSession,
) -> RoomResponse:
    async with session.begin():
        room = await room_service.update_room(
            session,
            room_id,
            user.id,
            data.model_dump(exclude_unset=True, exclude_none=True),
            commit_self=False,
        )
    request_logger.info(f"PUT /rooms/{room_id} - user={user.id}")
    return RoomResponse.model_validate(room)


@router.delete(
    "/{room_id}",
    response_model=MessageResponse,
    summary="Delete a room",
    description="Deletes one of the caller's rooms and every asset in it.",
)
async def delete_room(
    room_id: int,
    user: CurrentUser,
    session: DBSession,
) -> MessageResponse:
    async with session.begin():
        await room_service.delete_room(session, room_id, user.id, commit_self=False)
    request_logger.info(f"DELETE /rooms/{room_id} - user={user.id}")
    return MessageResponse(message="Room and all its assets deleted successfully")


__all__ = ["router"]
