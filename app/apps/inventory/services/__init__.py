"""
Services for the inventory app.
"""

from app.apps.inventory.services.asset import (
    AssetNotFoundException,
    AssetService,
    RoomNotOwnedException,
    asset_service,
)
from app.apps.inventory.services.room import (
    RoomNotFoundException,
    RoomService,
    room_service,
)

__all__ = [
    # Rooms
    "RoomService",
    "room_service",
    "RoomNotFoundException",
    # Assets
    "AssetService",
    "asset_service",
    "AssetNotFoundException",
    "RoomNotOwnedException",
]
