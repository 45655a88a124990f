"""
Schemas for the inventory app.
"""

from app.apps.inventory.schemas.asset import (
    AssetCategoryListResponse,
    AssetCategoryResponse,
    AssetCreate,
    AssetListResponse,
    AssetResponse,
    AssetUpdate,
)
from app.apps.inventory.schemas.room import (
    RoomCreate,
    RoomListResponse,
    RoomResponse,
    RoomUpdate,
)

__all__ = [
    # Rooms
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "RoomListResponse",
    # Assets
    "AssetCreate",
    "AssetUpdate",
    "AssetResponse",
    "AssetListResponse",
    "AssetCategoryResponse",
    "AssetCategoryListResponse",
]
