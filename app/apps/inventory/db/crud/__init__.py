"""
CRUD operations for the inventory app.
"""

from app.apps.inventory.db.crud.asset import AssetDB, asset_db
from app.apps.inventory.db.crud.room import RoomDB, room_db

__all__ = [
    # Classes
    "AssetDB",
    "RoomDB",
    # Global instances
    "asset_db",
    "room_db",
]
