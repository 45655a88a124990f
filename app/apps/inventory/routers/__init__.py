"""
Routers for the inventory app.
"""

from app.apps.inventory.routers.asset import category_router as asset_category_router
from app.apps.inventory.routers.asset import router as asset_router
from app.apps.inventory.routers.room import router as room_router

__all__ = [
    "asset_category_router",
    "asset_router",
    "room_router",
]
