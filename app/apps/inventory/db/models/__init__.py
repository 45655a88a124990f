"""
Database models for the inventory app.
"""

from app.apps.inventory.db.models.asset import Asset
from app.apps.inventory.db.models.room import Room

__all__ = [
    "Asset",
    "Room",
]
