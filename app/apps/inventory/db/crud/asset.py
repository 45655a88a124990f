"""
CRUD operations for assets.

"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.apps.inventory.db.models.asset import Asset
from app.core.db.crud.base import BaseDB


class AssetDB(BaseDB[Asset]):
    """CRUD operations for Asset model."""

    def __init__(self):
        """Initialize with Asset model."""
        super().__init__(Asset)

    async def get_owned(
        self, session: AsyncSession, asset_id: int, user_id: int
    ) -> Asset | None:
        """Get an asset only if it belongs to the user."""
        return await self.get_one_by_filters(
            session, {"id": asset_id, "user_id": user_id}
        )

    async def list_for_room(
        self, session: AsyncSession, room_id: int, user_id: int
    ) -> Sequence[Asset]:
        """List the user's assets in a room, newest first."""
        return await self.get_by_filters(
            session,
            {"room_id": room_id, "user_id": user_id},
            order_by=[Asset.created_at.desc(), Asset.id.desc()],
        )


# Global instance for dependency injection
asset_db = AssetDB()


__all__ = [
    "AssetDB",
    "asset_db",
]
