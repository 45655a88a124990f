"""
CRUD operations for rooms.

"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.apps.inventory.db.models.room import Room
from app.core.db.crud.base import BaseDB


class RoomDB(BaseDB[Room]):
    """CRUD operations for Room model."""

    def __init__(self):
        """Initialize with Room model."""
        super().__init__(Room)

    async def get_owned(
        self, session: AsyncSession, room_id: int, user_id: int
    ) -> Room | None:
        """Get a room only if it belongs to the user."""
        return await self.get_one_by_filters(
            session, {"id": room_id, "user_id": user_id}
        )

    async def list_for_user(self, session: AsyncSession, user_id: int) -> Sequence[Room]:
        """List a user's rooms, newest first."""
        return await self.get_by_filters(
            session,
            {"user_id": user_id},
            order_by=[Room.created_at.desc(), Room.id.desc()],
        )


# Global instance for dependency injection
room_db = RoomDB()


__all__ = [
    "RoomDB",
    "room_db",
]
