"""
Room service for the inventory app.

This module provides business logic for the rooms of an account. Every
lookup is scoped by owner: a room that belongs to someone else is reported
exactly like a room that does not exist.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.apps.inventory.db.crud import room_db
from app.apps.inventory.db.models import Room
from app.core.config import inventory_logger
from app.core.exceptions.types import NotFoundException
from app.core.utils import utc_now


# ============================================================================
# Exceptions
# ============================================================================


class RoomNotFoundException(NotFoundException):
    """Raised when a room is missing or owned by another account."""

    def __init__(self, message: str = "Room not found"):
        super().__init__(message)


# ============================================================================
# Service
# ============================================================================


class RoomService:
    """Service for room management."""

    async def get_room(
        self, session: AsyncSession, room_id: int, user_id: int
    ) -> Room:
        """
        Get a room owned by the user.

        Raises:
            RoomNotFoundException: If the room does not exist or is not owned.
        """
        room = await room_db.get_owned(session, room_id, user_id)
        if room is None:
            raise RoomNotFoundException()
        return room

    async def list_rooms(self, session: AsyncSession, user_id: int) -> Sequence[Room]:
        return await room_db.list_for_user(session, user_id)

    async def create_room(
        self,
        session: AsyncSession,
        user_id: int,
        data: dict[str, Any],
        commit_self: bool = True,
    ) -> Room:
        """
        Create a room for the user.

        Args:
            session: Database session.
            user_id: Owner account id.
            data: Room fields.
            commit_self: Whether to commit the transaction.

        Returns:
            The created room.
        """
        room = await room_db.create(
            session,
            data={**data, "user_id": user_id},
            commit_self=commit_self,
        )
        inventory_logger.info(f"Room {room.id} created for user {user_id}")
        return room

    async def update_room(
        self,
        session: AsyncSession,
        room_id: int,
        user_id: int,
        updates: dict[str, Any],
        commit_self: bool = True,
    ) -> Room:
        """
        Apply a partial update to a room owned by the user.

        Raises:
            RoomNotFoundException: If the room does not exist or is not owned.
        """
        room = await self.get_room(session, room_id, user_id)
        if not updates:
            return room

        updated = await room_db.update(
            session,
            room.id,
            {**updates, "updated_at": utc_now()},
            commit_self=commit_self,
        )
        inventory_logger.info(
            f"Room {room_id} updated by user {user_id}: fields={sorted(updates)}"
        )
        return updated or room

    async def delete_room(
        self,
        session: AsyncSession,
        room_id: int,
        user_id: int,
        commit_self: bool = True,
    ) -> None:
        """
        Delete a room owned by the user together with all its assets.

        Raises:
            RoomNotFoundException: If the room does not exist or is not owned.
        """
        room = await self.get_room(session, room_id, user_id)
        await room_db.delete(session, room.id, commit_self=commit_self)
        inventory_logger.info(f"Room {room_id} deleted by user {user_id}")


# Global service instance
room_service = RoomService()


__all__ = [
    "RoomNotFoundException",
    "RoomService",
    "room_service",
]
