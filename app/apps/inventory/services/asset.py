"""
Asset service for the inventory app.

Assets always live in a room owned by the same account. Creating an asset,
listing a room's assets and moving an asset to another room all check that
the target room belongs to the caller.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.apps.inventory.db.crud import asset_db, room_db
from app.apps.inventory.db.models import Asset
from app.apps.inventory.services.room import RoomNotFoundException
from app.core.config import inventory_logger
from app.core.exceptions.types import NotFoundException
from app.core.utils import utc_now


# ============================================================================
# Exceptions
# ============================================================================


class AssetNotFoundException(NotFoundException):
    """Raised when an asset is missing or owned by another account."""

    def __init__(self, message: str = "Asset not found"):
        super().__init__(message)


class RoomNotOwnedException(RoomNotFoundException):
    """Raised when an asset targets a room the caller does not own."""

    def __init__(self, message: str = "Room not found or does not belong to the user"):
        super().__init__(message)


# ============================================================================
# Service
# ============================================================================


class AssetService:
    """Service for asset management."""

    async def _ensure_room_owned(
        self, session: AsyncSession, room_id: int, user_id: int
    ) -> None:
        if await room_db.get_owned(session, room_id, user_id) is None:
            inventory_logger.warning(
                f"User {user_id} targeted room {room_id} they do not own"
            )
            raise RoomNotOwnedException()

    async def get_asset(
        self, session: AsyncSession, asset_id: int, user_id: int
    ) -> Asset:
        """
        Get an asset owned by the user.

        Raises:
            AssetNotFoundException: If the asset does not exist or is not owned.
        """
        asset = await asset_db.get_owned(session, asset_id, user_id)
        if asset is None:
            raise AssetNotFoundException()
        return asset

    async def list_room_assets(
        self, session: AsyncSession, room_id: int, user_id: int
    ) -> Sequence[Asset]:
        """
        List the assets in one of the user's rooms.

        Raises:
            RoomNotOwnedException: If the room does not exist or is not owned.
        """
        await self._ensure_room_owned(session, room_id, user_id)
        return await asset_db.list_for_room(session, room_id, user_id)

    async def create_asset(
        self,
        session: AsyncSession,
        user_id: int,
        data: dict[str, Any],
        commit_self: bool = True,
    ) -> Asset:
        """
        Create an asset in one of the user's rooms.

        Args:
            session: Database session.
            user_id: Owner account id.
            data: Asset fields, including ``room_id``.
            commit_self: Whether to commit the transaction.

        Raises:
            RoomNotOwnedException: If the room does not exist or is not owned.
        """
        await self._ensure_room_owned(session, data["room_id"], user_id)
        asset = await asset_db.create(
            session,
            data={**data, "user_id": user_id},
            commit_self=commit_self,
        )
        inventory_logger.info(
            f"Asset {asset.id} created in room {asset.room_id} for user {user_id}"
        )
        return asset

    async def update_asset(
        self,
        session: AsyncSession,
        asset_id: int,
        user_id: int,
        updates: dict[str, Any],
        commit_self: bool = True,
    ) -> Asset:
        """
        Apply a partial update to an asset owned by the user.

        Raises:
            AssetNotFoundException: If the asset does not exist or is not owned.
            RoomNotOwnedException: If the asset is moved to a room the user
                does not own.
        """
        asset = await self.get_asset(session, asset_id, user_id)
        if not updates:
            return asset

        new_room_id = updates.get("room_id")
        if new_room_id is not None and new_room_id != asset.room_id:
            await self._ensure_room_owned(session, new_room_id, user_id)

        updated = await asset_db.update(
            session,
            asset.id,
            {**updates, "updated_at": utc_now()},
            commit_self=commit_self,
        )
        inventory_logger.info(
            f"Asset {asset_id} updated by user {user_id}: fields={sorted(updates)}"
        )
        return updated or asset

    async def delete_asset(
        self,
        session: AsyncSession,
        asset_id: int,
        user_id: int,
        commit_self: bool = True,
    ) -> None:
        """
        Delete an asset owned by the user.

        Raises:
            AssetNotFoundException: If the asset does not exist or is not owned.
        """
        asset = await self.get_asset(session, asset_id, user_id)
        await asset_db.delete(session, asset.id, commit_self=commit_self)
        inventory_logger.info(f"Asset {asset_id} deleted by user {user_id}")


# Global service instance
asset_service = AssetService()


__all__ = [
    "AssetNotFoundException",
    "AssetService",
    "RoomNotOwnedException",
    "asset_service",
]
