"""
CRUD operations for Account and PendingRegistration models.

Emails are stored lowercased by the services, so lookups here compare them
as given.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.crud.base import BaseDB
from app.core.db.models import Account, PendingRegistration


class AccountDB(BaseDB[Account]):
    """CRUD operations for confirmed accounts."""

    def __init__(self):
        """Initialize AccountDB with the Account model."""
        super().__init__(model=Account)

    async def get_by_email(self, session: AsyncSession, email: str) -> Account | None:
        """
        Retrieve the account registered with an email.

        Args:
            session: The async database session.
            email: The normalized email address.

        Returns:
            The Account if found, None otherwise.

        Raises:
            DatabaseException: If a database error occurs.
        """
        return await self.get_one_by_filters(session, {"email": email})


class PendingRegistrationDB(BaseDB[PendingRegistration]):
    """
    CRUD operations for registrations waiting on OTP verification.

    A pending registration owns its OTP challenge, so deleting one removes
    the other.
    """

    def __init__(self):
        super().__init__(model=PendingRegistration)

    async def get_by_email(
        self, session: AsyncSession, email: str
    ) -> PendingRegistration | None:
        """Retrieve the pending registration for an email, or None."""
        return await self.get_one_by_filters(session, {"email": email})

    async def delete_by_email(
        self, session: AsyncSession, email: str, commit_self: bool = True
    ) -> int:
        """
        Delete the pending registration for an email; its OTP challenge cascades.

        Args:
            session: The async database session.
            email: The normalized email address.
            commit_self: Whether to commit the transaction.

        Returns:
            The number of deleted rows (0 or 1).
        """
        return await self.delete_by_filters(
            session, {"email": email}, commit_self=commit_self
        )

    async def delete_expired(
        self, session: AsyncSession, now: datetime, commit_self: bool = True
    ) -> int:
        """Delete every pending registration that expired before ``now``."""
        return await self.delete_by_conditions(
            session, [PendingRegistration.expires_at < now], commit_self=commit_self
        )


__all__ = ["AccountDB", "PendingRegistrationDB"]
