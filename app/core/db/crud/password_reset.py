"""
CRUD operations for PasswordResetChallenge model.

"""

from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.crud.base import BaseDB
from app.core.db.models.password_reset import PasswordResetChallenge
from app.core.exceptions.types import DatabaseException


class PasswordResetChallengeDB(BaseDB[PasswordResetChallenge]):
    """
    CRUD operations for PasswordResetChallenge model.

    Reset challenges are single use: verification flips ``used`` and the
    row stays until ``delete_expired_or_used`` removes it.
    """

    def __init__(self):
        super().__init__(model=PasswordResetChallenge)

    async def get_unused_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> PasswordResetChallenge | None:
        """
        Retrieve the unused challenge for an email.

        Raises:
            DatabaseException: If a database error occurs.
        """
        return await self.get_one_by_conditions(
            session=session,
            conditions=[
                self.model.email == email,
                self.model.used.is_(False),
            ],
        )

    async def delete_by_email(
        self,
        session: AsyncSession,
        email: str,
        commit_self: bool = True,
    ) -> int:
        return await self.delete_by_filters(
            session=session,
            filters={"email": email},
            commit_self=commit_self,
        )

    async def mark_used(
        self,
        session: AsyncSession,
        challenge: PasswordResetChallenge,
        commit_self: bool = True,
    ) -> PasswordResetChallenge:
        """
        Mark a reset challenge as used.

        Raises:
            DatabaseException: If a database error occurs.
        """
        try:
            challenge.used = True
            session.add(challenge)
            await self._finish(session, commit_self)
            await session.refresh(challenge)
            return challenge
        except SQLAlchemyError as e:
            raise DatabaseException(
                f"Error marking password reset token as used: {str(e)}"
            ) from e

    async def delete_expired_or_used(
        self,
        session: AsyncSession,
        now: datetime,
        email: str | None = None,
        commit_self: bool = True,
    ) -> int:
        """
        Delete challenges that are expired or already used.

        Args:
            session: The async database session.
            now: Reference time for expiry.
            email: Restrict the cleanup to one email. All emails when None.
            commit_self: Whether to commit the session after deleting.

        Returns:
            The number of challenges deleted.
        """
        conditions = [or_(self.model.expires_at < now, self.model.used.is_(True))]
        if email is not None:
            conditions.append(self.model.email == email)
        return await self.delete_by_conditions(
            session=session,
            conditions=conditions,
            commit_self=commit_self,
        )


__all__ = ["PasswordResetChallengeDB"]
