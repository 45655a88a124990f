"""
CRUD operations for OTPChallenge model.

This module provides database operations for OTP challenge management
including lookup of the live challenge, attempt counting, and verification.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.crud.base import BaseDB
from app.core.db.models.otp import OTPChallenge
from app.core.exceptions.types import DatabaseException


class OTPChallengeDB(BaseDB[OTPChallenge]):
    """
    CRUD operations for OTPChallenge model.

    Provides specialized methods for finding the unverified challenge for an
    email, incrementing attempt counts, and marking challenges as verified.
    """

    def __init__(self):
        """Initialize OTPChallengeDB with the OTPChallenge model."""
        super().__init__(model=OTPChallenge)

    async def get_unverified_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> OTPChallenge | None:
        """
        Retrieve the unverified OTP challenge for an email.

        Verified challenges are excluded, so a second verification after a
        successful one finds nothing.

        Args:
            session: The async database session.
            email: The email address the OTP was sent to.

        Returns:
            The OTPChallenge if found, None otherwise.

        Raises:
            DatabaseException: If a database error occurs.
        """
        return await self.get_one_by_conditions(
            session=session,
            conditions=[
                self.model.email == email,
                self.model.verified.is_(False),
            ],
        )

    async def delete_by_email(
        self,
        session: AsyncSession,
        email: str,
        commit_self: bool = True,
    ) -> int:
        """
        Delete every challenge for an email.

        Called before issuing a new code so only the latest one is valid.

        Returns:
            The number of challenges deleted.
        """
        return await self.delete_by_filters(
            session=session,
            filters={"email": email},
            commit_self=commit_self,
        )

    async def increment_attempts(
        self,
        session: AsyncSession,
        challenge: OTPChallenge,
        commit_self: bool = True,
    ) -> OTPChallenge:
        """
        Increment the attempt counter for an OTP challenge.

        Args:
            session: The async database session.
            challenge: The OTP challenge to update.
            commit_self: Whether to commit the session after updating.

        Returns:
            The updated OTPChallenge.

        Raises:
            DatabaseException: If a database error occurs.
        """
        try:
            challenge.attempts += 1
            session.add(challenge)
            await self._finish(session, commit_self)
            await session.refresh(challenge)
            return challenge
        except SQLAlchemyError as e:
            raise DatabaseException(f"Error incrementing OTP attempts: {str(e)}") from e

    async def mark_verified(
        self,
        session: AsyncSession,
        challenge: OTPChallenge,
        commit_self: bool = True,
    ) -> OTPChallenge:
        """
        Mark an OTP challenge as verified.

        Raises:
            DatabaseException: If a database error occurs.
        """
        try:
            challenge.verified = True
            session.add(challenge)
            await self._finish(session, commit_self)
            await session.refresh(challenge)
            return challenge
        except SQLAlchemyError as e:
            raise DatabaseException(f"Error marking OTP as verified: {str(e)}") from e


__all__ = ["OTPChallengeDB"]
