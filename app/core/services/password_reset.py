"""
Single-use password reset codes for confirmed accounts.

"""

import hmac

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import auth_logger, settings
from app.core.db.crud import (
    AccountDB,
    PasswordResetChallengeDB,
    account_db,
    password_reset_challenge_db,
)
from app.core.db.models import PasswordResetChallenge
from app.core.db.transaction import run_in_transaction
from app.core.exceptions.types import (
    AccountNotConfirmedException,
    InvalidResetTokenException,
    ResetTokenExpiredException,
    UserNotFoundException,
)
from app.core.options import PasswordResetOptions
from app.core.utils import (
    expiry_from_now,
    generate_numeric_code,
    is_expired,
    mask_code,
    utc_now,
)


class PasswordResetEngine:
    """
    Generates and verifies password reset challenges.

    Verification marks the challenge used instead of deleting it, so a second
    verification with the same code fails. ``cleanup_expired_tokens`` removes
    used and expired rows afterwards.
    """

    def __init__(
        self,
        options: PasswordResetOptions | None = None,
        accounts: AccountDB = account_db,
        challenges: PasswordResetChallengeDB = password_reset_challenge_db,
    ):
        self.options = options or PasswordResetOptions()
        self.accounts = accounts
        self.challenges = challenges

    async def _generate(self, session: AsyncSession, email: str) -> str:
        account = await self.accounts.get_by_email(session, email)
        if account is None:
            raise UserNotFoundException()
        if not account.confirmed:
            raise AccountNotConfirmedException()

        await self.challenges.delete_by_email(session, email, commit_self=False)

        token = generate_numeric_code(self.options.token_length)
        await self.challenges.create(
            session=session,
            data={
                "email": email,
                "token": token,
                "expires_at": expiry_from_now(self.options.expiration_minutes),
                "used": False,
            },
            commit_self=False,
        )
        auth_logger.info(f"Password reset token {mask_code(token)} issued for {email}")
        return token

    async def generate_reset_token(
        self, session: AsyncSession, email: str, commit_self: bool = True
    ) -> str:
        """
        Issue a reset code for a confirmed account, replacing any previous one.

        Returns:
            str: The plaintext code.

        Raises:
            UserNotFoundException: No account for email.
            AccountNotConfirmedException: The account is not confirmed.
        """
        return await run_in_transaction(
            session,
            lambda: self._generate(session, email),
            operation="password_reset.generate",
            commit_self=commit_self,
        )

    async def _verify(
        self, session: AsyncSession, email: str, token: str
    ) -> PasswordResetChallenge:
        challenge = await self.challenges.get_unused_by_email(session, email)
        if challenge is None or not hmac.compare_digest(
            challenge.token.encode(), (token or "").encode()
        ):
            auth_logger.warning(f"Password reset token rejected for {email}")
            raise InvalidResetTokenException()

        if is_expired(challenge.expires_at):
            auth_logger.warning(f"Password reset token expired for {email}")
            raise ResetTokenExpiredException()

        await self.challenges.mark_used(session, challenge, commit_self=False)
        return challenge

    async def verify_reset_token(
        self,
        session: AsyncSession,
        email: str,
        token: str,
        commit_self: bool = True,
    ) -> PasswordResetChallenge:
        """
        Consume a reset code.

        Raises:
            InvalidResetTokenException: No unused challenge matches.
            ResetTokenExpiredException: The challenge expired.
        """
        return await run_in_transaction(
            session,
            lambda: self._verify(session, email, token),
            operation="password_reset.verify",
            commit_self=commit_self,
        )

    async def cleanup_expired_tokens(
        self, session: AsyncSession, email: str, commit_self: bool = True
    ) -> int:
        """Delete the used and expired challenges for an email."""

        async def work() -> int:
            return await self.challenges.delete_expired_or_used(
                session, utc_now(), email=email, commit_self=False
            )

        deleted = await run_in_transaction(
            session,
            work,
            operation="password_reset.cleanup",
            commit_self=commit_self,
        )
        auth_logger.debug(f"Removed {deleted} stale reset token(s) for {email}")
        return deleted


# Global service instance
password_reset_engine = PasswordResetEngine(PasswordResetOptions.from_settings(settings))


__all__ = ["PasswordResetEngine", "password_reset_engine"]
