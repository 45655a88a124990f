"""
OTP engine for email verification of pending registrations.

State per email:

    NoChallenge -> Issued -> Verified | Expired | MaxAttemptsExceeded

Only one challenge exists per email; issuing a new code deletes the old one.
Codes are stored in plain text and protected by their short lifetime and the
attempt cap.

Example usage:
    from app.core.services.otp import otp_engine

    code = await otp_engine.generate_and_save(session, "user@example.com")
    await otp_engine.verify(session, "user@example.com", code)
"""

import hmac

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import otp_logger, settings
from app.core.db.crud import (
    OTPChallengeDB,
    PendingRegistrationDB,
    otp_challenge_db,
    pending_registration_db,
)
from app.core.db.models import OTPChallenge, PendingRegistration
from app.core.db.transaction import run_in_transaction
from app.core.exceptions.types import (
    OTPExpiredException,
    OTPInvalidException,
    OTPNotFoundException,
    PendingUserNotFoundException,
    RegistrationExpiredException,
    TooManyAttemptsException,
)
from app.core.options import OtpOptions
from app.core.utils import expiry_from_now, generate_numeric_code, is_expired, mask_code


class OtpEngine:
    """
    Generates, stores and verifies one-time codes tied to pending registrations.

    Every public method runs as its own unit of work unless ``commit_self`` is
    False, in which case the caller's transaction is used.
    """

    def __init__(
        self,
        options: OtpOptions | None = None,
        challenges: OTPChallengeDB = otp_challenge_db,
        pending_registrations: PendingRegistrationDB = pending_registration_db,
    ):
        self.options = options or OtpOptions()
        self.challenges = challenges
        self.pending_registrations = pending_registrations

    async def _get_live_pending(
        self, session: AsyncSession, email: str
    ) -> PendingRegistration:
        pending = await self.pending_registrations.get_by_email(session, email)
        if pending is None:
            otp_logger.warning(f"No pending registration for {email}")
            raise PendingUserNotFoundException()
        if is_expired(pending.expires_at):
            otp_logger.warning(f"Pending registration expired for {email}")
            raise RegistrationExpiredException()
        return pending

    async def _issue(self, session: AsyncSession, email: str) -> str:
        await self._get_live_pending(session, email)

        await self.challenges.delete_by_email(session, email, commit_self=False)

        code = generate_numeric_code(self.options.length)
        await self.challenges.create(
            session=session,
            data={
                "email": email,
                "code": code,
                "expires_at": expiry_from_now(self.options.expiration_minutes),
                "verified": False,
                "attempts": 0,
                "max_attempts": self.options.max_attempts,
            },
            commit_self=False,
        )

        otp_logger.info(f"OTP {mask_code(code)} issued for {email}")
        return code

    async def generate_and_save(
        self, session: AsyncSession, email: str, commit_self: bool = True
    ) -> str:
        """
        Issue a new code for a pending registration.

        Args:
            session: The database session.
            email: Email of the pending registration.
            commit_self: Whether this call commits its own work.

        Returns:
            str: The plaintext code, for the caller to deliver.

        Raises:
            PendingUserNotFoundException: No pending registration for email.
            RegistrationExpiredException: The pending registration expired;
                the caller is responsible for removing it.
        """
        return await run_in_transaction(
            session,
            lambda: self._issue(session, email),
            operation="otp.generate",
            commit_self=commit_self,
        )

    async def resend(
        self, session: AsyncSession, email: str, commit_self: bool = True
    ) -> str:
        """
        Replace the current code with a fresh one.

        Same checks as ``generate_and_save``; any unverified challenge is
        invalidated. The caller dispatches the returned code.
        """
        otp_logger.info(f"OTP resend requested for {email}")
        return await run_in_transaction(
            session,
            lambda: self._issue(session, email),
            operation="otp.resend",
            commit_self=commit_self,
        )

    async def _verify(
        self, session: AsyncSession, email: str, code: str, commit_self: bool
    ) -> OTPChallenge:
        challenge = await self.challenges.get_unverified_by_email(session, email)
        if challenge is None:
            otp_logger.warning(f"OTP verification failed: no challenge for {email}")
            raise OTPNotFoundException()

        if is_expired(challenge.expires_at):
            otp_logger.warning(f"OTP verification failed: expired for {email}")
            raise OTPExpiredException()

        if challenge.attempts >= challenge.max_attempts:
            otp_logger.warning(
                f"OTP verification failed: too many attempts for {email}"
            )
            raise TooManyAttemptsException()

        if not hmac.compare_digest(challenge.code.encode(), (code or "").encode()):
            # Persisted before raising so the failed attempt counts
            await self.challenges.increment_attempts(
                session, challenge, commit_self=commit_self
            )
            remaining = max(challenge.max_attempts - challenge.attempts, 0)
            otp_logger.warning(
                f"OTP {mask_code(code or '')} mismatch for {email}, "
                f"remaining attempts: {remaining}"
            )
            raise OTPInvalidException(remaining_attempts=remaining)

        await self.challenges.mark_verified(session, challenge, commit_self=False)
        otp_logger.info(f"OTP verified for {email}")
        return challenge

    async def verify(
        self,
        session: AsyncSession,
        email: str,
        code: str,
        commit_self: bool = True,
    ) -> OTPChallenge:
        """
        Verify a submitted code.

        Args:
            session: The database session.
            email: Email the code was sent to.
            code: The submitted code.
            commit_self: Whether this call commits its own work. A wrong code
                is always counted before the error is raised when True.

        Returns:
            OTPChallenge: The challenge, now marked verified.

        Raises:
            OTPNotFoundException: No unverified challenge for email.
            OTPExpiredException: The challenge expired.
            TooManyAttemptsException: The attempt cap was already reached.
            OTPInvalidException: Wrong code, with the remaining attempts.
        """
        return await run_in_transaction(
            session,
            lambda: self._verify(session, email, code, commit_self),
            operation="otp.verify",
            commit_self=commit_self,
        )


# Global service instance
otp_engine = OtpEngine(OtpOptions.from_settings(settings))


__all__ = ["OtpEngine", "otp_engine"]
