"""
Registration service: the top-level identity workflows.

This module coordinates the collaborators of the identity core:
- Sign-up held as a pending registration until its emailed OTP is verified
- Activation of a verified pending registration into a permanent account
- Email/password login returning a signed bearer token
- Password reset with single-use emailed codes

Each workflow runs its storage work as one explicit unit of work and only
talks to the email gateway after that work is committed, so a failed email
leaves the pending registration and its OTP in place for a resend.

Example usage:
    from app.core.services.registration import registration_service

    result = await registration_service.register(
        session=db_session,
        email="a@x.com",
        username="alice123456",
        password="P@ssw0rd1",
        base_url="http://localhost:8000",
    )
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import auth_logger, settings
from app.core.db.crud import (
    AccountDB,
    PendingRegistrationDB,
    account_db,
    pending_registration_db,
)
from app.core.db.models import Account
from app.core.db.transaction import run_in_transaction
from app.core.exceptions.types import (
    AccountNotConfirmedException,
    AppException,
    EmailAlreadyRegisteredException,
    EmailDeliveryException,
    InvalidCredentialsException,
    PendingUserDataNotFoundException,
    RegistrationExpiredException,
    UserNotFoundException,
)
from app.core.options import RegistrationOptions
from app.core.services.email_manager import EmailManagerService
from app.core.services.otp import OtpEngine, otp_engine
from app.core.services.password_hasher import PasswordHasher, password_hasher
from app.core.services.password_reset import (
    PasswordResetEngine,
    password_reset_engine,
)
from app.core.services.tokens import JwtIssuer, jwt_issuer
from app.core.services.validation import RegistrationValidator, registration_validator
from app.core.utils import expiry_from_now, is_expired, utc_now


class ResponseMessages:
    OTP_SENT = "OTP has been sent to your email. Please check your inbox."
    OTP_RESENT = "New OTP has been sent to your email."
    ACCOUNT_ACTIVATED = "Your account has been activated successfully."
    PASSWORD_RESET_REQUESTED = (
        "If the email is registered, a password reset code has been sent."
    )
    PASSWORD_RESET_DONE = "Your password has been reset successfully."
    PASSWORD_RESET_EMAIL_FAILED = (
        "Failed to send password reset email. Please try again."
    )
    LOGGED_OUT = "Logged out successfully. Please discard your access token."


class EmailGateway(Protocol):
    """Capability that delivers identity emails and reports success as a bool."""

    async def send_otp_email(
        self,
        email: str,
        otp_code: str,
        verification_url: str,
        user_name: str | None = None,
    ) -> bool: ...

    async def send_password_reset_email(
        self,
        email: str,
        reset_code: str,
        user_name: str | None = None,
    ) -> bool: ...


@dataclass
class RegistrationResult:
    email: str
    message: str
    expiration_minutes: int


@dataclass
class UserProfile:
    user_id: int
    email: str
    username: str
    created_at: datetime
    is_confirmed: bool

    @classmethod
    def from_account(cls, account: Account) -> "UserProfile":
        return cls(
            user_id=account.id,
            email=account.email,
            username=account.username,
            created_at=account.created_at,
            is_confirmed=account.confirmed,
        )


@dataclass
class LoginResult:
    user_id: int
    email: str
    username: str
    created_at: datetime
    token: str
    token_type: str = "bearer"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class RegistrationService:
    """
    Orchestrates registration, activation, login and password reset.

    Collaborators are injected at construction; the module-level
    ``registration_service`` wires the defaults built from settings.
    """

    def __init__(
        self,
        options: RegistrationOptions | None = None,
        *,
        hasher: PasswordHasher = password_hasher,
        issuer: JwtIssuer = jwt_issuer,
        otp: OtpEngine = otp_engine,
        password_reset: PasswordResetEngine = password_reset_engine,
        validator: RegistrationValidator = registration_validator,
        email_gateway: EmailGateway = EmailManagerService,  # type: ignore[assignment]
        accounts: AccountDB = account_db,
        pending_registrations: PendingRegistrationDB = pending_registration_db,
    ):
        self.options = options or RegistrationOptions()
        self.hasher = hasher
        self.issuer = issuer
        self.otp = otp
        self.password_reset = password_reset
        self.validator = validator
        self.email_gateway = email_gateway
        self.accounts = accounts
        self.pending_registrations = pending_registrations

    @staticmethod
    def build_verification_url(base_url: str, email: str, code: str) -> str:
        query = urlencode({"email": email, "otp": code})
        return f"{base_url.rstrip('/')}/user/verify?{query}"

    async def _discard_pending(self, session: AsyncSession, email: str) -> None:
        await run_in_transaction(
            session,
            lambda: self.pending_registrations.delete_by_email(
                session, email, commit_self=False
            ),
            operation="registration.discard_pending",
        )
        auth_logger.info(f"Expired pending registration removed for {email}")

    # =========================================================================
    # Registration
    # =========================================================================

    async def register(
        self,
        session: AsyncSession,
        email: str,
        username: str,
        password: str,
        base_url: str,
        password_confirm: str | None = None,
    ) -> RegistrationResult:
        """
        Start a sign-up: store a pending registration and email its OTP.

        Args:
            session: The database session.
            email: Email address to register.
            username: Requested username.
            password: Requested password.
            base_url: Public base URL used to build the verification link.
            password_confirm: Optional confirmation of ``password``.

        Returns:
            RegistrationResult: Email, message and OTP lifetime in minutes.

        Raises:
            ValidationFailedException: Input breaks one or more rules.
            EmailAlreadyRegisteredException: An account already uses email.
            EmailDeliveryException: The OTP email could not be sent. The
                pending registration and OTP are kept so a resend recovers.
        """
        self.validator.validate_registration(email, username, password, password_confirm)
        email = normalize_email(email)

        async def work() -> str:
            if await self.accounts.exists(session, {"email": email}):
                raise EmailAlreadyRegisteredException()

            # A repeated sign-up restarts the flow
            await self.pending_registrations.delete_by_email(
                session, email, commit_self=False
            )
            await self.pending_registrations.create(
                session=session,
                data={
                    "email": email,
                    "username": username,
                    "password_hash": self.hasher.hash(password),
                    "expires_at": expiry_from_now(
                        self.options.pending_expiration_minutes
                    ),
                },
                commit_self=False,
            )
            return await self.otp.generate_and_save(session, email, commit_self=False)

        code = await run_in_transaction(session, work, operation="registration.register")
        auth_logger.info(f"Pending registration stored for {email}")

        sent = await self.email_gateway.send_otp_email(
            email=email,
            otp_code=code,
            verification_url=self.build_verification_url(base_url, email, code),
            user_name=username,
        )
        if not sent:
            auth_logger.error(f"OTP email dispatch failed for {email}")
            raise EmailDeliveryException()

        return RegistrationResult(
            email=email,
            message=ResponseMessages.OTP_SENT,
            expiration_minutes=self.options.otp_expiration_minutes,
        )

    async def activate(self, session: AsyncSession, email: str) -> Account:
        """
        Promote a pending registration into a confirmed account.

        This is the only path that creates an account. The pending
        registration is deleted, which cascades to its OTP challenge.

        Raises:
            PendingUserDataNotFoundException: No pending registration.
            RegistrationExpiredException: The pending registration expired;
                it is deleted before the error is raised.
            EmailAlreadyRegisteredException: An account already uses email.
        """
        email = normalize_email(email)

        async def work() -> Account:
            pending = await self.pending_registrations.get_by_email(session, email)
            if pending is None:
                raise PendingUserDataNotFoundException()

            if is_expired(pending.expires_at):
                await self.pending_registrations.delete_by_email(
                    session, email, commit_self=True
                )
                raise RegistrationExpiredException()

            if await self.accounts.exists(session, {"email": email}):
                raise EmailAlreadyRegisteredException()

            account = await self.accounts.create(
                session=session,
                data={
                    "email": pending.email,
                    "username": pending.username,
                    "password_hash": pending.password_hash,
                    "confirmed": True,
                },
                commit_self=False,
            )
            await self.pending_registrations.delete_by_email(
                session, email, commit_self=False
            )
            return account

        account = await run_in_transaction(
            session, work, operation="registration.activate"
        )
        auth_logger.info(f"Account activated: id={account.id}, email={email}")
        return account

    async def verify_and_activate(
        self, session: AsyncSession, email: str, otp_code: str
    ) -> Account:
        """
        Verify the emailed OTP and activate the account in one call.

        A wrong code is counted and committed before the error is raised.
        """
        email = normalize_email(email)
        await self.otp.verify(session, email, otp_code)
        return await self.activate(session, email)

    async def resend_otp(
        self, session: AsyncSession, email: str, base_url: str | None = None
    ) -> str:
        """
        Issue and email a fresh OTP for a pending registration.

        Returns:
            str: The user-facing confirmation message.

        Raises:
            PendingUserNotFoundException: No pending registration.
            RegistrationExpiredException: The pending registration expired;
                it is deleted before the error is raised.
            EmailDeliveryException: The OTP email could not be sent.
        """
        email = normalize_email(email)

        async def work() -> tuple[str, str]:
            code = await self.otp.resend(session, email, commit_self=False)
            pending = await self.pending_registrations.get_by_email(session, email)
            return code, pending.username if pending else None

        try:
            code, username = await run_in_transaction(
                session, work, operation="registration.resend_otp"
            )
        except RegistrationExpiredException:
            await self._discard_pending(session, email)
            raise

        sent = await self.email_gateway.send_otp_email(
            email=email,
            otp_code=code,
            verification_url=self.build_verification_url(
                base_url or f"{settings.API_DOMAIN}/api", email, code
            ),
            user_name=username,
        )
        if not sent:
            auth_logger.error(f"OTP resend dispatch failed for {email}")
            raise EmailDeliveryException()
        return ResponseMessages.OTP_RESENT

    # =========================================================================
    # Authentication
    # =========================================================================

    async def login(
        self, session: AsyncSession, email: str, password: str
    ) -> LoginResult:
        """
        Authenticate with email and password.

        Unknown email and wrong password raise the same error so callers
        cannot tell which emails are registered.

        Raises:
            InvalidCredentialsException: Unknown email or wrong password.
            AccountNotConfirmedException: The account is not confirmed.
        """
        email = normalize_email(email or "")

        async def work() -> Account:
            account = await self.accounts.get_by_email(session, email)
            if account is None:
                raise InvalidCredentialsException()
            if not account.confirmed:
                raise AccountNotConfirmedException()
            if not self.hasher.verify(password, account.password_hash):
                raise InvalidCredentialsException()
            return account

        try:
            account = await run_in_transaction(
                session, work, operation="registration.login"
            )
        except InvalidCredentialsException:
            auth_logger.warning(f"Login failed for {email}")
            raise

        token = self.issuer.issue(account)
        auth_logger.info(f"Login succeeded: id={account.id}")
        return LoginResult(
            user_id=account.id,
            email=account.email,
            username=account.username,
            created_at=account.created_at,
            token=token,
        )

    async def get_current_user(
        self, session: AsyncSession, account_id: int
    ) -> UserProfile:
        """
        Load the profile for an authenticated account id.

        Raises:
            UserNotFoundException: The id does not resolve to an account.
        """

        async def work() -> Account:
            account = await self.accounts.get_by_id(session, account_id)
            if account is None:
                raise UserNotFoundException()
            return account

        account = await run_in_transaction(
            session, work, operation="registration.current_user"
        )
        return UserProfile.from_account(account)

    # =========================================================================
    # Password reset
    # =========================================================================

    async def send_password_reset_otp(self, session: AsyncSession, email: str) -> str:
        """
        Email a password reset code if the account exists and is confirmed.

        The result is the same whether or not a code was generated; the real
        outcome only appears in the logs.

        Returns:
            str: The generic confirmation message.

        Raises:
            EmailDeliveryException: A code was generated but the email could
                not be sent.
        """
        email = normalize_email(email or "")
        try:
            code = await self.password_reset.generate_reset_token(session, email)
        except AppException as e:
            auth_logger.info(
                f"Password reset not issued for {email}: {type(e).__name__}"
            )
            return ResponseMessages.PASSWORD_RESET_REQUESTED

        sent = await self.email_gateway.send_password_reset_email(
            email=email, reset_code=code
        )
        if not sent:
            auth_logger.error(f"Password reset email dispatch failed for {email}")
            raise EmailDeliveryException(ResponseMessages.PASSWORD_RESET_EMAIL_FAILED)
        return ResponseMessages.PASSWORD_RESET_REQUESTED

    async def reset_password(
        self,
        session: AsyncSession,
        email: str,
        otp_code: str,
        password: str,
        password_confirm: str,
    ) -> str:
        """
        Change the password of an account with a reset code.

        The new password is validated before any storage is touched. Token
        errors surface as is.

        Returns:
            str: The confirmation message.

        Raises:
            ValidationFailedException: The new password breaks the rules or
                does not match its confirmation.
            InvalidResetTokenException: Unknown or already used code.
            ResetTokenExpiredException: The code expired.
        """
        self.validator.validate_password_reset(
            email, otp_code, password, password_confirm
        )
        email = normalize_email(email)

        async def work() -> None:
            await self.password_reset.verify_reset_token(
                session, email, otp_code, commit_self=False
            )
            account = await self.accounts.get_by_email(session, email)
            if account is None:
                raise UserNotFoundException()

            await self.accounts.update(
                session,
                account.id,
                {
                    "password_hash": self.hasher.hash(password),
                    "updated_at": utc_now(),
                },
                commit_self=False,
            )
            await self.password_reset.cleanup_expired_tokens(
                session, email, commit_self=False
            )

        await run_in_transaction(session, work, operation="registration.reset_password")
        auth_logger.info(f"Password reset completed for {email}")
        return ResponseMessages.PASSWORD_RESET_DONE


# Global service instance
registration_service = RegistrationService(RegistrationOptions.from_settings(settings))


__all__ = [
    "EmailGateway",
    "LoginResult",
    "RegistrationResult",
    "RegistrationService",
    "ResponseMessages",
    "UserProfile",
    "normalize_email",
    "registration_service",
]
