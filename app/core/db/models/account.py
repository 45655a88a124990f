"""
Account model: the permanent, confirmed identity used for login.

"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db.models.base import TimestampedModel


class Account(TimestampedModel):
    """
    A registered user account.

    Accounts are created only by activating a pending registration after its
    OTP has been verified, so ``confirmed`` is True for every account created
    through the API. ``updated_at`` moves forward on password reset.

    Attributes:
        email: Unique login email.
        username: Display name chosen at registration.
        password_hash: Base64 salt and PBKDF2 key produced by PasswordHasher.
        confirmed: Whether the email address has been confirmed.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    confirmed: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email}, confirmed={self.confirmed})>"


__all__ = ["Account"]
