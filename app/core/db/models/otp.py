"""
OTP challenge model for email verification during registration.

"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.config import MAX_CODE_LENGTH
from app.core.db.models.base import BaseModel


class OTPChallenge(BaseModel):
    """
    A one-time code proving control of the email of a pending registration.

    Codes are short, numeric and stored in plain text; the short lifetime and
    the attempt cap bound brute force. Only one challenge exists per email:
    issuing a new code deletes the previous one, and deleting the pending
    registration deletes its challenge through the foreign key cascade.

    Attributes:
        email: Email of the owning pending registration.
        code: Fixed-length numeric code.
        expires_at: When the code stops being accepted.
        verified: Set once the correct code has been submitted.
        attempts: Number of wrong codes submitted so far.
        max_attempts: Wrong submissions allowed before the challenge locks.
    """

    __tablename__ = "otp_challenges"

    email: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(
            "pending_registrations.email",
            ondelete="CASCADE",
        ),
        unique=True,
        nullable=False,
        index=True,
    )

    code: Mapped[str] = mapped_column(
        String(MAX_CODE_LENGTH),
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    attempts: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    max_attempts: Mapped[int] = mapped_column(
        Integer,
        default=5,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<OTPChallenge(email={self.email}, verified={self.verified}, "
            f"attempts={self.attempts}/{self.max_attempts})>"
        )


__all__ = ["OTPChallenge"]
