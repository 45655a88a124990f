from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.config import MAX_CODE_LENGTH
from app.core.db.models.base import BaseModel


class PasswordResetChallenge(BaseModel):
    """
    A single-use code authorizing one password change for a confirmed account.

    Verification marks the row as used instead of deleting it; used and
    expired rows are removed after a successful reset.
    """

    __tablename__ = "password_reset_challenges"

    email: Mapped[str] = mapped_column(
        String(255),
        ForeignKey(
            "accounts.email",
            ondelete="CASCADE",
        ),
        unique=True,
        nullable=False,
        index=True,
    )

    token: Mapped[str] = mapped_column(
        String(MAX_CODE_LENGTH),
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    used: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )


__all__ = ["PasswordResetChallenge"]
