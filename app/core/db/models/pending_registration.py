from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db.models.base import BaseModel


class PendingRegistration(BaseModel):
    """
    A sign-up waiting for its OTP to be verified.

    There is at most one row per email. A new registration for the same email
    replaces the old row, and activation deletes it; deleting a row cascades to
    its OTP challenge.

    Attributes:
        email: Email being registered (unique natural key).
        username: Requested username.
        password_hash: Hash of the requested password.
        expires_at: When the registration stops being activatable.
    """

    __tablename__ = "pending_registrations"

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

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<PendingRegistration(email={self.email}, expires_at={self.expires_at})>"


__all__ = ["PendingRegistration"]
