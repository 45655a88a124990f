"""
Room models for the inventory app.

"""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.models.base import TimestampedModel

if TYPE_CHECKING:
    from app.apps.inventory.db.models.asset import Asset


class Room(TimestampedModel):
    """
    A room owned by one account.

    Attributes:
        user_id: Owner account. Rooms are deleted with their owner.
        name: Room name.
        length_m: Room length in meters.
        width_m: Room width in meters.
        door_position: Wall the door is on (e.g. "north").
        door_width_cm: Door width in centimeters.
        window_position: Wall the window is on.
        window_width_cm: Window width in centimeters.
        power_outlet_positions: Walls or spots that have power outlets.
        photo_url: Optional photo of the room.
        notes: Free-form notes.
    """

    __tablename__ = "rooms"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    length_m: Mapped[float] = mapped_column(Float, nullable=False)
    width_m: Mapped[float] = mapped_column(Float, nullable=False)

    door_position: Mapped[str | None] = mapped_column(String(20), nullable=True)
    door_width_cm: Mapped[int | None] = mapped_column(Integer, nullable=True)

    window_position: Mapped[str | None] = mapped_column(String(20), nullable=True)
    window_width_cm: Mapped[int | None] = mapped_column(Integer, nullable=True)

    power_outlet_positions: Mapped[list[str] | None] = mapped_column(
        JSON, nullable=True
    )

    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    assets: Mapped[list["Asset"]] = relationship(
        "Asset",
        back_populates="room",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, user_id={self.user_id}, name={self.name})>"


__all__ = ["Room"]
