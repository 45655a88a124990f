"""
Asset models for the inventory app.

"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.models.base import TimestampedModel
from app.core.enums import AssetCategory, AssetCondition, FunctionZone

if TYPE_CHECKING:
    from app.apps.inventory.db.models.room import Room


class Asset(TimestampedModel):
    """
    A piece of furniture or equipment placed in a room.

    Size and clearance are in centimeters. The placement flags and
    ``cannot_adjacent_to`` (ids of other assets) describe layout constraints.
    Assets are deleted with their room or their owner.
    """

    __tablename__ = "assets"

    room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    category: Mapped[AssetCategory | None] = mapped_column(
        Enum(AssetCategory, native_enum=False, name="asset_category"),
        nullable=True,
    )

    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    length_cm: Mapped[int] = mapped_column(Integer, nullable=False)
    width_cm: Mapped[int] = mapped_column(Integer, nullable=False)
    height_cm: Mapped[int] = mapped_column(Integer, nullable=False)

    clearance_front_cm: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    clearance_sides_cm: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    clearance_back_cm: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    function_zone: Mapped[FunctionZone | None] = mapped_column(
        Enum(FunctionZone, native_enum=False, name="function_zone"),
        nullable=True,
    )

    must_be_near_wall: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    must_be_near_window: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    must_be_near_outlet: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    can_rotate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    cannot_adjacent_to: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)

    purchase_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    purchase_price: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )

    condition: Mapped[AssetCondition | None] = mapped_column(
        Enum(AssetCondition, native_enum=False, name="asset_condition"),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    room: Mapped["Room"] = relationship(
        "Room",
        back_populates="assets",
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, room_id={self.room_id}, name={self.name})>"


__all__ = ["Asset"]
