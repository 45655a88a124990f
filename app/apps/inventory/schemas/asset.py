"""
Schemas for asset endpoints.

"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from app.core.enums import AssetCategory, AssetCondition, FunctionZone

AssetNameStr = Annotated[
    str,
    StringConstraints(min_length=1, max_length=255, strip_whitespace=True),
    Field(description="Asset name"),
]

SizeCm = Annotated[int, Field(gt=0, description="Size in centimeters")]
ClearanceCm = Annotated[int, Field(ge=0, description="Free space in centimeters")]


class AssetCreate(BaseModel):
    """Schema for creating an asset in one of the user's rooms."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "room_id": 1,
                "name": "Single bed",
                "category": "tempat_tidur",
                "length_cm": 200,
                "width_cm": 90,
                "height_cm": 45,
                "clearance_front_cm": 60,
                "function_zone": "sleeping",
                "must_be_near_wall": True,
                "can_rotate": False,
                "condition": "good",
            }
        }
    )

    room_id: Annotated[int, Field(description="Room the asset is placed in")]
    name: AssetNameStr
    category: AssetCategory | None = None
    photo_url: str | None = None
    length_cm: SizeCm
    width_cm: SizeCm
    height_cm: SizeCm
    clearance_front_cm: ClearanceCm = 0
    clearance_sides_cm: ClearanceCm = 0
    clearance_back_cm: ClearanceCm = 0
    function_zone: FunctionZone | None = None
    must_be_near_wall: bool = False
    must_be_near_window: bool = False
    must_be_near_outlet: bool = False
    can_rotate: bool = True
    cannot_adjacent_to: Annotated[
        list[int] | None, Field(description="Ids of assets this one must not touch")
    ] = None
    purchase_date: datetime | None = None
    purchase_price: Annotated[Decimal | None, Field(ge=0)] = None
    condition: AssetCondition | None = None
    notes: str | None = None


class AssetUpdate(BaseModel):
    """Schema for a partial asset update. Only provided fields change."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"condition": "needs_repair"}}
    )

    room_id: int | None = None
    name: AssetNameStr | None = None
    category: AssetCategory | None = None
    photo_url: str | None = None
    length_cm: SizeCm | None = None
    width_cm: SizeCm | None = None
    height_cm: SizeCm | None = None
    clearance_front_cm: ClearanceCm | None = None
    clearance_sides_cm: ClearanceCm | None = None
    clearance_back_cm: ClearanceCm | None = None
    function_zone: FunctionZone | None = None
    must_be_near_wall: bool | None = None
    must_be_near_window: bool | None = None
    must_be_near_outlet: bool | None = None
    can_rotate: bool | None = None
    cannot_adjacent_to: list[int] | None = None
    purchase_date: datetime | None = None
    purchase_price: Annotated[Decimal | None, Field(ge=0)] = None
    condition: AssetCondition | None = None
    notes: str | None = None


class AssetResponse(BaseModel):
    """Schema for asset response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    room_id: int
    user_id: int
    name: str
    category: AssetCategory | None
    photo_url: str | None
    length_cm: int
    width_cm: int
    height_cm: int
    clearance_front_cm: int
    clearance_sides_cm: int
    clearance_back_cm: int
    function_zone: FunctionZone | None
    must_be_near_wall: bool
    must_be_near_window: bool
    must_be_near_outlet: bool
    can_rotate: bool
    cannot_adjacent_to: list[int] | None
    purchase_date: datetime | None
    purchase_price: Decimal | None
    condition: AssetCondition | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class AssetListResponse(BaseModel):
    """Schema for list of assets in a room."""

    assets: list[AssetResponse]


class AssetCategoryResponse(BaseModel):
    """Schema for one allowed asset category."""

    value: AssetCategory
    label: str


class AssetCategoryListResponse(BaseModel):
    """Schema for the list of allowed asset categories."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "categories": [
                    {"value": "tempat_tidur", "label": "Tempat Tidur"},
                    {"value": "meja", "label": "Meja"},
                ]
            }
        }
    )

    categories: list[AssetCategoryResponse]


__all__ = [
    "AssetCreate",
    "AssetUpdate",
    "AssetResponse",
    "AssetListResponse",
    "AssetCategoryResponse",
    "AssetCategoryListResponse",
]
