"""
Schemas for room endpoints.

"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

RoomNameStr = Annotated[
    str,
    StringConstraints(min_length=1, max_length=100, strip_whitespace=True),
    Field(description="Room name (1-100 characters)"),
]

PositionStr = Annotated[
    str,
    StringConstraints(max_length=20, strip_whitespace=True),
]


class RoomCreate(BaseModel):
    """Schema for creating a room."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Kamar A-101",
                "length_m": 4.0,
                "width_m": 3.0,
                "door_position": "south",
                "door_width_cm": 90,
                "window_position": "north",
                "window_width_cm": 120,
                "power_outlet_positions": ["east", "west"],
                "notes": "Corner room",
            }
        }
    )

    name: RoomNameStr
    length_m: Annotated[float, Field(gt=0, description="Room length in meters")]
    width_m: Annotated[float, Field(gt=0, description="Room width in meters")]
    door_position: Annotated[
        PositionStr | None, Field(description="Wall the door is on")
    ] = None
    door_width_cm: Annotated[
        int | None, Field(gt=0, description="Door width in centimeters")
    ] = None
    window_position: Annotated[
        PositionStr | None, Field(description="Wall the window is on")
    ] = None
    window_width_cm: Annotated[
        int | None, Field(gt=0, description="Window width in centimeters")
    ] = None
    power_outlet_positions: Annotated[
        list[str] | None, Field(description="Where the power outlets are")
    ] = None
    photo_url: str | None = None
    notes: str | None = None


class RoomUpdate(BaseModel):
    """Schema for a partial room update. Only provided fields change."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Kamar A-102", "notes": "Renovated"}}
    )

    name: RoomNameStr | None = None
    length_m: Annotated[float | None, Field(gt=0)] = None
    width_m: Annotated[float | None, Field(gt=0)] = None
    door_position: PositionStr | None = None
    door_width_cm: Annotated[int | None, Field(gt=0)] = None
    window_position: PositionStr | None = None
    window_width_cm: Annotated[int | None, Field(gt=0)] = None
    power_outlet_positions: list[str] | None = None
    photo_url: str | None = None
    notes: str | None = None


class RoomResponse(BaseModel):
    """Schema for room response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "user_id": 1,
                "name": "Kamar A-101",
                "length_m": 4.0,
                "width_m": 3.0,
                "door_position": "south",
                "door_width_cm": 90,
                "window_position": "north",
                "window_width_cm": 120,
                "power_outlet_positions": ["east", "west"],
                "photo_url": None,
                "notes": "Corner room",
                "created_at": "2025-01-15T10:30:00Z",
                "updated_at": "2025-01-15T10:30:00Z",
            }
        },
    )

    id: int
    user_id: int
    name: str
    length_m: float
    width_m: float
    door_position: str | None
    door_width_cm: int | None
    window_position: str | None
    window_width_cm: int | None
    power_outlet_positions: list[str] | None
    photo_url: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class RoomListResponse(BaseModel):
    """Schema for list of rooms."""

    rooms: list[RoomResponse]


__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "RoomListResponse",
]
