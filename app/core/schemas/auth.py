"""
Authentication schemas for request validation and response serialization.

- Email registration and OTP verification
- Email/password login
- Password reset
- Current user profile

Field rules such as password complexity are enforced by the registration
validator so every violated rule is reported together; these schemas only
describe shapes.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints

# OTP / reset code with pattern validation
CodeStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=12, pattern=r"^\d+$"),
    Field(description="Numeric code received by email"),
]


class MessageResponse(BaseModel):
    """Generic message response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"message": "Operation completed successfully", "success": True}
        }
    )

    message: str
    success: bool = True


class RegisterRequest(BaseModel):
    """Request schema for email registration."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "username": "alice123456",
                "password": "P@ssw0rd1",
                "password_confirm": "P@ssw0rd1",
            }
        }
    )

    email: Annotated[str, Field(description="Email address to register")]
    username: Annotated[str, Field(description="Username (10-50 characters)")]
    password: Annotated[str, Field(description="Password (8-16 characters)")]
    password_confirm: Annotated[
        str | None, Field(description="Repeat of the password")
    ] = None


class RegistrationResponse(BaseModel):
    """Response schema for a stored pending registration."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "message": "OTP has been sent to your email. Please check your inbox.",
                "expiration_minutes": 10,
            }
        },
    )

    email: str
    message: str
    expiration_minutes: int


class VerifyOTPRequest(BaseModel):
    """Request schema for OTP verification."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "alice@example.com", "otp_code": "123456"}
        }
    )

    email: Annotated[EmailStr, Field(description="Email the OTP was sent to")]
    otp_code: CodeStr


class ResendOTPRequest(BaseModel):
    """Request schema for resending the registration OTP."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "alice@example.com"}}
    )

    email: Annotated[EmailStr, Field(description="Email of the pending registration")]


class LoginRequest(BaseModel):
    """Request schema for email/password login."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "alice@example.com", "password": "P@ssw0rd1"}
        }
    )

    email: Annotated[str, Field(description="Account email")]
    password: Annotated[str, Field(description="Account password")]


class LoginResponse(BaseModel):
    """Response schema for successful authentication."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "user_id": 1,
                "email": "alice@example.com",
                "username": "alice123456",
                "created_at": "2025-01-01T00:00:00Z",
                "token": "eyJhbGciOiJIUzI1NiIs...",
                "token_type": "bearer",
            }
        },
    )

    user_id: int
    email: str
    username: str
    created_at: datetime
    token: str
    token_type: str = "bearer"


class CurrentUserResponse(BaseModel):
    """Response schema for the authenticated user's profile."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "user_id": 1,
                "email": "alice@example.com",
                "username": "alice123456",
                "created_at": "2025-01-01T00:00:00Z",
                "is_confirmed": True,
            }
        },
    )

    user_id: int
    email: str
    username: str
    created_at: datetime
    is_confirmed: bool


class ForgotPasswordRequest(BaseModel):
    """Request schema for requesting a password reset code."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "alice@example.com"}}
    )

    email: Annotated[str, Field(description="Account email")]


class ResetPasswordRequest(BaseModel):
    """Request schema for resetting a password with an emailed code."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "otp_code": "123456",
                "password": "N3w!Passw0rd",
                "password_confirm": "N3w!Passw0rd",
            }
        }
    )

    email: Annotated[str, Field(description="Account email")]
    otp_code: Annotated[str, Field(description="Reset code received by email")]
    password: Annotated[str, Field(description="New password (8-16 characters)")]
    password_confirm: Annotated[str, Field(description="Repeat of the new password")]


__all__ = [
    "MessageResponse",
    "RegisterRequest",
    "RegistrationResponse",
    "VerifyOTPRequest",
    "ResendOTPRequest",
    "LoginRequest",
    "LoginResponse",
    "CurrentUserResponse",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
]
