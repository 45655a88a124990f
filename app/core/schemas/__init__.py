"""
Shared schemas for API request validation and response serialization.

"""

from app.core.schemas.auth import (
    # Base
    MessageResponse,
    # Registration
    RegisterRequest,
    RegistrationResponse,
    # OTP
    VerifyOTPRequest,
    ResendOTPRequest,
    # Login
    LoginRequest,
    LoginResponse,
    CurrentUserResponse,
    # Password
    ForgotPasswordRequest,
    ResetPasswordRequest,
)

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
