"""
User router for registration, authentication and password reset.

This module provides endpoints for:
- Email registration with OTP verification
- Email/password login returning a bearer token
- Current user profile
- Password reset with emailed codes

All endpoints are prefixed with /api/user when mounted in the main app.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request, status

from app.core.config import auth_logger
from app.core.dependencies import CurrentUser, DBSession
from app.core.schemas.auth import (
    CurrentUserResponse,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegistrationResponse,
    ResendOTPRequest,
    ResetPasswordRequest,
    VerifyOTPRequest,
)
from app.core.services.registration import (
    ResponseMessages,
    registration_service,
)


router = APIRouter()


def _api_base_url(request: Request) -> str:
    """Public base of the API used in emailed verification links."""
    return f"{str(request.base_url).rstrip('/')}/api"


# =============================================================================
# Registration Endpoints
# =============================================================================


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register with email",
    description="""
## Start a Registration

Stores a **pending registration** and emails a **6-digit OTP**. No account
exists until the OTP is verified with `POST /api/user/verify`.

### Validation Rules

- Email must be a valid address
- Username length between **10** and **50** characters
- Password length between **8** and **16** characters with at least one
  uppercase letter, lowercase letter, digit and special character
- `password_confirm`, when sent, must match `password`

Every violated rule is returned in `errors`.

### Error Responses

| Status | Reason |
|--------|--------|
| `400 Bad Request` | One or more validation rules failed |
| `409 Conflict` | Email already registered |
| `502 Bad Gateway` | OTP email could not be sent (retry with `/resend-otp`) |
""",
)
async def register(
    request: Request,
    request_data: RegisterRequest,
    session: DBSession,
) -> RegistrationResponse:
    result = await registration_service.register(
        session=session,
        email=request_data.email,
        username=request_data.username,
        password=request_data.password,
        password_confirm=request_data.password_confirm,
        base_url=_api_base_url(request),
    )
    return RegistrationResponse.model_validate(result)


@router.post(
    "/verify",
    response_model=MessageResponse,
    summary="Verify OTP and activate account",
    description="""
## Activate a Pending Registration

Checks the emailed OTP and, on success, creates the confirmed account.

### Error Responses

| Status | Reason |
|--------|--------|
| `400 Bad Request` | Wrong code (remaining attempts in the message), expired code or expired registration |
| `404 Not Found` | No OTP or pending registration for this email |
| `429 Too Many Requests` | Maximum verification attempts reached |
""",
)
async def verify(
    request_data: VerifyOTPRequest,
    session: DBSession,
) -> MessageResponse:
    await registration_service.verify_and_activate(
        session, request_data.email, request_data.otp_code
    )
    return MessageResponse(message=ResponseMessages.ACCOUNT_ACTIVATED)


@router.get(
    "/verify",
    response_model=MessageResponse,
    summary="Verify OTP from the emailed link",
    description="Same as `POST /api/user/verify`, with email and code in the query string.",
)
async def verify_from_link(
    session: DBSession,
    email: Annotated[str, Query(description="Email the OTP was sent to")],
    otp: Annotated[str, Query(description="The emailed OTP code")],
) -> MessageResponse:
    await registration_service.verify_and_activate(session, email, otp)
    return MessageResponse(message=ResponseMessages.ACCOUNT_ACTIVATED)


@router.post(
    "/resend-otp",
    response_model=MessageResponse,
    summary="Resend registration OTP",
    description="""
## Resend the Verification Code

Replaces the current OTP of a pending registration with a new one and emails
it. The previous code stops working.

### Error Responses

| Status | Reason |
|--------|--------|
| `400 Bad Request` | Registration expired (register again) |
| `404 Not Found` | No pending registration for this email |
| `502 Bad Gateway` | OTP email could not be sent |
""",
)
async def resend_otp(
    request: Request,
    request_data: ResendOTPRequest,
    session: DBSession,
) -> MessageResponse:
    message = await registration_service.resend_otp(
        session, request_data.email, base_url=_api_base_url(request)
    )
    return MessageResponse(message=message)


# =============================================================================
# Authentication Endpoints
# =============================================================================


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in with email",
    description="""
## Log In

Returns a signed **JWT bearer token** for a confirmed account. Send it as
`Authorization: Bearer <token>` on protected endpoints.

### Error Responses

| Status | Reason |
|--------|--------|
| `401 Unauthorized` | Invalid email or password |
| `403 Forbidden` | Account is not confirmed |
""",
)
async def login(
    request_data: LoginRequest,
    session: DBSession,
) -> LoginResponse:
    result = await registration_service.login(
        session, request_data.email, request_data.password
    )
    return LoginResponse.model_validate(result)


@router.get(
    "/auth/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    description="Returns the profile of the account that owns the bearer token.",
)
async def get_me(user: CurrentUser, session: DBSession) -> CurrentUserResponse:
    profile = await registration_service.get_current_user(session, user.id)
    return CurrentUserResponse.model_validate(profile)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    description="""
## Log Out

Tokens are stateless, so logging out only means discarding the token on the
client. The token stays valid until it expires.
""",
)
async def logout(user: CurrentUser) -> MessageResponse:
    auth_logger.info(f"Logout: id={user.id}")
    return MessageResponse(message=ResponseMessages.LOGGED_OUT)


# =============================================================================
# Password Reset Endpoints
# =============================================================================


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Request password reset",
    description="""
## Request a Password Reset Code

Emails a single-use reset code to a confirmed account. The response is the
same whether or not the email is registered.

### Error Responses

| Status | Reason |
|--------|--------|
| `502 Bad Gateway` | A code was generated but the email could not be sent |
""",
)
async def forgot_password(
    request_data: ForgotPasswordRequest,
    session: DBSession,
) -> MessageResponse:
    message = await registration_service.send_password_reset_otp(
        session, request_data.email
    )
    return MessageResponse(message=message)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Reset password",
    description="""
## Reset the Password

Sets a new password using the emailed reset code. The code can be used once.

### Error Responses

| Status | Reason |
|--------|--------|
| `400 Bad Request` | Validation failed, invalid or used code, or expired code |
""",
)
async def reset_password(
    request_data: ResetPasswordRequest,
    session: DBSession,
) -> MessageResponse:
    message = await registration_service.reset_password(
        session,
        email=request_data.email,
        otp_code=request_data.otp_code,
        password=request_data.password,
        password_confirm=request_data.password_confirm,
    )
    return MessageResponse(message=message)


__all__ = ["router"]
