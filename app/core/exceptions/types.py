from fastapi import status


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
        self.details = details
        super().__init__(message)


# ============================================================================
# Unexpected
# ============================================================================


class DatabaseException(AppException):
    """Exception raised for database-related errors."""

    def __init__(self, message: str = "A database error occurred."):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class UnexpectedException(AppException):
    """Generic failure that hides the underlying cause from the client."""

    def __init__(self, message: str = "An unexpected error occurred. Please try again."):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


# ============================================================================
# Validation
# ============================================================================


class ValidationFailedException(AppException):
    """Exception raised when input violates one or more validation rules."""

    def __init__(
        self,
        errors: list[str],
        message: str = "Validation failed.",
    ):
        self.errors = list(errors)
        super().__init__(
            message,
            status.HTTP_400_BAD_REQUEST,
            details={"errors": self.errors},
        )


# ============================================================================
# Authentication / authorization
# ============================================================================


class AuthenticationException(AppException):
    """Exception raised for authentication-related errors."""

    def __init__(self, message: str = "Authentication failed."):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class InvalidCredentialsException(AuthenticationException):
    """Exception raised when provided credentials are invalid."""

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)


class ForbiddenException(AppException):
    """Exception raised when access is forbidden."""

    def __init__(self, message: str = "Access forbidden."):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class AccountNotConfirmedException(ForbiddenException):
    """Exception raised when an unconfirmed account tries to log in or reset."""

    def __init__(
        self, message: str = "Account is not confirmed. Please verify your email first."
    ):
        super().__init__(message)


# ============================================================================
# Not found
# ============================================================================


class NotFoundException(AppException):
    """Exception raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found."):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class UserNotFoundException(NotFoundException):
    """Exception raised when a user is not found."""

    def __init__(self, message: str = "User not found."):
        super().__init__(message)


class PendingUserNotFoundException(NotFoundException):
    """Exception raised when no pending registration exists for an email."""

    def __init__(self, message: str = "No pending registration found for this email."):
        super().__init__(message)


class PendingUserDataNotFoundException(NotFoundException):
    """Exception raised when activation cannot find the pending registration."""

    def __init__(self, message: str = "Pending registration data not found."):
        super().__init__(message)


class OTPNotFoundException(NotFoundException):
    """Exception raised when there is no unverified OTP for an email."""

    def __init__(self, message: str = "OTP not found or already verified."):
        super().__init__(message)


# ============================================================================
# Conflict
# ============================================================================


class ConflictException(AppException):
    """Exception raised when there's a conflict with existing resources."""

    def __init__(self, message: str = "Resource conflict."):
        super().__init__(message, status.HTTP_409_CONFLICT)


class EmailAlreadyRegisteredException(ConflictException):
    """Exception raised when an account already exists for an email."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


# ============================================================================
# Expired
# ============================================================================


class ExpiredException(AppException):
    """Exception raised when a time-boxed record is past its expiry."""

    def __init__(self, message: str = "The request has expired."):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class RegistrationExpiredException(ExpiredException):
    """Exception raised when a pending registration has expired."""

    def __init__(self, message: str = "Registration has expired. Please register again."):
        super().__init__(message)


class OTPExpiredException(ExpiredException):
    """Exception raised when OTP has expired."""

    def __init__(self, message: str = "OTP has expired. Please request a new one."):
        super().__init__(message)


class ResetTokenExpiredException(ExpiredException):
    """Exception raised when a password reset token has expired."""

    def __init__(self, message: str = "Password reset token has expired"):
        super().__init__(message)


# ============================================================================
# Invalid / attempts
# ============================================================================


class InvalidException(AppException):
    """Exception raised when a submitted code or token does not match."""

    def __init__(self, message: str = "Invalid request."):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class OTPInvalidException(InvalidException):
    """Exception raised when OTP is invalid."""

    def __init__(
        self,
        remaining_attempts: int | None = None,
        message: str | None = None,
    ):
        self.remaining_attempts = remaining_attempts
        if message is None:
            message = (
                f"Invalid OTP code. Remaining attempts: {remaining_attempts}"
                if remaining_attempts is not None
                else "Invalid OTP code."
            )
        super().__init__(message)


class InvalidResetTokenException(InvalidException):
    """Exception raised when a reset token is unknown or already used."""

    def __init__(self, message: str = "Invalid or already used password reset token"):
        super().__init__(message)


class TooManyAttemptsException(AppException):
    """Exception raised when too many OTP verification attempts."""

    def __init__(
        self,
        message: str = "Maximum verification attempts reached. Please request a new OTP.",
    ):
        super().__init__(message, status.HTTP_429_TOO_MANY_REQUESTS)


# ============================================================================
# Dependency failure
# ============================================================================


class DependencyFailureException(AppException):
    """Exception raised when an external collaborator (e.g. email) fails."""

    def __init__(self, message: str = "An external service failed."):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


class EmailDeliveryException(DependencyFailureException):
    """Exception raised when an email could not be sent."""

    def __init__(self, message: str = "Failed to send OTP email. Please try again."):
        super().__init__(message)


__all__ = [
    "AppException",
    "DatabaseException",
    "UnexpectedException",
    "ValidationFailedException",
    "AuthenticationException",
    "InvalidCredentialsException",
    "ForbiddenException",
    "AccountNotConfirmedException",
    "NotFoundException",
    "UserNotFoundException",
    "PendingUserNotFoundException",
    "PendingUserDataNotFoundException",
    "OTPNotFoundException",
    "ConflictException",
    "EmailAlreadyRegisteredException",
    "ExpiredException",
    "RegistrationExpiredException",
    "OTPExpiredException",
    "ResetTokenExpiredException",
    "InvalidException",
    "OTPInvalidException",
    "InvalidResetTokenException",
    "TooManyAttemptsException",
    "DependencyFailureException",
    "EmailDeliveryException",
]
