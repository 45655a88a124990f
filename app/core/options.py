"""
Typed option groups handed to the identity components at construction time.

Components never read ``settings`` directly; the module-level default
instances build their options once with ``XxxOptions.from_settings(settings)``
and tests build them by hand.
"""

from dataclasses import dataclass

from app.core.config import Settings


@dataclass(frozen=True)
class PasswordHashingOptions:
    salt_size: int = 16
    hash_size: int = 32
    iterations: int = 10000
    algorithm: str = "sha256"

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHashingOptions":
        return cls(
            salt_size=settings.PASSWORD_SALT_SIZE,
            hash_size=settings.PASSWORD_HASH_SIZE,
            iterations=settings.PASSWORD_ITERATIONS,
            algorithm=settings.PASSWORD_HASH_ALGORITHM,
        )


@dataclass(frozen=True)
class JwtOptions:
    secret_key: str
    issuer: str
    audience: str
    expiration_minutes: int = 60
    algorithm: str = "HS256"

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtOptions":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            expiration_minutes=settings.JWT_EXPIRATION_MINUTES,
            algorithm=settings.JWT_ALGORITHM,
        )


@dataclass(frozen=True)
class OtpOptions:
    length: int = 6
    expiration_minutes: int = 10
    max_attempts: int = 5

    @classmethod
    def from_settings(cls, settings: Settings) -> "OtpOptions":
        return cls(
            length=settings.OTP_LENGTH,
            expiration_minutes=settings.OTP_EXPIRY_MINUTES,
            max_attempts=settings.OTP_MAX_ATTEMPTS,
        )


@dataclass(frozen=True)
class PasswordResetOptions:
    token_length: int = 6
    expiration_minutes: int = 15

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordResetOptions":
        return cls(
            token_length=settings.PASSWORD_RESET_TOKEN_LENGTH,
            expiration_minutes=settings.PASSWORD_RESET_EXPIRY_MINUTES,
        )


@dataclass(frozen=True)
class ValidationOptions:
    username_min_length: int = 10
    username_max_length: int = 50
    password_min_length: int = 8
    password_max_length: int = 16
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True
    require_special: bool = True
    special_characters_pattern: str = r"[^A-Za-z0-9\s]"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValidationOptions":
        return cls(
            username_min_length=settings.USERNAME_MIN_LENGTH,
            username_max_length=settings.USERNAME_MAX_LENGTH,
            password_min_length=settings.PASSWORD_MIN_LENGTH,
            password_max_length=settings.PASSWORD_MAX_LENGTH,
            require_uppercase=settings.PASSWORD_REQUIRE_UPPERCASE,
            require_lowercase=settings.PASSWORD_REQUIRE_LOWERCASE,
            require_digit=settings.PASSWORD_REQUIRE_DIGIT,
            require_special=settings.PASSWORD_REQUIRE_SPECIAL,
            special_characters_pattern=settings.PASSWORD_SPECIAL_CHARACTERS_PATTERN,
        )


@dataclass(frozen=True)
class RegistrationOptions:
    pending_expiration_minutes: int = 30
    otp_expiration_minutes: int = 10

    @classmethod
    def from_settings(cls, settings: Settings) -> "RegistrationOptions":
        return cls(
            pending_expiration_minutes=settings.PENDING_USER_EXPIRATION_MINUTES,
            otp_expiration_minutes=settings.OTP_EXPIRY_MINUTES,
        )


__all__ = [
    "JwtOptions",
    "OtpOptions",
    "PasswordHashingOptions",
    "PasswordResetOptions",
    "RegistrationOptions",
    "ValidationOptions",
]
