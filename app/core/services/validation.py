"""
Configurable input rules for registration and password reset.

Every rule is checked and every violation is reported together in one
``ValidationFailedException`` so clients can show all problems at once.
"""

import re

from pydantic import validate_email

from app.core.config import auth_logger, settings
from app.core.exceptions.types import ValidationFailedException
from app.core.options import ValidationOptions


class ValidationMessages:
    EMAIL_REQUIRED = "Email is required."
    EMAIL_INVALID = "Invalid email format."
    USERNAME_REQUIRED = "Username is required."
    PASSWORD_REQUIRED = "Password is required."
    OTP_CODE_REQUIRED = "OTP code is required."
    PASSWORDS_DO_NOT_MATCH = "Passwords do not match"
    PASSWORD_REQUIRE_UPPERCASE = (
        "Your password must contain at least one uppercase letter."
    )
    PASSWORD_REQUIRE_LOWERCASE = (
        "Your password must contain at least one lowercase letter."
    )
    PASSWORD_REQUIRE_DIGIT = "Your password must contain at least one number."
    PASSWORD_REQUIRE_SPECIAL = (
        "Your password must contain at least one special character."
    )

    @staticmethod
    def minimum_length(field: str, length: int) -> str:
        return f"Your {field} length must be at least {length}."

    @staticmethod
    def maximum_length(field: str, length: int) -> str:
        return f"Your {field} length must not exceed {length}."


class RegistrationValidator:
    """
    Applies the email, username and password rules from ``ValidationOptions``.

    Example:
        >>> validator = RegistrationValidator()
        >>> validator.password_errors("short")
        ['Your password length must be at least 8.', ...]
    """

    def __init__(self, options: ValidationOptions | None = None):
        self.options = options or ValidationOptions()
        self._special = re.compile(self.options.special_characters_pattern)

    def email_errors(self, email: str | None) -> list[str]:
        if not email or not email.strip():
            return [ValidationMessages.EMAIL_REQUIRED]
        try:
            validate_email(email.strip())
        except ValueError:
            return [ValidationMessages.EMAIL_INVALID]
        return []

    def username_errors(self, username: str | None) -> list[str]:
        if not username or not username.strip():
            return [ValidationMessages.USERNAME_REQUIRED]

        errors: list[str] = []
        if len(username) < self.options.username_min_length:
            errors.append(
                ValidationMessages.minimum_length(
                    "username", self.options.username_min_length
                )
            )
        if len(username) > self.options.username_max_length:
            errors.append(
                ValidationMessages.maximum_length(
                    "username", self.options.username_max_length
                )
            )
        return errors

    def password_errors(self, password: str | None) -> list[str]:
        if not password:
            return [ValidationMessages.PASSWORD_REQUIRED]

        errors: list[str] = []
        if len(password) < self.options.password_min_length:
            errors.append(
                ValidationMessages.minimum_length(
                    "password", self.options.password_min_length
                )
            )
        if len(password) > self.options.password_max_length:
            errors.append(
                ValidationMessages.maximum_length(
                    "password", self.options.password_max_length
                )
            )
        if self.options.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append(ValidationMessages.PASSWORD_REQUIRE_UPPERCASE)
        if self.options.require_lowercase and not re.search(r"[a-z]", password):
            errors.append(ValidationMessages.PASSWORD_REQUIRE_LOWERCASE)
        if self.options.require_digit and not re.search(r"[0-9]", password):
            errors.append(ValidationMessages.PASSWORD_REQUIRE_DIGIT)
        if self.options.require_special and not self._special.search(password):
            errors.append(ValidationMessages.PASSWORD_REQUIRE_SPECIAL)
        return errors

    @staticmethod
    def confirmation_errors(password: str | None, confirm: str | None) -> list[str]:
        if confirm is not None and confirm != password:
            return [ValidationMessages.PASSWORDS_DO_NOT_MATCH]
        return []

    def validate_registration(
        self,
        email: str | None,
        username: str | None,
        password: str | None,
        password_confirm: str | None = None,
    ) -> None:
        """
        Check a sign-up request.

        Args:
            email: Email address to register.
            username: Requested username.
            password: Requested password.
            password_confirm: Confirmation; skipped when None.

        Raises:
            ValidationFailedException: With every violated rule.
        """
        errors = [
            *self.email_errors(email),
            *self.username_errors(username),
            *self.password_errors(password),
            *self.confirmation_errors(password, password_confirm),
        ]
        self._raise_if_any(errors, "registration")

    def validate_password_reset(
        self,
        email: str | None,
        otp_code: str | None,
        password: str | None,
        password_confirm: str | None,
    ) -> None:
        """
        Check a password reset request before any storage is touched.

        Raises:
            ValidationFailedException: With every violated rule.
        """
        errors = [*self.email_errors(email)]
        if not otp_code or not otp_code.strip():
            errors.append(ValidationMessages.OTP_CODE_REQUIRED)
        errors.extend(self.password_errors(password))
        if password_confirm != password:
            errors.append(ValidationMessages.PASSWORDS_DO_NOT_MATCH)
        self._raise_if_any(errors, "password reset")

    @staticmethod
    def _raise_if_any(errors: list[str], context: str) -> None:
        if errors:
            auth_logger.info(f"Rejected {context} input: {len(errors)} rule(s) violated")
            raise ValidationFailedException(errors)


# Global service instance
registration_validator = RegistrationValidator(ValidationOptions.from_settings(settings))


__all__ = [
    "RegistrationValidator",
    "ValidationMessages",
    "registration_validator",
]
