"""
Test suite for RegistrationValidator.

Run all tests:
    pytest tests/services/test_validation.py -v
"""

import pytest

from app.core.exceptions.types import ValidationFailedException
from app.core.options import ValidationOptions
from app.core.services.validation import RegistrationValidator, ValidationMessages


@pytest.fixture
def validator() -> RegistrationValidator:
    return RegistrationValidator(ValidationOptions())


class TestPasswordRules:

    def test_valid_password(self, validator):
        assert validator.password_errors("P@ssw0rd1") == []

    def test_missing_password(self, validator):
        assert validator.password_errors("") == [ValidationMessages.PASSWORD_REQUIRED]

    def test_short_password_reports_every_rule(self, validator):
        errors = validator.password_errors("abc")

        assert ValidationMessages.minimum_length("password", 8) in errors
        assert ValidationMessages.PASSWORD_REQUIRE_UPPERCASE in errors
        assert ValidationMessages.PASSWORD_REQUIRE_DIGIT in errors
        assert ValidationMessages.PASSWORD_REQUIRE_SPECIAL in errors
        assert ValidationMessages.PASSWORD_REQUIRE_LOWERCASE not in errors

    def test_too_long_password(self, validator):
        errors = validator.password_errors("P@ssw0rd1" * 2)
        assert errors == [ValidationMessages.maximum_length("password", 16)]

    def test_whitespace_is_not_special(self, validator):
        errors = validator.password_errors("Passw0rd 1")
        assert ValidationMessages.PASSWORD_REQUIRE_SPECIAL in errors

    def test_rules_can_be_disabled(self):
        validator = RegistrationValidator(
            ValidationOptions(
                require_uppercase=False,
                require_digit=False,
                require_special=False,
            )
        )
        assert validator.password_errors("lowercaseonly") == []

    def test_custom_special_pattern(self):
        validator = RegistrationValidator(
            ValidationOptions(special_characters_pattern=r"[#]")
        )
        errors = validator.password_errors("P@ssw0rd1")
        assert ValidationMessages.PASSWORD_REQUIRE_SPECIAL in errors


class TestUsernameAndEmail:

    def test_valid_username(self, validator):
        assert validator.username_errors("alice123456") == []

    def test_short_username(self, validator):
        assert validator.username_errors("alice") == [
            ValidationMessages.minimum_length("username", 10)
        ]

    def test_long_username(self, validator):
        assert validator.username_errors("a" * 51) == [
            ValidationMessages.maximum_length("username", 50)
        ]

    def test_blank_username(self, validator):
        assert validator.username_errors("   ") == [
            ValidationMessages.USERNAME_REQUIRED
        ]

    def test_valid_email(self, validator):
        assert validator.email_errors("a@example.com") == []

    def test_invalid_email(self, validator):
        assert validator.email_errors("not-an-email") == [
            ValidationMessages.EMAIL_INVALID
        ]

    def test_missing_email(self, validator):
        assert validator.email_errors(None) == [ValidationMessages.EMAIL_REQUIRED]


class TestValidateRegistration:

    def test_valid_registration_passes(self, validator):
        validator.validate_registration("a@example.com", "alice123456", "P@ssw0rd1")

    def test_collects_all_errors(self, validator):
        with pytest.raises(ValidationFailedException) as exc_info:
            validator.validate_registration("bad", "short", "weak", "other")

        errors = exc_info.value.errors
        assert ValidationMessages.EMAIL_INVALID in errors
        assert ValidationMessages.minimum_length("username", 10) in errors
        assert ValidationMessages.minimum_length("password", 8) in errors
        assert ValidationMessages.PASSWORDS_DO_NOT_MATCH in errors
        assert exc_info.value.status_code == 400

    def test_confirmation_skipped_when_absent(self, validator):
        validator.validate_registration(
            "a@example.com", "alice123456", "P@ssw0rd1", None
        )

    def test_mismatched_confirmation(self, validator):
        with pytest.raises(ValidationFailedException) as exc_info:
            validator.validate_registration(
                "a@example.com", "alice123456", "P@ssw0rd1", "P@ssw0rd2"
            )
        assert exc_info.value.errors == [ValidationMessages.PASSWORDS_DO_NOT_MATCH]


class TestValidatePasswordReset:

    def test_valid_reset_passes(self, validator):
        validator.validate_password_reset(
            "a@example.com", "123456", "N3w@Passw", "N3w@Passw"
        )

    def test_missing_code_and_mismatch(self, validator):
        with pytest.raises(ValidationFailedException) as exc_info:
            validator.validate_password_reset("a@example.com", " ", "N3w@Passw", "x")

        assert ValidationMessages.OTP_CODE_REQUIRED in exc_info.value.errors
        assert ValidationMessages.PASSWORDS_DO_NOT_MATCH in exc_info.value.errors

    def test_confirmation_is_required(self, validator):
        with pytest.raises(ValidationFailedException) as exc_info:
            validator.validate_password_reset(
                "a@example.com", "123456", "N3w@Passw", None
            )
        assert exc_info.value.errors == [ValidationMessages.PASSWORDS_DO_NOT_MATCH]
