from app.core.services.base import SingletonService
from app.core.services.brevo import BrevoService
from app.core.services.email_manager import EmailManagerService
from app.core.services.otp import OtpEngine, otp_engine
from app.core.services.password_hasher import PasswordHasher, password_hasher
from app.core.services.password_reset import PasswordResetEngine, password_reset_engine
from app.core.services.registration import (
    EmailGateway,
    LoginResult,
    RegistrationResult,
    RegistrationService,
    UserProfile,
    registration_service,
)
from app.core.services.template import Renderer
from app.core.services.tokens import JwtIssuer, jwt_issuer
from app.core.services.validation import RegistrationValidator, registration_validator

__all__ = [
    # Core services
    "SingletonService",
    "BrevoService",
    "EmailManagerService",
    "Renderer",
    # Identity
    "PasswordHasher",
    "password_hasher",
    "JwtIssuer",
    "jwt_issuer",
    "OtpEngine",
    "otp_engine",
    "PasswordResetEngine",
    "password_reset_engine",
    "RegistrationValidator",
    "registration_validator",
    # Orchestration
    "EmailGateway",
    "LoginResult",
    "RegistrationResult",
    "RegistrationService",
    "UserProfile",
    "registration_service",
]
