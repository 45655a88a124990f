from app.core.db.models.account import Account
from app.core.db.models.otp import OTPChallenge
from app.core.db.models.password_reset import PasswordResetChallenge
from app.core.db.models.pending_registration import PendingRegistration

__all__ = [
    "Account",
    "OTPChallenge",
    "PasswordResetChallenge",
    "PendingRegistration",
]
