from app.core.db.crud.base import BaseDB
from app.core.db.crud.account import AccountDB, PendingRegistrationDB
from app.core.db.crud.otp import OTPChallengeDB
from app.core.db.crud.password_reset import PasswordResetChallengeDB

# Global CRUD instances - use these instead of creating new instances
account_db = AccountDB()
pending_registration_db = PendingRegistrationDB()
otp_challenge_db = OTPChallengeDB()
password_reset_challenge_db = PasswordResetChallengeDB()

__all__ = [
    # Classes (for type hints and subclassing)
    "AccountDB",
    "BaseDB",
    "OTPChallengeDB",
    "PasswordResetChallengeDB",
    "PendingRegistrationDB",
    # Global instances (for actual usage)
    "account_db",
    "otp_challenge_db",
    "password_reset_challenge_db",
    "pending_registration_db",
]
