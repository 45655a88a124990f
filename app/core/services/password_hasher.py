"""
Password hashing with salted PBKDF2.

Stored format is ``base64(salt || derived_key)`` where the salt and key
lengths come from ``PasswordHashingOptions``. Changing those sizes makes
existing hashes unverifiable, so they are fixed per deployment.

Example usage:
    from app.core.services.password_hasher import password_hasher

    stored = password_hasher.hash("P@ssw0rd1")
    password_hasher.verify("P@ssw0rd1", stored)  # True
"""

import base64
import binascii
import hmac
import secrets

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from app.core.config import auth_logger, settings
from app.core.options import PasswordHashingOptions


class PasswordHasher:
    """
    Salted iterative password hasher with constant-time verification.

    Attributes:
        options: Salt size, derived key size, iteration count and digest.
    """

    def __init__(self, options: PasswordHashingOptions | None = None):
        self.options = options or PasswordHashingOptions()
        self._digest = self._resolve_digest(self.options.algorithm)

    @staticmethod
    def _resolve_digest(algorithm: str) -> type[hashes.HashAlgorithm]:
        """Map a digest name such as ``"sha256"`` to its cryptography class."""
        digest = getattr(hashes, algorithm.replace("-", "").upper(), None)
        if not (isinstance(digest, type) and issubclass(digest, hashes.HashAlgorithm)):
            raise ValueError(f"Unsupported password hash algorithm: {algorithm}")
        return digest

    def _derive(self, password: str, salt: bytes) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=self._digest(),
            length=self.options.hash_size,
            salt=salt,
            iterations=self.options.iterations,
        )
        return kdf.derive(password.encode("utf-8"))

    def hash(self, password: str) -> str:
        """
        Hash a password with a freshly drawn random salt.

        Args:
            password: The plain text password to hash.

        Returns:
            str: Base64 of salt followed by the derived key. Two calls with
                the same password return different values.

        Example:
            >>> hasher = PasswordHasher()
            >>> hasher.hash("secret") != hasher.hash("secret")
            True
        """
        salt = secrets.token_bytes(self.options.salt_size)
        derived = self._derive(password, salt)
        return base64.b64encode(salt + derived).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Verify a password against a stored hash.

        Args:
            password: The plain text password to verify.
            hashed: A value previously returned by ``hash``.

        Returns:
            bool: True if the password matches. Malformed or undecodable
                hashes return False instead of raising.
        """
        if not password or not hashed:
            return False

        try:
            decoded = base64.b64decode(hashed.encode("ascii"), validate=True)
        except (binascii.Error, ValueError, UnicodeEncodeError):
            auth_logger.warning("Password verification failed: undecodable hash")
            return False

        expected_length = self.options.salt_size + self.options.hash_size
        if len(decoded) != expected_length:
            auth_logger.warning(
                f"Password verification failed: hash has {len(decoded)} bytes, "
                f"expected {expected_length}"
            )
            return False

        salt = decoded[: self.options.salt_size]
        stored_key = decoded[self.options.salt_size :]
        candidate = self._derive(password, salt)
        return hmac.compare_digest(candidate, stored_key)


# Global service instance
password_hasher = PasswordHasher(PasswordHashingOptions.from_settings(settings))


__all__ = ["PasswordHasher", "password_hasher"]
