"""
Bearer token issuing and validation.

Tokens are stateless HS256 JWTs. There is no revocation store, so logging
out only means the client discards its token.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Protocol
import uuid

import jwt

from app.core.config import auth_logger, settings
from app.core.options import JwtOptions


class TokenSubject(Protocol):
    id: int
    email: str
    username: str | None


class JwtIssuer:
    """
    Signs and validates access tokens carrying account identity claims.

    Claims: ``sub`` (account id as string), ``email``, ``username`` when
    set, ``jti``, ``iat``, ``exp``, ``iss`` and ``aud``.
    """

    REQUIRED_CLAIMS = ["sub", "exp", "iat", "iss", "aud"]

    def __init__(self, options: JwtOptions):
        self.options = options

    def issue(self, account: TokenSubject, now: datetime | None = None) -> str:
        """
        Issue a signed token for an account.

        Args:
            account: Anything with ``id``, ``email`` and ``username``.
            now: Issue time. Defaults to the current UTC time.

        Returns:
            str: Encoded JWT in the form header.payload.signature.
        """
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(minutes=self.options.expiration_minutes)

        claims: dict[str, Any] = {
            "sub": str(account.id),
            "email": account.email,
            "jti": str(uuid.uuid4()),
            "iat": issued_at,
            "exp": expires_at,
            "iss": self.options.issuer,
            "aud": self.options.audience,
        }
        if account.username:
            claims["username"] = account.username

        token = jwt.encode(
            claims, self.options.secret_key, algorithm=self.options.algorithm
        )
        auth_logger.info(
            f"Access token issued: account_id={account.id}, "
            f"expires_at={expires_at.isoformat()}"
        )
        return token

    def validate(self, token: str | None) -> int | None:
        """
        Validate a token and extract the account id.

        Signature, issuer, audience and expiry are checked in one pass with
        no clock-skew leeway.

        Args:
            token: The encoded token. May be None or empty.

        Returns:
            int | None: The account id, or None for any invalid, expired,
                tampered or malformed token.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.options.secret_key,
                algorithms=[self.options.algorithm],
                audience=self.options.audience,
                issuer=self.options.issuer,
                leeway=0,
                options={"require": self.REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            auth_logger.warning("Token validation failed: token has expired")
            return None
        except jwt.PyJWTError as e:
            auth_logger.warning(
                f"Token validation failed: invalid token - {type(e).__name__}"
            )
            return None

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            auth_logger.warning("Token validation failed: non-integer subject")
            return None


# Global service instance
jwt_issuer = JwtIssuer(JwtOptions.from_settings(settings))


__all__ = ["JwtIssuer", "TokenSubject", "jwt_issuer"]
