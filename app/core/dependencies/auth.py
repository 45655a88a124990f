"""
Authentication dependencies for FastAPI endpoints.

- Extracting and validating JWT bearer tokens from requests
- Getting the current authenticated account

Example usage:
    from app.core.dependencies.auth import CurrentUser

    @router.get("/rooms")
    async def list_rooms(user: CurrentUser):
        ...
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import auth_logger
from app.core.db.crud import account_db
from app.core.db.models import Account
from app.core.dependencies.db import DBSession
from app.core.exceptions.types import AuthenticationException
from app.core.services.tokens import jwt_issuer

# auto_error=True returns 401/403 when no Authorization header is sent
bearer_scheme = HTTPBearer(auto_error=True)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    session: DBSession,
) -> Account:
    """
    Resolve the bearer token to a confirmed account.

    This dependency:
    1. Validates the token signature, expiry, issuer and audience
    2. Reads the account id from the ``sub`` claim
    3. Fetches the account from the database

    Raises:
        AuthenticationException: 401 if the token is invalid or expired, or
            the account no longer exists.
    """
    account_id = jwt_issuer.validate(credentials.credentials)
    if account_id is None:
        auth_logger.warning("Authentication failed: invalid or expired token")
        raise AuthenticationException("Invalid or expired access token")

    # Read inside a transaction so no implicit one is left open
    async with session.begin():
        account = await account_db.get_by_id(session=session, id=account_id)

    if account is None:
        auth_logger.warning(f"Authentication failed: account not found {account_id}")
        raise AuthenticationException("User not found")

    return account


CurrentUser = Annotated[Account, Depends(get_current_user)]


__all__ = ["get_current_user", "CurrentUser", "bearer_scheme"]
