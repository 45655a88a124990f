"""
Shared dependencies for FastAPI endpoints.

"""

from app.core.dependencies.auth import (
    get_current_user,
    CurrentUser,
    bearer_scheme,
)
from app.core.dependencies.db import get_async_session, DBSession

__all__ = [
    "get_current_user",
    "CurrentUser",
    "bearer_scheme",
    "get_async_session",
    "DBSession",
]
