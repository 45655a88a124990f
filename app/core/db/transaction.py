"""
Explicit unit of work for multi-step identity operations.

Each operation hands its reads and writes to ``run_in_transaction`` as a
coroutine function. The helper commits once the work returns, rolls back
when it raises, retries transient storage failures, and turns anything that
is not a domain error into ``UnexpectedException`` after logging it.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import database_logger
from app.core.exceptions.types import (
    AppException,
    DatabaseException,
    UnexpectedException,
)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
RETRY_BACKOFF_SECONDS = 0.05


def is_transient_error(exc: BaseException) -> bool:
    """
    Tell whether a storage failure is worth retrying.

    Operational errors (lost connection, deadlock, serialization failure)
    and invalidated connections are transient. Integrity and programming
    errors are not.
    """
    cause = exc.__cause__ if isinstance(exc, DatabaseException) else exc
    if isinstance(cause, OperationalError):
        return True
    if isinstance(cause, DBAPIError) and cause.connection_invalidated:
        return True
    return False


async def _rollback(session: AsyncSession, operation: str) -> None:
    try:
        await session.rollback()
    except SQLAlchemyError as e:
        database_logger.error(f"[{operation}] Rollback failed: {str(e)}")


async def run_in_transaction(
    session: AsyncSession,
    work: Callable[[], Awaitable[T]],
    *,
    operation: str,
    commit_self: bool = True,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> T:
    """
    Run ``work`` as one unit of work on ``session``.

    Args:
        session: The session the work reads and writes through.
        work: Coroutine function performing the operation. It may commit on
            its own before raising when a failure must still persist state
            (for example a failed OTP attempt).
        operation: Name used in log lines.
        commit_self: When False the caller owns the transaction (an outer
            ``run_in_transaction`` or ``async with session.begin()``). The
            helper then neither commits, rolls back nor retries; storage
            errors propagate to the owner untouched.
        max_attempts: Total tries for transient storage failures.

    Returns:
        Whatever ``work`` returns.

    Raises:
        AppException: Domain errors raised by ``work`` are re-raised as is.
        DatabaseException: Only when ``commit_self`` is False.
        UnexpectedException: For storage failures and any other error.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            result = await work()
            if commit_self:
                await session.commit()
            return result
        except (DatabaseException, SQLAlchemyError) as e:
            if not commit_self:
                raise
            await _rollback(session, operation)
            if is_transient_error(e) and attempt < max_attempts:
                database_logger.warning(
                    f"[{operation}] Transient storage failure on attempt "
                    f"{attempt}/{max_attempts}, retrying: {str(e)}"
                )
                await asyncio.sleep(RETRY_BACKOFF_SECONDS * attempt)
                continue
            database_logger.error(f"[{operation}] Storage failure: {str(e)}")
            raise UnexpectedException() from e
        except AppException:
            if commit_self:
                await _rollback(session, operation)
            raise
        except Exception as e:
            if commit_self:
                await _rollback(session, operation)
            database_logger.error(
                f"[{operation}] Unexpected error: {type(e).__name__} - {str(e)}",
                exc_info=True,
            )
            raise UnexpectedException() from e


__all__ = ["is_transient_error", "run_in_transaction"]
