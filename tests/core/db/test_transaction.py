"""
Test suite for run_in_transaction.

Run all tests:
    pytest tests/core/db/test_transaction.py -v
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.db.transaction import is_transient_error, run_in_transaction
from app.core.exceptions.types import (
    DatabaseException,
    NotFoundException,
    UnexpectedException,
)


def make_session():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


def operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("database is locked"))


class TestIsTransientError:

    def test_operational_error_is_transient(self):
        assert is_transient_error(operational_error()) is True

    def test_wrapped_operational_error_is_transient(self):
        wrapped = DatabaseException("boom")
        wrapped.__cause__ = operational_error()
        assert is_transient_error(wrapped) is True

    def test_integrity_error_is_not_transient(self):
        error = IntegrityError("INSERT", {}, Exception("unique"))
        assert is_transient_error(error) is False


class TestRunInTransaction:

    @pytest.mark.asyncio
    async def test_commits_and_returns_result(self):
        session = make_session()
        work = AsyncMock(return_value="done")

        result = await run_in_transaction(session, work, operation="test")

        assert result == "done"
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_commit_when_caller_owns_transaction(self):
        session = make_session()

        await run_in_transaction(
            session, AsyncMock(return_value=1), operation="test", commit_self=False
        )

        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_domain_error_rolls_back_and_propagates(self):
        session = make_session()
        work = AsyncMock(side_effect=NotFoundException("missing"))

        with pytest.raises(NotFoundException):
            await run_in_transaction(session, work, operation="test")

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_error_becomes_unexpected(self):
        session = make_session()
        work = AsyncMock(side_effect=KeyError("boom"))

        with pytest.raises(UnexpectedException) as exc_info:
            await run_in_transaction(session, work, operation="test")

        assert isinstance(exc_info.value.__cause__, KeyError)
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transient_error_is_retried(self):
        session = make_session()
        work = AsyncMock(side_effect=[operational_error(), "ok"])

        with patch("app.core.db.transaction.asyncio.sleep", new_callable=AsyncMock):
            result = await run_in_transaction(session, work, operation="test")

        assert result == "ok"
        assert work.await_count == 2
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_retries_are_bounded(self):
        session = make_session()
        work = AsyncMock(side_effect=operational_error())

        with patch("app.core.db.transaction.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(UnexpectedException):
                await run_in_transaction(
                    session, work, operation="test", max_attempts=3
                )

        assert work.await_count == 3

    @pytest.mark.asyncio
    async def test_permanent_storage_error_is_not_retried(self):
        session = make_session()
        work = AsyncMock(side_effect=DatabaseException("constraint"))

        with pytest.raises(UnexpectedException):
            await run_in_transaction(session, work, operation="test")

        assert work.await_count == 1

    @pytest.mark.asyncio
    async def test_storage_error_propagates_to_owner(self):
        session = make_session()
        work = AsyncMock(side_effect=DatabaseException("constraint"))

        with pytest.raises(DatabaseException):
            await run_in_transaction(
                session, work, operation="test", commit_self=False
            )

        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_commit_is_rolled_back(self):
        session = make_session()
        session.commit.side_effect = IntegrityError("COMMIT", {}, Exception("x"))

        with pytest.raises(UnexpectedException):
            await run_in_transaction(
                session, AsyncMock(return_value=1), operation="test"
            )

        session.rollback.assert_awaited_once()
