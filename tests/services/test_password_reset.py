"""
Test suite for PasswordResetEngine.

Run all tests:
    pytest tests/services/test_password_reset.py -v
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from app.core.db.crud import password_reset_challenge_db
from app.core.db.models import PasswordResetChallenge
from app.core.exceptions.types import (
    AccountNotConfirmedException,
    InvalidResetTokenException,
    ResetTokenExpiredException,
    UserNotFoundException,
)
from app.core.options import PasswordResetOptions
from app.core.services.password_reset import PasswordResetEngine
from app.core.utils import utc_now

EMAIL = "testuser@example.com"


@pytest.fixture
def reset_engine() -> PasswordResetEngine:
    return PasswordResetEngine(PasswordResetOptions(token_length=6, expiration_minutes=15))


async def count_challenges(session) -> int:
    return await session.scalar(
        select(func.count()).select_from(PasswordResetChallenge)
    )


class TestGenerateResetToken:

    @pytest.mark.asyncio
    async def test_unknown_email(self, db_session, reset_engine):
        with pytest.raises(UserNotFoundException):
            await reset_engine.generate_reset_token(db_session, "nobody@example.com")

    @pytest.mark.asyncio
    async def test_unconfirmed_account(self, db_session, reset_engine, make_account):
        await make_account(email=EMAIL, confirmed=False)

        with pytest.raises(AccountNotConfirmedException):
            await reset_engine.generate_reset_token(db_session, EMAIL)

    @pytest.mark.asyncio
    async def test_issues_code(self, db_session, reset_engine, test_account):
        token = await reset_engine.generate_reset_token(db_session, EMAIL)

        assert len(token) == 6 and token.isdigit()
        challenge = await password_reset_challenge_db.get_unused_by_email(
            db_session, EMAIL
        )
        assert challenge.token == token
        assert challenge.used is False

    @pytest.mark.asyncio
    async def test_new_code_replaces_old(self, db_session, reset_engine, test_account):
        await reset_engine.generate_reset_token(db_session, EMAIL)
        latest = await reset_engine.generate_reset_token(db_session, EMAIL)

        assert await count_challenges(db_session) == 1
        challenge = await password_reset_challenge_db.get_unused_by_email(
            db_session, EMAIL
        )
        assert challenge.token == latest


class TestVerifyResetToken:

    @pytest.mark.asyncio
    async def test_correct_code_is_consumed(
        self, db_session, reset_engine, test_account
    ):
        token = await reset_engine.generate_reset_token(db_session, EMAIL)

        challenge = await reset_engine.verify_reset_token(db_session, EMAIL, token)

        assert challenge.used is True
        with pytest.raises(InvalidResetTokenException):
            await reset_engine.verify_reset_token(db_session, EMAIL, token)

    @pytest.mark.asyncio
    async def test_wrong_code(self, db_session, reset_engine, test_account):
        token = await reset_engine.generate_reset_token(db_session, EMAIL)
        other = "000000" if token != "000000" else "111111"

        with pytest.raises(InvalidResetTokenException):
            await reset_engine.verify_reset_token(db_session, EMAIL, other)

    @pytest.mark.asyncio
    async def test_no_challenge(self, db_session, reset_engine, test_account):
        with pytest.raises(InvalidResetTokenException):
            await reset_engine.verify_reset_token(db_session, EMAIL, "123456")

    @pytest.mark.asyncio
    async def test_expired_code(self, db_session, reset_engine, test_account):
        token = await reset_engine.generate_reset_token(db_session, EMAIL)
        challenge = await password_reset_challenge_db.get_unused_by_email(
            db_session, EMAIL
        )
        challenge.expires_at = utc_now() - timedelta(minutes=1)
        await db_session.commit()

        with pytest.raises(ResetTokenExpiredException):
            await reset_engine.verify_reset_token(db_session, EMAIL, token)


class TestCleanup:

    @pytest.mark.asyncio
    async def test_removes_used_codes(self, db_session, reset_engine, test_account):
        token = await reset_engine.generate_reset_token(db_session, EMAIL)
        await reset_engine.verify_reset_token(db_session, EMAIL, token)

        deleted = await reset_engine.cleanup_expired_tokens(db_session, EMAIL)

        assert deleted == 1
        assert await count_challenges(db_session) == 0

    @pytest.mark.asyncio
    async def test_keeps_live_codes(self, db_session, reset_engine, test_account):
        await reset_engine.generate_reset_token(db_session, EMAIL)

        deleted = await reset_engine.cleanup_expired_tokens(db_session, EMAIL)

        assert deleted == 0
        assert await count_challenges(db_session) == 1
