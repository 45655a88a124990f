"""
Test suite for OtpEngine.

- Issuing codes for live pending registrations
- Resend invalidating the previous code
- Verification outcomes and attempt counting

Run all tests:
    pytest tests/services/test_otp.py -v

Run with coverage:
    pytest tests/services/test_otp.py --cov=app.core.services.otp --cov-report=term-missing -v
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from app.core.db.crud import otp_challenge_db
from app.core.db.models import OTPChallenge
from app.core.exceptions.types import (
    OTPExpiredException,
    OTPInvalidException,
    OTPNotFoundException,
    PendingUserNotFoundException,
    RegistrationExpiredException,
    TooManyAttemptsException,
)
from app.core.options import OtpOptions
from app.core.services.otp import OtpEngine
from app.core.utils import utc_now

EMAIL = "a@x.com"


@pytest.fixture
def engine_under_test() -> OtpEngine:
    return OtpEngine(OtpOptions(length=6, expiration_minutes=10, max_attempts=3))


def wrong(code: str) -> str:
    return "0" * len(code) if code != "0" * len(code) else "1" * len(code)


class TestGenerate:

    @pytest.mark.asyncio
    async def test_requires_pending_registration(self, db_session, engine_under_test):
        with pytest.raises(PendingUserNotFoundException):
            await engine_under_test.generate_and_save(db_session, EMAIL)

    @pytest.mark.asyncio
    async def test_rejects_expired_pending_registration(
        self, db_session, engine_under_test, make_pending
    ):
        await make_pending(EMAIL, expires_in_minutes=-1)

        with pytest.raises(RegistrationExpiredException):
            await engine_under_test.generate_and_save(db_session, EMAIL)

    @pytest.mark.asyncio
    async def test_issues_numeric_code(
        self, db_session, engine_under_test, make_pending
    ):
        await make_pending(EMAIL)

        code = await engine_under_test.generate_and_save(db_session, EMAIL)

        assert len(code) == 6 and code.isdigit()
        challenge = await otp_challenge_db.get_unverified_by_email(db_session, EMAIL)
        assert challenge.code == code
        assert challenge.attempts == 0
        assert challenge.max_attempts == 3
        assert challenge.verified is False

    @pytest.mark.asyncio
    async def test_custom_length(self, db_session, make_pending):
        await make_pending(EMAIL)
        engine = OtpEngine(OtpOptions(length=8))

        code = await engine.generate_and_save(db_session, EMAIL)

        assert len(code) == 8


class TestResend:

    @pytest.mark.asyncio
    async def test_resend_replaces_previous_code(
        self, db_session, engine_under_test, make_pending
    ):
        await make_pending(EMAIL)
        first = await engine_under_test.generate_and_save(db_session, EMAIL)

        second = await engine_under_test.resend(db_session, EMAIL)

        count = await db_session.scalar(
            select(func.count()).select_from(OTPChallenge)
        )
        assert count == 1
        challenge = await otp_challenge_db.get_unverified_by_email(db_session, EMAIL)
        assert challenge.code == second
        if first != second:
            with pytest.raises(OTPInvalidException):
                await engine_under_test.verify(db_session, EMAIL, first)

    @pytest.mark.asyncio
    async def test_resend_without_pending(self, db_session, engine_under_test):
        with pytest.raises(PendingUserNotFoundException):
            await engine_under_test.resend(db_session, EMAIL)


class TestVerify:

    @pytest.mark.asyncio
    async def test_correct_code(self, db_session, engine_under_test, make_pending):
        await make_pending(EMAIL)
        code = await engine_under_test.generate_and_save(db_session, EMAIL)

        challenge = await engine_under_test.verify(db_session, EMAIL, code)

        assert challenge.verified is True

    @pytest.mark.asyncio
    async def test_code_cannot_be_verified_twice(
        self, db_session, engine_under_test, make_pending
    ):
        await make_pending(EMAIL)
        code = await engine_under_test.generate_and_save(db_session, EMAIL)
        await engine_under_test.verify(db_session, EMAIL, code)

        with pytest.raises(OTPNotFoundException):
            await engine_under_test.verify(db_session, EMAIL, code)

    @pytest.mark.asyncio
    async def test_no_challenge(self, db_session, engine_under_test, make_pending):
        await make_pending(EMAIL)

        with pytest.raises(OTPNotFoundException):
            await engine_under_test.verify(db_session, EMAIL, "123456")

    @pytest.mark.asyncio
    async def test_wrong_code_is_counted_and_persisted(
        self, db_session, session_factory, engine_under_test, make_pending
    ):
        await make_pending(EMAIL)
        code = await engine_under_test.generate_and_save(db_session, EMAIL)

        with pytest.raises(OTPInvalidException) as exc_info:
            await engine_under_test.verify(db_session, EMAIL, wrong(code))

        assert exc_info.value.remaining_attempts == 2
        assert "Remaining attempts: 2" in exc_info.value.message
        async with session_factory() as fresh:
            stored = await otp_challenge_db.get_unverified_by_email(fresh, EMAIL)
            assert stored.attempts == 1

    @pytest.mark.asyncio
    async def test_attempt_cap(
        self, db_session, session_factory, engine_under_test, make_pending
    ):
        await make_pending(EMAIL)
        code = await engine_under_test.generate_and_save(db_session, EMAIL)

        remaining = []
        for _ in range(3):
            with pytest.raises(OTPInvalidException) as exc_info:
                await engine_under_test.verify(db_session, EMAIL, wrong(code))
            remaining.append(exc_info.value.remaining_attempts)

        assert remaining == [2, 1, 0]
        for candidate in (code, wrong(code), code):
            with pytest.raises(TooManyAttemptsException):
                await engine_under_test.verify(db_session, EMAIL, candidate)

        async with session_factory() as fresh:
            stored = await otp_challenge_db.get_unverified_by_email(fresh, EMAIL)
            assert stored.attempts == stored.max_attempts == 3
            assert stored.verified is False

    @pytest.mark.asyncio
    async def test_expired_code(self, db_session, engine_under_test, make_pending):
        await make_pending(EMAIL)
        code = await engine_under_test.generate_and_save(db_session, EMAIL)
        challenge = await otp_challenge_db.get_unverified_by_email(db_session, EMAIL)
        challenge.expires_at = utc_now() - timedelta(seconds=1)
        await db_session.commit()

        with pytest.raises(OTPExpiredException):
            await engine_under_test.verify(db_session, EMAIL, code)

    @pytest.mark.asyncio
    async def test_missing_code_counts_as_wrong(
        self, db_session, engine_under_test, make_pending
    ):
        await make_pending(EMAIL)
        await engine_under_test.generate_and_save(db_session, EMAIL)

        with pytest.raises(OTPInvalidException):
            await engine_under_test.verify(db_session, EMAIL, "")
