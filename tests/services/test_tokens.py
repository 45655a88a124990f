"""
Test suite for JwtIssuer.

- Token issuing and claims
- Validation of signature, expiry, issuer and audience

Run all tests:
    pytest tests/services/test_tokens.py -v
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from app.core.options import JwtOptions
from app.core.services.tokens import JwtIssuer

SECRET = "test-secret-key-with-enough-length-123"


@pytest.fixture
def options() -> JwtOptions:
    return JwtOptions(
        secret_key=SECRET,
        issuer="dormspace-test",
        audience="dormspace-test-clients",
        expiration_minutes=30,
    )


@pytest.fixture
def issuer(options) -> JwtIssuer:
    return JwtIssuer(options)


@pytest.fixture
def account():
    return SimpleNamespace(id=42, email="a@x.com", username="alice123456")


class TestIssue:

    def test_token_has_three_segments(self, issuer, account):
        assert issuer.issue(account).count(".") == 2

    def test_claims(self, issuer, account, options):
        token = issuer.issue(account)
        payload = jwt.decode(
            token,
            SECRET,
            algorithms=["HS256"],
            audience=options.audience,
            issuer=options.issuer,
        )

        assert payload["sub"] == "42"
        assert payload["email"] == "a@x.com"
        assert payload["username"] == "alice123456"
        assert payload["iss"] == "dormspace-test"
        assert payload["aud"] == "dormspace-test-clients"
        assert "jti" in payload
        assert payload["exp"] - payload["iat"] == 30 * 60

    def test_username_omitted_when_empty(self, issuer, options):
        token = issuer.issue(SimpleNamespace(id=1, email="b@x.com", username=None))
        payload = jwt.decode(
            token,
            SECRET,
            algorithms=["HS256"],
            audience=options.audience,
            issuer=options.issuer,
        )
        assert "username" not in payload

    def test_each_token_has_unique_jti(self, issuer, account):
        assert issuer.issue(account) != issuer.issue(account)


class TestValidate:

    def test_valid_token_returns_account_id(self, issuer, account):
        assert issuer.validate(issuer.issue(account)) == 42

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
    def test_malformed_tokens(self, issuer, token):
        assert issuer.validate(token) is None

    def test_expired_token(self, issuer, account):
        issued = datetime.now(timezone.utc) - timedelta(minutes=31)
        assert issuer.validate(issuer.issue(account, now=issued)) is None

    def test_tampered_token(self, issuer, account):
        header, payload, signature = issuer.issue(account).split(".")
        flipped = signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")
        assert issuer.validate(f"{header}.{payload}.{flipped}") is None

    def test_wrong_secret(self, issuer, account, options):
        other = JwtIssuer(
            JwtOptions(
                secret_key="another-secret-key-with-enough-length",
                issuer=options.issuer,
                audience=options.audience,
            )
        )
        assert issuer.validate(other.issue(account)) is None

    def test_wrong_issuer(self, issuer, account, options):
        other = JwtIssuer(
            JwtOptions(secret_key=SECRET, issuer="someone-else", audience=options.audience)
        )
        assert issuer.validate(other.issue(account)) is None

    def test_wrong_audience(self, issuer, account, options):
        other = JwtIssuer(
            JwtOptions(secret_key=SECRET, issuer=options.issuer, audience="elsewhere")
        )
        assert issuer.validate(other.issue(account)) is None

    def test_non_integer_subject(self, issuer, options):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "not-a-number",
                "iat": now,
                "exp": now + timedelta(minutes=5),
                "iss": options.issuer,
                "aud": options.audience,
            },
            SECRET,
            algorithm="HS256",
        )
        assert issuer.validate(token) is None
