"""
Tests for JWT Token Service.

Tests verify that:
- Tokens carry the identity claims (user_id, username, dob) plus jti/iss/aud/sub
- Issue then validate round-trips the identity
- Expired tokens report TokenExpired, even when forged
- Tokens signed with another key report InvalidSignature
- Everything else reports MalformedToken
- Token expiry introspection works correctly
"""

from datetime import date, datetime, timedelta

import jwt as pyjwt
import pytest
from pydantic import ValidationError as PydanticValidationError

from mygram.auth.schemas import UserResponse
from mygram.auth.token import (
    ACCESS_TOKEN_SUBJECT,
    decode_token_no_validation,
    generate_access_token,
    get_token_expiry_remaining,
    is_token_expired,
    validate_access_token,
)
from mygram.config import settings
from mygram.exceptions import (
    InvalidSignature,
    MalformedToken,
    SigningError,
    TokenError,
    TokenExpired,
)
from mygram.utils import isodatetime


OTHER_KEY = "a-different-secret-key-of-sufficient-length"


@pytest.fixture
def user():
    return UserResponse(
        id=42,
        username="testuser",
        email="test@example.com",
        dob=date(1995, 4, 1),
        created_at=datetime(2026, 1, 10, 10, 30, 0),
        updated_at=datetime(2026, 1, 10, 10, 30, 0),
    )


def _claims(**overrides):
    """Complete, currently valid claim set."""
    now = isodatetime.now_unix()
    payload = {
        "jti": "9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d",
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "sub": ACCESS_TOKEN_SUBJECT,
        "iat": now,
        "nbf": now,
        "exp": now + 3600,
        "user_id": 42,
        "username": "testuser",
        "dob": None,
    }
    payload.update(overrides)
    return payload


def _sign(payload, key=None):
    return pyjwt.encode(payload, key or settings.jwt_secret_key, algorithm="HS256")


# ============================================================================
# Token Generation Tests
# ============================================================================


class TestGenerateAccessToken:
    """Tests for generate_access_token function."""

    def test_token_contains_required_claims(self, user):
        """Generated token carries identity and registered claims."""
        token = generate_access_token(user)
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["sub"] == "access-token"
        assert payload["iss"] == settings.jwt_issuer
        assert payload["aud"] == settings.jwt_audience
        assert payload["user_id"] == 42
        assert payload["username"] == "testuser"
        assert payload["dob"] == "1995-04-01"
        assert isinstance(payload["jti"], str) and payload["jti"]

    def test_expiry_is_configured_minutes_after_issue(self, user):
        """exp - iat equals the configured expiry window."""
        token = generate_access_token(user)
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["exp"] - payload["iat"] == settings.jwt_expiry_minutes * 60
        assert payload["nbf"] == payload["iat"]

    def test_each_token_has_unique_jti(self, user):
        """Two tokens for the same user differ by jti."""
        first = decode_token_no_validation(generate_access_token(user))
        second = decode_token_no_validation(generate_access_token(user))
        assert first["jti"] != second["jti"]

    def test_null_dob_is_carried_as_none(self, user):
        """Users without a date of birth get dob=None."""
        user = user.model_copy(update={"dob": None})
        payload = decode_token_no_validation(generate_access_token(user))
        assert payload["dob"] is None

    def test_empty_signing_key_raises_signing_error(self, user, monkeypatch):
        """No configured key means no token."""
        monkeypatch.setattr(settings, "jwt_secret_key", "")
        with pytest.raises(SigningError):
            generate_access_token(user)


# ============================================================================
# Token Validation Tests
# ============================================================================


class TestValidateAccessToken:
    """Tests for validate_access_token function."""

    def test_round_trip_preserves_identity(self, user):
        """Issue then validate returns the same user id, username and dob."""
        claims = validate_access_token(generate_access_token(user))

        assert claims.user_id == user.id
        assert claims.username == user.username
        assert claims.dob == user.dob
        assert claims.sub == "access-token"

    def test_claims_are_immutable(self, user):
        """Validated claims cannot be modified."""
        claims = validate_access_token(generate_access_token(user))
        with pytest.raises(PydanticValidationError):
            claims.user_id = 7

    def test_expired_token_raises_token_expired(self):
        """A token past its exp is expired."""
        past = isodatetime.now_unix() - 3600
        token = _sign(_claims(iat=past - 3600, nbf=past - 3600, exp=past))

        with pytest.raises(TokenExpired):
            validate_access_token(token)

    def test_expired_token_with_bad_signature_still_reports_expired(self):
        """Expiry is reported regardless of signature validity."""
        past = isodatetime.now_unix() - 3600
        token = _sign(_claims(iat=past - 3600, nbf=past - 3600, exp=past), key=OTHER_KEY)

        with pytest.raises(TokenExpired):
            validate_access_token(token)

    def test_not_yet_valid_token_raises_token_expired(self):
        """A token before its nbf is outside its validity window."""
        future = isodatetime.now_unix() + 3600
        token = _sign(_claims(nbf=future, exp=future + 3600))

        with pytest.raises(TokenExpired):
            validate_access_token(token)

    def test_wrong_key_raises_invalid_signature(self):
        """A token signed with another key fails the signature check."""
        token = _sign(_claims(), key=OTHER_KEY)

        with pytest.raises(InvalidSignature):
            validate_access_token(token)

    def test_malformed_tokens_raise_malformed_token(self):
        """Garbage input is malformed."""
        for token in ["not-a-jwt", "invalid.token.here", ""]:
            with pytest.raises(MalformedToken):
                validate_access_token(token)

    def test_missing_claims_raise_malformed_token(self):
        """A token without the identity claims is malformed."""
        payload = _claims()
        del payload["user_id"]
        with pytest.raises(MalformedToken):
            validate_access_token(_sign(payload))

    def test_wrong_subject_raises_malformed_token(self):
        """Only access tokens are accepted."""
        with pytest.raises(MalformedToken):
            validate_access_token(_sign(_claims(sub="refresh-token")))

    def test_wrong_audience_raises_malformed_token(self):
        with pytest.raises(MalformedToken):
            validate_access_token(_sign(_claims(aud="someone-else")))

    def test_wrong_issuer_raises_malformed_token(self):
        with pytest.raises(MalformedToken):
            validate_access_token(_sign(_claims(iss="someone-else")))

    def test_unexpected_algorithm_raises_malformed_token(self):
        """Tokens signed with an algorithm other than the configured one are rejected."""
        token = pyjwt.encode(
            _claims(), "k" * 64, algorithm="HS512"
        )
        with pytest.raises(MalformedToken):
            validate_access_token(token)

    def test_all_failures_share_token_error_base(self):
        """Callers can treat every failure the same way."""
        assert issubclass(TokenExpired, TokenError)
        assert issubclass(InvalidSignature, TokenError)
        assert issubclass(MalformedToken, TokenError)


# ============================================================================
# Token Introspection Tests
# ============================================================================


class TestGetTokenExpiryRemaining:
    """Tests for get_token_expiry_remaining function."""

    def test_remaining_time_for_fresh_token(self, user):
        """A fresh token has about the configured window left."""
        remaining = get_token_expiry_remaining(generate_access_token(user))

        assert isinstance(remaining, timedelta)
        window = settings.jwt_expiry_minutes * 60
        assert window - 5 <= remaining.total_seconds() <= window

    def test_expired_token_returns_none(self):
        past = isodatetime.now_unix() - 60
        assert get_token_expiry_remaining(_sign(_claims(exp=past))) is None

    def test_invalid_token_returns_none(self):
        assert get_token_expiry_remaining("invalid-token") is None


class TestIsTokenExpired:
    """Tests for is_token_expired function."""

    def test_valid_token_returns_false(self, user):
        assert is_token_expired(generate_access_token(user)) is False

    def test_expired_token_returns_true(self):
        past = isodatetime.now_unix() - 60
        assert is_token_expired(_sign(_claims(exp=past))) is True

    def test_invalid_token_returns_true(self):
        """Unreadable tokens are treated as expired."""
        assert is_token_expired("invalid-token") is True
        assert is_token_expired("") is True


class TestDecodeTokenNoValidation:
    """Tests for decode_token_no_validation function."""

    def test_decode_forged_token_succeeds_without_verification(self):
        """Forged tokens decode, so this must never be used for auth."""
        payload = decode_token_no_validation(_sign(_claims(user_id=1), key=OTHER_KEY))
        assert payload["user_id"] == 1
