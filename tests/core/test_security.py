"""
Unit tests for password hashing and access tokens.
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from campus_revival.core.config import settings
from campus_revival.core.errors import ExpiredTokenError, InvalidTokenError
from campus_revival.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    token_expiry,
    verify_password,
)


class TestPasswordHashing:
    """Tests for bcrypt password helpers."""

    def test_hash_is_salted(self):
        """Hashing the same password twice gives different hashes."""
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_correct_password(self):
        hashed = hash_password("secret1")
        assert verify_password("secret1", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("secret1")
        assert verify_password("secret2", hashed) is False

    def test_verify_against_non_bcrypt_value(self):
        assert verify_password("secret1", "not-a-hash") is False

    def test_long_passwords_are_accepted(self):
        """Passwords past bcrypt's 72 byte limit hash and verify."""
        long_password = "p" * 100
        hashed = hash_password(long_password)
        assert verify_password(long_password, hashed) is True


class TestAccessTokens:
    """Tests for token issuing and decoding."""

    def test_round_trip_claims(self):
        token = create_access_token(subject="user-1")
        payload = decode_token(token)
        assert payload["sub"] == "user-1"
        assert payload["type"] == "access"
        assert payload["jti"]

    def test_tokens_for_same_user_differ(self):
        """Two tokens issued back to back are distinct."""
        first = create_access_token(subject="user-1")
        second = create_access_token(subject="user-1")
        assert first != second
        assert decode_token(first)["jti"] != decode_token(second)["jti"]

    def test_default_lifetime_from_settings(self):
        payload = decode_token(create_access_token(subject="user-1"))
        expected = datetime.now(UTC) + timedelta(days=settings.access_token_expire_days)
        assert abs((token_expiry(payload) - expected).total_seconds()) < 5

    def test_expired_token(self):
        token = create_access_token(subject="user-1", expires_delta=timedelta(seconds=-10))
        with pytest.raises(ExpiredTokenError) as exc_info:
            decode_token(token)
        assert exc_info.value.error_code == "TOKEN_EXPIRED"
        assert exc_info.value.status_code == 401

    def test_tampered_token(self):
        token = create_access_token(subject="user-1")
        replacement = "BBBB" if token.endswith("AAAA") else "AAAA"
        tampered = token[:-4] + replacement
        with pytest.raises(InvalidTokenError):
            decode_token(tampered)

    def test_token_signed_with_other_secret(self):
        token = jwt.encode(
            {"sub": "user-1", "jti": "abc", "type": "access"},
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            decode_token("not.a.jwt")

    def test_wrong_token_type(self):
        token = create_access_token(subject="user-1", additional_claims={"type": "refresh"})
        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_missing_jti(self):
        token = jwt.encode(
            {"sub": "user-1", "type": "access"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            decode_token(token)
