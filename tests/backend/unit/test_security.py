"""
Unit tests for core.security module.
Tests password hashing, JWT token creation/validation and token resolution.
"""
import pytest
import datetime as dt
import jwt

from app.core.errors import AuthError
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    resolve_user_id,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    INVALID_TOKEN_MSG,
    JWT_ALG,
    JWT_SECRET,
    NO_TOKEN_MSG,
)


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_different_hash_each_time(self):
        """Password hashing should produce different hashes (salt included)."""
        password = "TestPassword123"
        assert hash_password(password) != hash_password(password)

    def test_hash_password_is_not_plain_text(self):
        password = "TestPassword123"
        hashed = hash_password(password)
        assert isinstance(hashed, str)
        assert hashed != password
        assert hashed.startswith("$argon2")

    def test_verify_password_correct_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("TestPassword123", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False

    def test_verify_password_garbage_hash(self):
        """An unparseable stored hash is a failed match, not an error."""
        assert verify_password("whatever", "not-a-hash") is False


class TestJWTTokens:
    """Tests for JWT token creation and validation."""

    def test_create_access_token_contains_user_id(self):
        token = create_access_token("test-user-456")
        payload = decode_access_token(token)
        assert payload["sub"] == "test-user-456"

    def test_token_expiration_time(self):
        """Token expiration should match configured time (10 hours by default)."""
        payload = decode_access_token(create_access_token("test-user-time"))
        diff_minutes = (payload["exp"] - payload["iat"]) / 60
        assert abs(diff_minutes - ACCESS_TOKEN_EXPIRE_MINUTES) < 1

    def test_default_expiry_is_ten_hours(self):
        assert ACCESS_TOKEN_EXPIRE_MINUTES == 600

    def test_decode_access_token_invalid_token(self):
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token("invalid.token.here")

    def test_decode_access_token_expired(self):
        token = create_access_token("u", expires_delta=dt.timedelta(seconds=-5))
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)


class TestResolveUserId:
    """The auth gate decision: (token, key, time) -> user id or AuthError."""

    def test_valid_token_resolves_to_its_user(self):
        assert resolve_user_id(create_access_token("user-U")) == "user-U"

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, token):
        with pytest.raises(AuthError) as exc:
            resolve_user_id(token)
        assert exc.value.msg == NO_TOKEN_MSG
        assert exc.value.status_code == 401

    def test_malformed_token(self):
        with pytest.raises(AuthError) as exc:
            resolve_user_id("abc.def")
        assert exc.value.msg == INVALID_TOKEN_MSG

    def test_wrong_signature(self):
        now = dt.datetime.now(dt.timezone.utc)
        forged = jwt.encode(
            {"sub": "user-U", "iat": now, "exp": now + dt.timedelta(hours=1)},
            "some-other-secret",
            algorithm=JWT_ALG,
        )
        with pytest.raises(AuthError) as exc:
            resolve_user_id(forged)
        assert exc.value.msg == INVALID_TOKEN_MSG

    def test_token_without_subject(self):
        now = dt.datetime.now(dt.timezone.utc)
        token = jwt.encode({"iat": now, "exp": now + dt.timedelta(hours=1)}, JWT_SECRET, algorithm=JWT_ALG)
        with pytest.raises(AuthError):
            resolve_user_id(token)

    def test_expired_token(self):
        token = create_access_token("user-U", expires_delta=dt.timedelta(seconds=-1))
        with pytest.raises(AuthError) as exc:
            resolve_user_id(token)
        assert exc.value.msg == INVALID_TOKEN_MSG

    def test_resolution_depends_on_supplied_time(self):
        token = create_access_token("user-U", expires_delta=dt.timedelta(hours=1))
        now = dt.datetime.now(dt.timezone.utc)
        assert resolve_user_id(token, now=now + dt.timedelta(minutes=59)) == "user-U"
        with pytest.raises(AuthError):
            resolve_user_id(token, now=now + dt.timedelta(hours=2))
