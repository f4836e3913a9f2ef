"""
Unit tests for security utilities (password hashing, length policy, JWT tokens, keys).

All tests are fully mocked - no database or external dependencies.
"""

import string
from datetime import UTC, datetime, timedelta

import pytest
from jose import JWTError, jwt

from manage_api.core import security
from manage_api.core.config import settings


class TestPasswordHashing:
    """Test password hashing with Argon2id."""

    def test_hash_password_returns_string(self):
        """Test that hash_password returns an Argon2id hash."""
        hashed = security.hash_password("TestPassword123!")

        assert isinstance(hashed, str)
        assert hashed.startswith("$argon2id$")

    def test_hash_password_different_for_same_password(self):
        """Test that hashing the same password twice produces different hashes (due to salt)."""
        hash1 = security.hash_password("TestPassword123!")
        hash2 = security.hash_password("TestPassword123!")

        assert hash1 != hash2

    def test_verify_password_correct_password(self):
        hashed = security.hash_password("TestPassword123!")

        assert security.verify_password("TestPassword123!", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = security.hash_password("TestPassword123!")

        assert security.verify_password("WrongPassword123!", hashed) is False

    def test_verify_password_invalid_hash(self):
        """Test that verify_password returns False for a malformed hash."""
        assert security.verify_password("password", "not_a_valid_argon2_hash") is False


class TestPasswordLength:
    """Test the password length policy (4 to 100 characters)."""

    @pytest.mark.parametrize(
        "password,expected",
        [
            (None, False),
            ("", False),
            ("abc", False),
            ("abcd", True),
            ("a" * 100, True),
            ("a" * 101, False),
        ],
    )
    def test_check_password_length(self, password, expected):
        assert security.check_password_length(password) is expected

    def test_bounds_constants(self):
        assert security.PASSWORD_MIN_LENGTH == 4
        assert security.PASSWORD_MAX_LENGTH == 100


class TestJWTTokens:
    """Test JWT token creation and validation."""

    def test_token_carries_login_and_authorities(self):
        token = security.create_access_token("admin", ["ROLE_ADMIN", "ROLE_USER"])
        payload = security.decode_token(token)

        assert payload["sub"] == "admin"
        assert payload[security.AUTHORITIES_KEY] == "ROLE_ADMIN,ROLE_USER"
        assert "jti" in payload

    def test_default_expiration(self):
        token = security.create_access_token("user", ["ROLE_USER"])
        payload = security.decode_token(token)

        lifetime = payload["exp"] - payload["iat"]
        assert lifetime == settings.access_token_expire_minutes * 60

    def test_remember_me_expiration(self):
        """Test that remember-me tokens use the long validity."""
        token = security.create_access_token("user", ["ROLE_USER"], remember_me=True)
        payload = security.decode_token(token)

        lifetime = payload["exp"] - payload["iat"]
        assert lifetime == settings.remember_me_expire_days * 24 * 3600

    def test_expired_token_raises(self):
        token = security.create_access_token(
            "user", ["ROLE_USER"], expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(JWTError):
            security.decode_token(token)

    def test_token_signed_with_other_key_raises(self):
        token = jwt.encode(
            {"sub": "user", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "another-secret-key-with-at-least-32-characters",
            algorithm=security.ALGORITHM,
        )

        with pytest.raises(JWTError):
            security.decode_token(token)

    def test_malformed_token_raises(self):
        with pytest.raises(JWTError):
            security.decode_token("not.a.token")


class TestRandomKeys:
    """Test activation and reset key generation."""

    def test_default_length(self):
        key = security.generate_random_key()

        assert len(key) == security.KEY_LENGTH == 20

    def test_alphanumeric(self):
        key = security.generate_random_key(200)

        assert set(key) <= set(string.ascii_letters + string.digits)

    def test_keys_are_unique(self):
        keys = {security.generate_random_key() for _ in range(100)}

        assert len(keys) == 100
