"""
Security utilities for authentication and account keys.

This module provides:
- Password hashing with Argon2id
- Password length policy shared by registration, change and reset
- JWT token generation and validation
- Random activation and reset key generation
"""

import logging
import secrets
import string
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import (
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)
from jose import JWTError, jwt

from manage_api.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# Password Hashing with Argon2id
# =============================================================================

pwd_hasher = PasswordHasher(
    time_cost=settings.argon2_time_cost,
    memory_cost=settings.argon2_memory_cost,
    parallelism=settings.argon2_parallelism,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: Plain text password to hash

    Returns:
        Argon2id hash string (includes algorithm, parameters, salt, and hash)
    """
    return pwd_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against an Argon2id hash.

    Args:
        password: Plain text password to verify
        hashed_password: Argon2id hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    try:
        pwd_hasher.verify(hashed_password, password)
        return True
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# =============================================================================
# Password Length Policy
# =============================================================================

PASSWORD_MIN_LENGTH = 4
PASSWORD_MAX_LENGTH = 100


def check_password_length(password: str | None) -> bool:
    """
    Check that a password is present and within the allowed length bounds.

    Example:
        >>> check_password_length("abc")
        False
        >>> check_password_length("abcd")
        True
    """
    return (
        bool(password)
        and PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH
    )


# =============================================================================
# JWT Token Management
# =============================================================================
# The subject of every token is the user's login. The "auth" claim carries
# the comma-separated authority names granted at authentication time.
# =============================================================================

ALGORITHM = "HS256"
AUTHORITIES_KEY = "auth"


def create_access_token(
    login: str,
    authorities: list[str],
    remember_me: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token for a login.

    Args:
        login: Login of the authenticated user, stored as 'sub'
        authorities: Authority names granted to the user
        remember_me: Use the long remember-me validity instead of the default
        expires_delta: Explicit validity overriding both defaults

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token("admin", ["ROLE_ADMIN", "ROLE_USER"])
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        if remember_me:
            expires_delta = timedelta(days=settings.remember_me_expire_days)
        else:
            expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": login,
        AUTHORITIES_KEY: ",".join(authorities),
        "exp": now + expires_delta,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Verifies signature, expiration and format.

    Raises:
        JWTError: If token is invalid, expired, or malformed
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise


# =============================================================================
# Activation / Reset Keys
# =============================================================================

KEY_LENGTH = 20
_KEY_ALPHABET = string.ascii_letters + string.digits


def generate_random_key(length: int = KEY_LENGTH) -> str:
    """Generate an alphanumeric key suitable for activation and reset links."""
    return "".join(secrets.choice(_KEY_ALPHABET) for _ in range(length))
