"""
Security utilities for credentials.

Provides password hashing (bcrypt) and signed password-reset tokens (JWT).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from app.core.config import settings

RESET_TOKEN_PURPOSE = "password_reset"


def build_password_context(rounds: int = settings.BCRYPT_ROUNDS) -> CryptContext:
    """
    Build a bcrypt hashing context with the given cost factor.

    New hashes use bcrypt over a SHA-256 digest of the password, so secrets
    longer than bcrypt's 72-byte limit are not truncated. Plain bcrypt
    hashes still verify.

    Args:
        rounds: bcrypt log2 rounds (10 or more)

    Returns:
        A passlib CryptContext
    """
    return CryptContext(
        schemes=["bcrypt_sha256", "bcrypt"],
        deprecated="auto",
        bcrypt_sha256__rounds=rounds,
        bcrypt__rounds=rounds,
    )


# Password hashing context using bcrypt
pwd_context = build_password_context()


def verify_password(
    plain_password: str,
    hashed_password: str,
    context: CryptContext = pwd_context,
) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against
        context: Hashing context to verify with

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    if not hashed_password:
        return False
    try:
        return context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError, TypeError):
        return False


def get_password_hash(password: str, context: CryptContext = pwd_context) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash
        context: Hashing context to hash with

    Returns:
        The hashed password string
    """
    return context.hash(password)


def create_reset_token(
    user_id: int,
    expires_delta: Optional[timedelta] = None,
    secret_key: str = settings.SECRET_KEY,
    algorithm: str = settings.ALGORITHM,
) -> str:
    """
    Create a signed password-reset token.

    Args:
        user_id: Id of the user the token is issued for
        expires_delta: Optional custom expiration time
        secret_key: Signing key
        algorithm: JWT signing algorithm

    Returns:
        The encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "purpose": RESET_TOKEN_PURPOSE,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }

    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_reset_token(
    token: str,
    secret_key: str = settings.SECRET_KEY,
    algorithm: str = settings.ALGORITHM,
) -> Optional[int]:
    """
    Decode and validate a password-reset token.

    Args:
        token: The JWT token string to decode
        secret_key: Signing key
        algorithm: JWT signing algorithm

    Returns:
        The user id the token was issued for, or None if invalid
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except InvalidTokenError:
        return None

    if payload.get("purpose") != RESET_TOKEN_PURPOSE:
        return None

    try:
        return int(payload["sub"])
    except (KeyError, ValueError):
        return None
