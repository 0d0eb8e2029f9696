"""
Tests for core/security.py - password hashing and reset tokens.
"""

from datetime import timedelta

import jwt
from passlib.hash import bcrypt, bcrypt_sha256

from app.core.config import settings
from app.core.security import (
    build_password_context,
    create_reset_token,
    decode_reset_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Test bcrypt hashing and verification."""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("pw1")
        assert hashed != "pw1"
        assert bcrypt_sha256.identify(hashed)

    def test_hash_uses_configured_rounds(self):
        """The cost factor is embedded in the hash."""
        context = build_password_context(11)
        assert bcrypt_sha256.from_string(get_password_hash("pw1", context)).rounds == 11

    def test_default_rounds_are_at_least_ten(self):
        assert bcrypt_sha256.from_string(get_password_hash("pw1")).rounds >= 10

    def test_long_passwords_are_not_truncated(self):
        """Passwords sharing their first 72 bytes must not verify against each other."""
        hashed = get_password_hash("a" * 72 + "X")

        assert verify_password("a" * 72 + "X", hashed)
        assert not verify_password("a" * 72 + "Y", hashed)

    def test_plain_bcrypt_hash_still_verifies(self):
        legacy = bcrypt.using(rounds=10).hash("pw1")

        assert verify_password("pw1", legacy)
        assert not verify_password("pw2", legacy)

    def test_same_password_hashes_differently(self):
        """Salt makes every hash unique."""
        assert get_password_hash("pw1") != get_password_hash("pw1")

    def test_verify_matching_password(self):
        assert verify_password("pw1", get_password_hash("pw1"))

    def test_verify_wrong_password(self):
        assert not verify_password("pw2", get_password_hash("pw1"))

    def test_verify_malformed_hash_returns_false(self):
        assert not verify_password("pw1", "not-a-bcrypt-hash")

    def test_verify_empty_hash_returns_false(self):
        assert not verify_password("pw1", "")
        assert not verify_password("pw1", None)


class TestResetTokens:
    """Test signed password-reset tokens."""

    def test_roundtrip_returns_user_id(self):
        assert decode_reset_token(create_reset_token(42)) == 42

    def test_expired_token_is_rejected(self):
        token = create_reset_token(42, expires_delta=timedelta(minutes=-1))
        assert decode_reset_token(token) is None

    def test_tampered_token_is_rejected(self):
        token = create_reset_token(42)
        assert decode_reset_token(token + "x") is None

    def test_token_signed_with_other_key_is_rejected(self):
        token = create_reset_token(42, secret_key="another-secret-key-of-sufficient-size")
        assert decode_reset_token(token) is None

    def test_token_with_other_purpose_is_rejected(self):
        token = jwt.encode(
            {"sub": "42", "purpose": "login"},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        assert decode_reset_token(token) is None

    def test_garbage_is_rejected(self):
        assert decode_reset_token("not.a.token") is None
