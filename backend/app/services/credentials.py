"""
Credential Service.

Hashes and verifies passwords, and handles password reset and update
requests. Reset delivery is delegated to a ``PasswordResetProvider``.
"""

from typing import Callable, Optional

from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import NotFound, StoreError
from app.core.logging_config import get_logger
from app.core.security import (
    build_password_context,
    create_reset_token,
    get_password_hash,
    verify_password,
)
from app.store.record_store import RecordStore, Row

logger = get_logger("credentials")

USERS_TABLE = "users"


def log_reset_link(email: str, token: str) -> None:
    """Default delivery: record that a reset link was issued."""
    logger.info(f"Password reset link issued for {email} ({settings.PASSWORD_RESET_URL})")


class PasswordResetProvider:
    """External auth provider that sends password reset instructions."""

    def send_reset(self, user: Row) -> None:
        raise NotImplementedError


class TokenResetProvider(PasswordResetProvider):
    """
    Issues a signed, expiring reset token and hands it to ``deliver``.

    ``deliver`` receives ``(email, token)``; it is expected to raise on
    delivery failure. The token is redeemed by the reset page the link
    points at (see ``decode_reset_token``). ``/api/updatepassword`` takes a
    bare user id and does not check it.
    """

    def __init__(self, deliver: Callable[[str, str], None] = log_reset_link):
        self.deliver = deliver

    def send_reset(self, user: Row) -> None:
        token = create_reset_token(user["u_id"])
        self.deliver(user["u_email"], token)


class CredentialService:
    """Password hashing, verification, reset and update."""

    def __init__(
        self,
        store: RecordStore,
        context: Optional[CryptContext] = None,
        reset_provider: Optional[PasswordResetProvider] = None,
    ):
        self.store = store
        self.context = context or build_password_context(settings.BCRYPT_ROUNDS)
        self.reset_provider = reset_provider or TokenResetProvider()

    def hash(self, plaintext: str) -> str:
        """Return a salted bcrypt hash of ``plaintext``."""
        return get_password_hash(plaintext, self.context)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check ``plaintext`` against ``hashed``. Never raises on mismatch."""
        return verify_password(plaintext, hashed, self.context)

    def request_password_reset(self, email: str) -> None:
        """
        Send password reset instructions to ``email``.

        Raises:
            NotFound: No user is registered with this email
            StoreError: The store or the reset provider failed
        """
        rows = self.store.select(
            USERS_TABLE,
            columns=["u_id", "u_email"],
            filters={"u_email": email},
            limit=1,
        )
        if not rows:
            logger.warning("Password reset requested for an unknown email")
            raise NotFound("Email is not registered")

        try:
            self.reset_provider.send_reset(rows[0])
        except StoreError:
            raise
        except Exception as e:
            logger.error(f"Password reset provider failed: {e}")
            raise StoreError("Unable to send password reset", cause=e) from e

        logger.info(f"Password reset sent for user {rows[0]['u_id']}")

    def update_password(self, user_id: int, new_plaintext: str) -> None:
        """
        Re-hash and persist a new password.

        Raises:
            NotFound: ``user_id`` matches no user
        """
        updated = self.store.update(
            USERS_TABLE,
            {"u_password": self.hash(new_plaintext)},
            {"u_id": user_id},
        )
        if not updated:
            raise NotFound("Cannot find the User")

        logger.info(f"Password updated for user {user_id}")
