"""
User Directory.

Registration, lookup and profile updates for users. Passwords are hashed
through the Credential Service before they reach the store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from app.core.logging_config import get_logger
from app.services.credentials import USERS_TABLE, CredentialService
from app.store.record_store import RecordStore, Row

logger = get_logger("users")

# Columns returned to callers; the password hash never leaves the directory
USER_COLUMNS = [
    "u_id",
    "u_firstname",
    "u_lastname",
    "u_email",
    "u_gender",
    "u_dob",
    "u_title",
    "u_qualification",
]


class AuthStatus(str, Enum):
    SUCCESS = "success"
    EMAIL_NOT_FOUND = "email_not_found"
    WRONG_CREDENTIALS = "wrong_credentials"


@dataclass
class AuthResult:
    """Outcome of ``UserDirectory.authenticate``."""

    status: AuthStatus
    user: Optional[Row] = None

    @property
    def ok(self) -> bool:
        return self.status is AuthStatus.SUCCESS


def public_user(row: Row) -> Row:
    """Project a user row to the public column set."""
    return {column: row.get(column) for column in USER_COLUMNS}


class UserDirectory:
    """User registration, authentication and profile management."""

    def __init__(self, store: RecordStore, credentials: CredentialService):
        self.store = store
        self.credentials = credentials

    def register(
        self,
        firstname: str,
        lastname: str,
        email: str,
        password: str,
        gender: str,
        dob: Any,
    ) -> None:
        """
        Create a user with a hashed password.

        Uniqueness of ``email`` is not checked here; a duplicate is rejected
        by the store and surfaces as ``StoreError``.
        """
        self.store.insert(
            USERS_TABLE,
            [
                {
                    "u_firstname": firstname,
                    "u_lastname": lastname,
                    "u_email": email,
                    "u_password": self.credentials.hash(password),
                    "u_gender": gender,
                    "u_dob": dob,
                }
            ],
        )
        logger.info(f"Registered user {email}")

    def find_by_email(self, email: str) -> Optional[Row]:
        """Return the full user row (hash included) for ``email``, if any."""
        rows = self.store.select(USERS_TABLE, filters={"u_email": email}, limit=1)
        return rows[0] if rows else None

    def exists_by_email(self, email: str) -> bool:
        rows = self.store.select(USERS_TABLE, columns=["u_id"], filters={"u_email": email}, limit=1)
        return bool(rows)

    def authenticate(self, email: str, password: str) -> AuthResult:
        """
        Verify ``password`` for the user registered under ``email``.

        Returns:
            AuthResult with the public user row on success
        """
        user = self.find_by_email(email)
        if user is None:
            logger.info("Authentication failed: unknown email")
            return AuthResult(AuthStatus.EMAIL_NOT_FOUND)

        if not self.credentials.verify(password, user["u_password"]):
            logger.info(f"Authentication failed for user {user['u_id']}: wrong password")
            return AuthResult(AuthStatus.WRONG_CREDENTIALS)

        return AuthResult(AuthStatus.SUCCESS, public_user(user))

    def get_by_id(self, user_id: int) -> Optional[Row]:
        rows = self.store.select(USERS_TABLE, columns=USER_COLUMNS, filters={"u_id": user_id}, limit=1)
        return rows[0] if rows else None

    def update_profile(self, user_id: int, title: Optional[str], qualification: Optional[str]) -> None:
        """
        Set title and qualification on a user.

        An id that matches no user is a no-op and still counts as success.
        """
        updated = self.store.update(
            USERS_TABLE,
            {"u_title": title, "u_qualification": qualification},
            {"u_id": user_id},
        )
        if not updated:
            logger.warning(f"Profile update matched no user (id={user_id})")
