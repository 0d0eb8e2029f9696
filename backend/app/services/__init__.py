from app.services.credentials import (
    CredentialService,
    PasswordResetProvider,
    TokenResetProvider,
)
from app.services.users import AuthResult, AuthStatus, UserDirectory
from app.services.jobs import JobCatalog

__all__ = [
    "CredentialService",
    "PasswordResetProvider",
    "TokenResetProvider",
    "AuthResult",
    "AuthStatus",
    "UserDirectory",
    "JobCatalog",
]
