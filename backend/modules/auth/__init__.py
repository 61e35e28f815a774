"""
Authentication module.

Handles registration, login, bearer token validation and email verification.

Public API:
- IAuthService: Interface for auth operations
- AuthenticatedUser: Minimal user info resolved from a token
- UserSummary: Public view of a user
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from shared.models import AuthenticatedUser

from .interfaces import IAuthService, IUserRepository
from .models import (
    UserRecord,
    UserSummary,
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    TokenPayload,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    InvalidCredentialsError,
    UsernameTakenError,
    EmailTakenError,
    InvalidOTPError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Models
    "AuthenticatedUser",
    "UserRecord",
    "UserSummary",
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "TokenPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "UsernameTakenError",
    "EmailTakenError",
    "InvalidOTPError",
]
