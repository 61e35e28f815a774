"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the user store.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    EmailVerificationIssued,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserRecord,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for user accounts."""

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Exact-match lookup; callers pass the lowercase form."""
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def create(self, username: str, password_hash: str) -> UserRecord:
        """
        Insert a user.

        Raises:
            DuplicateRecordError: If the username is taken
        """
        ...

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        """
        Apply a partial update.

        Raises:
            DuplicateRecordError: If ``email`` is already used by another user
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> UserRecord:
        """
        Create an account with a lowercase username and hashed password.

        Raises:
            UsernameTakenError: If the username exists in any case
        """
        ...

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Check credentials and issue a bearer token.

        Raises:
            InvalidCredentialsError: On unknown username or wrong password
        """
        ...

    async def authenticate(self, token: str) -> AuthenticatedUser:
        """
        Validate a bearer token and return the user it identifies.

        Args:
            token: Token issued by login()

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If token is past its expiry
            InvalidTokenError: If token is malformed or badly signed
            UserNotFoundError: If the user was deleted after issue
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        """
        Get a user by their ID.

        Returns:
            UserRecord if found, None otherwise
        """
        ...

    async def request_email_verification(
        self,
        user_id: str,
        email: str,
    ) -> EmailVerificationIssued:
        """
        Attach ``email`` to the user (unverified) and issue a passcode.

        Raises:
            EmailTakenError: If another user has this email
        """
        ...

    async def confirm_email_verification(self, user_id: str, otp: str) -> UserRecord:
        """
        Mark the user's email verified if ``otp`` matches and is unexpired.

        Raises:
            InvalidOTPError: If the passcode is malformed, wrong or expired
        """
        ...
