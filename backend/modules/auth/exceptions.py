"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ConflictError, ValidationError


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is invalid or malformed."""

    def __init__(self, message: str = "Invalid token. Please login again."):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a bearer token has expired."""

    def __init__(self, message: str = "Token expired. Please login again."):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(
        self,
        message: str = "Authentication required. Please provide a valid token.",
    ):
        super().__init__(message, code="MISSING_TOKEN")


class AuthNotConfiguredError(AuthenticationError):
    """Raised when the token signing secret is not set."""

    def __init__(self):
        super().__init__("Server authentication not configured", code="AUTH_NOT_CONFIGURED")


class UserNotFoundError(AuthenticationError):
    """Raised when a valid token refers to a user that no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found. Please login again.",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Raised on a failed login.

    The message is the same whether the username or the password was wrong.
    """

    def __init__(self):
        super().__init__("Invalid username or password", code="INVALID_CREDENTIALS")


class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists (any case)."""

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class EmailTakenError(ConflictError):
    """Raised when another account already uses this email."""

    def __init__(self, email: str):
        super().__init__(
            "Email already in use",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


class InvalidOTPError(ValidationError):
    """Raised when a passcode is malformed, expired or wrong."""

    def __init__(self, message: str = "Invalid or expired OTP"):
        super().__init__(message, code="INVALID_OTP")
