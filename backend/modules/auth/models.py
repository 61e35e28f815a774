"""
Authentication module data models.

UserRecord is the stored shape and never leaves the backend; the wire
models below are what clients see.
"""

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from shared.models import WireModel

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt ignores anything past 72 bytes


class UserRecord(BaseModel):
    """A stored user, including credential and OTP fields."""

    id: str
    username: str
    email: Optional[str] = None
    password_hash: str
    is_email_verified: bool = False
    otp_code: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserSummary(WireModel):
    """Public view of a user."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Lowercase username")
    email: Optional[str] = Field(None, description="Email address, if set")
    is_email_verified: bool = Field(default=False, description="Whether email is verified")

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            is_email_verified=user.is_email_verified,
        )


def check_password(value: str) -> str:
    """Validate password length limits. Returns the password unchanged."""
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    return value


def check_username(value: str) -> str:
    """Validate and trim a username. Case is preserved here."""
    value = value.strip()
    if not value:
        raise ValueError("Username is required")
    if len(value) < USERNAME_MIN_LENGTH:
        raise ValueError(f"Username must be at least {USERNAME_MIN_LENGTH} characters long")
    if len(value) > USERNAME_MAX_LENGTH:
        raise ValueError(f"Username must be at most {USERNAME_MAX_LENGTH} characters long")
    if not USERNAME_PATTERN.match(value):
        raise ValueError("Username can only contain letters, numbers, and underscores")
    return value


class RegisterRequest(WireModel):
    """Request to create an account."""

    username: str = Field(..., description="3-30 letters, digits or underscores")
    password: str = Field(..., description="At least 6 characters")

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return check_username(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password(value)


class LoginRequest(WireModel):
    """Request to log in."""

    username: str = Field(..., description="Username (any case)")
    password: str = Field(..., description="Password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class RegisterResponse(WireModel):
    """Identifiers of a newly registered user."""

    user_id: str
    username: str


class LoginResponse(WireModel):
    """Bearer token plus the logged-in user."""

    token: str
    user: UserSummary


class TokenPayload(BaseModel):
    """Decoded bearer token claims."""

    sub: str = Field(..., description="Subject (user ID)")
    username: Optional[str] = Field(None, description="Username at issue time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class EmailVerificationRequest(WireModel):
    """Request to attach an email address and send it a passcode."""

    email: str = Field(..., description="Email address to verify")

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please provide a valid email address")
        return value


class EmailVerificationConfirm(WireModel):
    """Request to confirm an email address with its passcode."""

    otp: str = Field(..., description="One-time passcode")


class EmailVerificationIssued(WireModel):
    """Result of issuing a passcode."""

    email: str
    expires_at: datetime
    otp: Optional[str] = Field(
        None,
        description="The passcode itself; only populated in development",
    )
