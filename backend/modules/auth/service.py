"""
Authentication service implementation.

Issues and validates HS256 JWTs with PyJWT and keeps accounts in the user
repository. bcrypt work runs in a worker thread so it never blocks the
event loop.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.config import Settings, get_settings
from shared.exceptions import DuplicateRecordError
from shared.models import AuthenticatedUser

from .exceptions import (
    AuthNotConfiguredError,
    EmailTakenError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidOTPError,
    InvalidTokenError,
    MissingTokenError,
    UsernameTakenError,
    UserNotFoundError,
)
from .interfaces import IAuthService, IUserRepository
from .models import (
    EmailVerificationIssued,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenPayload,
    UserRecord,
    UserSummary,
)
from .otp import generate_otp, is_valid_otp_format, otp_expiry, otp_matches
from .passwords import dummy_hash, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Tokens carry the user ID as ``sub`` and are re-checked against the user
    store on every request, so deleting a user revokes their tokens.
    """

    def __init__(self, repository: IUserRepository, settings: Optional[Settings] = None):
        self._repository = repository
        self._settings = settings or get_settings()

    def _secret(self) -> str:
        if not self._settings.jwt_secret:
            raise AuthNotConfiguredError()
        return self._settings.jwt_secret

    async def register(self, request: RegisterRequest) -> UserRecord:
        username = request.username.strip().lower()

        if self._repository.get_by_username(username):
            raise UsernameTakenError(username)

        password_hash = await asyncio.to_thread(
            hash_password, request.password, self._settings.bcrypt_rounds
        )

        try:
            user = self._repository.create(username, password_hash)
        except DuplicateRecordError:
            raise UsernameTakenError(username)

        logger.info("Registered user %s (%s)", user.id, username)
        return user

    async def login(self, request: LoginRequest) -> LoginResponse:
        username = request.username.strip().lower()
        user = self._repository.get_by_username(username)

        if user is None:
            # Burn the same bcrypt time as a real comparison
            await asyncio.to_thread(
                verify_password, request.password, dummy_hash(self._settings.bcrypt_rounds)
            )
            logger.warning("Rejected login for unknown user %s", username)
            raise InvalidCredentialsError()

        valid = await asyncio.to_thread(verify_password, request.password, user.password_hash)
        if not valid:
            logger.warning("Rejected login for %s: wrong password", username)
            raise InvalidCredentialsError()

        return LoginResponse(token=self.issue_token(user), user=UserSummary.from_record(user))

    def issue_token(self, user: UserRecord, now: Optional[datetime] = None) -> str:
        """Sign a token for ``user`` valid for ``jwt_expire_days``."""
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "username": user.username,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=self._settings.jwt_expire_days)).timestamp()),
        }
        return jwt.encode(payload, self._secret(), algorithm=self._settings.jwt_algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry, returning the claims.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: For any other decoding failure
        """
        try:
            payload = jwt.decode(
                token,
                self._secret(),
                algorithms=[self._settings.jwt_algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError:
            raise InvalidTokenError()

        return TokenPayload(**payload)

    async def authenticate(self, token: str) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        payload = self.decode_token(token)

        user = self._repository.get_by_id(payload.sub)
        if user is None:
            raise UserNotFoundError(payload.sub)

        return AuthenticatedUser(
            id=user.id,
            username=user.username,
            email=user.email,
            email_verified=user.is_email_verified,
        )

    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._repository.get_by_id(user_id)

    async def request_email_verification(
        self,
        user_id: str,
        email: str,
    ) -> EmailVerificationIssued:
        email = email.strip().lower()

        other = self._repository.get_by_email(email)
        if other and other.id != user_id:
            raise EmailTakenError(email)

        code = generate_otp(self._settings.otp_length)
        expires_at = otp_expiry(self._settings.otp_ttl_minutes)

        try:
            user = self._repository.update(
                user_id,
                {
                    "email": email,
                    "is_email_verified": False,
                    "otp_code": code,
                    "otp_expires_at": expires_at,
                },
            )
        except DuplicateRecordError:
            raise EmailTakenError(email)

        if user is None:
            raise UserNotFoundError(user_id)

        # No mail transport; the code is only ever surfaced in development
        logger.info("Issued email verification code for user %s", user_id)
        return EmailVerificationIssued(
            email=email,
            expires_at=expires_at,
            otp=code if self._settings.is_development else None,
        )

    async def confirm_email_verification(self, user_id: str, otp: str) -> UserRecord:
        otp = (otp or "").strip()
        if not is_valid_otp_format(otp, self._settings.otp_length):
            raise InvalidOTPError("Invalid OTP format")

        user = self._repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not otp_matches(otp, user.otp_code, user.otp_expires_at):
            raise InvalidOTPError()

        updated = self._repository.update(
            user_id,
            {"is_email_verified": True, "otp_code": None, "otp_expires_at": None},
        )
        if updated is None:
            raise UserNotFoundError(user_id)

        logger.info("Verified email for user %s", user_id)
        return updated
