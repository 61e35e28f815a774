"""One-time passcodes for email verification."""

import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional


def generate_otp(length: int = 6) -> str:
    """Return a random numeric passcode of ``length`` digits."""
    return "".join(secrets.choice("0123456789") for _ in range(length))


def otp_expiry(ttl_minutes: int, now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now(timezone.utc)) + timedelta(minutes=ttl_minutes)


def is_valid_otp_format(code: str, length: int = 6) -> bool:
    return len(code) == length and code.isascii() and code.isdigit()


def otp_matches(
    code: str,
    expected: Optional[str],
    expires_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> bool:
    """True if ``code`` equals the stored passcode and it has not expired."""
    if not expected or expires_at is None:
        return False
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if (now or datetime.now(timezone.utc)) > expires_at:
        return False
    return hmac.compare_digest(code.encode("utf-8"), expected.encode("utf-8"))
