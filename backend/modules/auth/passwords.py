"""
Password hashing with bcrypt.

Hashes are stored as their UTF-8 text form so they fit a plain text column.
"""

from functools import lru_cache

import bcrypt


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=4)
def dummy_hash(rounds: int = 10) -> str:
    """
    A throwaway hash at the given cost.

    Compared against when a login names an unknown user, so the response
    takes as long as a wrong password would.
    """
    return hash_password("not-a-real-password", rounds)
