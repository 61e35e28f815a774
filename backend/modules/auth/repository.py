"""
User repositories.

Usernames are stored lowercase; the unique index on ``username`` is what makes
registration case-insensitive. Email is unique only where it is set.
"""

from datetime import datetime
from typing import Any, Optional

from shared.memory import MemoryStore
from shared.repository import BaseRepository, is_uuid

from .models import UserRecord

USERS_TABLE = "users"
USER_UNIQUE_KEYS = [("username",), ("email",)]


def _map_to_user(data: dict[str, Any]) -> UserRecord:
    """Map a stored row to a UserRecord."""
    return UserRecord(
        id=str(data["id"]),
        username=data["username"],
        email=data.get("email"),
        password_hash=data["password_hash"],
        is_email_verified=bool(data.get("is_email_verified")),
        otp_code=data.get("otp_code"),
        otp_expires_at=data.get("otp_expires_at"),
        created_at=data["created_at"],
        updated_at=data.get("updated_at") or data["created_at"],
    )


def _to_row(fields: dict[str, Any]) -> dict[str, Any]:
    """Serialize datetimes for PostgREST."""
    return {
        k: v.isoformat() if isinstance(v, datetime) else v
        for k, v in fields.items()
    }


class SupabaseUserRepository(BaseRepository[UserRecord]):
    """User data access backed by Supabase."""

    table_name = USERS_TABLE

    def _get_one(self, column: str, value: str) -> Optional[UserRecord]:
        query = self._db.table(USERS_TABLE).select("*").eq(column, value)
        result = self._execute(query.limit(1))
        if not result.data:
            return None
        return _map_to_user(result.data[0])

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        if not is_uuid(user_id):
            return None
        return self._get_one("id", user_id)

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._get_one("email", email)

    def create(self, username: str, password_hash: str) -> UserRecord:
        result = self._execute(
            self._db.table(USERS_TABLE).insert(
                {"username": username, "password_hash": password_hash}
            ),
            key={"username": username},
        )
        return _map_to_user(result.data[0])

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        if not is_uuid(user_id):
            return None
        result = self._execute(
            self._db.table(USERS_TABLE).update(_to_row(fields)).eq("id", user_id),
            key={k: fields[k] for k in ("email",) if k in fields},
        )
        if not result.data:
            return None
        return _map_to_user(result.data[0])


class MemoryUserRepository:
    """User data access backed by the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._users = store.collection(USERS_TABLE, USER_UNIQUE_KEYS)

    def _get_one(self, column: str, value: str) -> Optional[UserRecord]:
        doc = self._users.find_one(lambda d: d.get(column) == value)
        return _map_to_user(doc) if doc else None

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._get_one("id", user_id)

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._get_one("email", email)

    def create(self, username: str, password_hash: str) -> UserRecord:
        doc = self._users.insert(
            {
                "username": username,
                "email": None,
                "password_hash": password_hash,
                "is_email_verified": False,
                "otp_code": None,
                "otp_expires_at": None,
            }
        )
        return _map_to_user(doc)

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        doc = self._users.update(user_id, fields)
        return _map_to_user(doc) if doc else None
