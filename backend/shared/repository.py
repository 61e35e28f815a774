"""
Base repository class for database access.

Provides a common abstraction layer for all Supabase repositories,
encapsulating client access and the translation of PostgREST errors into
the backend's own exception types.
"""

import uuid
from typing import Any, TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import DuplicateRecordError, StoreError


T = TypeVar("T")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_uuid(value: str) -> bool:
    """Return True if ``value`` parses as a UUID."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Error translation via self._execute()
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProductRepository(BaseRepository[Product]):
            def get_by_id(self, user_id: str, product_id: str) -> Optional[Product]:
                query = self._db.table("products").select("*").eq("id", product_id)
                result = self._execute(query.eq("user_id", user_id))
                if not result.data:
                    return None
                return self._map_to_product(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, key: dict[str, Any] | None = None) -> Any:
        """
        Execute a PostgREST query, translating store errors.

        Args:
            query: A built postgrest request builder.
            key: Identifying fields reported if a unique index is hit.

        Returns:
            The postgrest APIResponse.

        Raises:
            DuplicateRecordError: On a unique index violation.
            StoreError: On any other PostgREST error.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateRecordError(self.table_name, key) from e
            raise StoreError(
                e.message or "Database request failed",
                details={"table": self.table_name, "code": e.code},
            ) from e
