"""
Category repositories.

SupabaseCategoryRepository persists to the ``categories`` table and performs
the delete cascade through the ``delete_category_cascade`` SQL function so the
category removal and the product reassignment commit together.
MemoryCategoryRepository does the same under the memory store's lock.
"""

from typing import Any, Optional

from shared.memory import MemoryStore
from shared.repository import BaseRepository
from modules.products.repository import PRODUCTS_TABLE, PRODUCT_UNIQUE_KEYS

from .models import Category

CATEGORIES_TABLE = "categories"
CATEGORY_UNIQUE_KEYS = [("user_id", "name")]


def _map_to_category(data: dict[str, Any]) -> Category:
    """Map a stored row to a Category model."""
    return Category(
        id=str(data["id"]),
        user_id=str(data["user_id"]),
        name=data["name"],
        created_at=data["created_at"],
        updated_at=data.get("updated_at") or data["created_at"],
    )


class SupabaseCategoryRepository(BaseRepository[Category]):
    """Category data access backed by Supabase."""

    table_name = CATEGORIES_TABLE

    def list_names(self, user_id: str) -> list[str]:
        query = self._db.table(CATEGORIES_TABLE).select("name").eq("user_id", user_id)
        result = self._execute(query)
        # Code-point order, independent of the database collation
        return sorted(row["name"] for row in result.data)

    def get_by_name(self, user_id: str, name: str) -> Optional[Category]:
        query = self._db.table(CATEGORIES_TABLE).select("*").eq("user_id", user_id)
        result = self._execute(query.eq("name", name).limit(1))
        if not result.data:
            return None
        return _map_to_category(result.data[0])

    def create(self, user_id: str, name: str) -> Category:
        data = {"user_id": user_id, "name": name}
        result = self._execute(
            self._db.table(CATEGORIES_TABLE).insert(data),
            key=data,
        )
        return _map_to_category(result.data[0])

    def delete_and_reassign(self, user_id: str, name: str, fallback: str) -> Optional[int]:
        result = self._execute(
            self._db.rpc(
                "delete_category_cascade",
                {"p_user_id": user_id, "p_name": name, "p_fallback": fallback},
            )
        )
        # The function returns NULL when no category matched
        if result.data is None:
            return None
        return int(result.data)


class MemoryCategoryRepository:
    """Category data access backed by the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store
        self._categories = store.collection(CATEGORIES_TABLE, CATEGORY_UNIQUE_KEYS)
        self._products = store.collection(PRODUCTS_TABLE, PRODUCT_UNIQUE_KEYS)

    def list_names(self, user_id: str) -> list[str]:
        docs = self._categories.find(lambda d: d["user_id"] == user_id)
        return sorted(d["name"] for d in docs)

    def get_by_name(self, user_id: str, name: str) -> Optional[Category]:
        doc = self._categories.find_one(
            lambda d: d["user_id"] == user_id and d["name"] == name
        )
        return _map_to_category(doc) if doc else None

    def create(self, user_id: str, name: str) -> Category:
        return _map_to_category(self._categories.insert({"user_id": user_id, "name": name}))

    def delete_and_reassign(self, user_id: str, name: str, fallback: str) -> Optional[int]:
        with self._store.transaction():
            doc = self._categories.find_one(
                lambda d: d["user_id"] == user_id and d["name"] == name
            )
            if doc is None:
                return None
            self._categories.delete(doc["id"])
            return self._products.update_many(
                lambda p: p["user_id"] == user_id and p["category"] == name,
                {"category": fallback},
            )
