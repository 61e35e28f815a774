"""
Product repositories.

SupabaseProductRepository persists to the ``products`` table;
MemoryProductRepository keeps the same contract in the in-memory store.
Neither performs authorization beyond filtering every query by ``user_id``.
"""

from typing import Any, Optional

from shared.memory import MemoryStore
from shared.repository import BaseRepository, is_uuid
from modules.categories.defaults import DEFAULT_CATEGORY

from .models import Product

PRODUCTS_TABLE = "products"
PRODUCT_UNIQUE_KEYS = [("user_id", "barcode")]
SEARCH_FIELDS = ("name", "barcode", "description", "category")


def _map_to_product(data: dict[str, Any]) -> Product:
    """Map a stored row to a Product model."""
    return Product(
        id=str(data["id"]),
        user_id=str(data["user_id"]),
        barcode=data["barcode"],
        name=data["name"],
        price=float(data.get("price") or 0),
        description=data.get("description") or "",
        category=data.get("category") or DEFAULT_CATEGORY,
        created_at=data["created_at"],
        updated_at=data.get("updated_at") or data["created_at"],
    )


def _ilike_value(term: str) -> str:
    """
    Quote a search term for a PostgREST ``ilike`` inside an ``or`` filter.

    LIKE wildcards in the term are escaped so they match literally, then the
    whole pattern is double-quoted so commas and parentheses survive.
    """
    like = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    quoted = like.replace("\\", "\\\\").replace('"', '\\"')
    return f'"%{quoted}%"'


class SupabaseProductRepository(BaseRepository[Product]):
    """Product data access backed by Supabase."""

    table_name = PRODUCTS_TABLE

    def create(self, user_id: str, data: dict[str, Any]) -> Product:
        row = {**data, "user_id": user_id}
        result = self._execute(
            self._db.table(PRODUCTS_TABLE).insert(row),
            key={"user_id": user_id, "barcode": row.get("barcode")},
        )
        return _map_to_product(result.data[0])

    def find(
        self,
        user_id: str,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Product]:
        query = self._db.table(PRODUCTS_TABLE).select("*").eq("user_id", user_id)

        if category is not None:
            query = query.eq("category", category)

        if search:
            value = _ilike_value(search)
            query = query.or_(",".join(f"{field}.ilike.{value}" for field in SEARCH_FIELDS))

        result = self._execute(query.order("created_at", desc=True))
        return [_map_to_product(row) for row in result.data]

    def get_by_id(self, user_id: str, product_id: str) -> Optional[Product]:
        # A malformed id cannot exist; skip the round trip (and the cast error)
        if not is_uuid(product_id):
            return None
        query = self._db.table(PRODUCTS_TABLE).select("*").eq("id", product_id)
        result = self._execute(query.eq("user_id", user_id).limit(1))
        if not result.data:
            return None
        return _map_to_product(result.data[0])

    def get_by_barcode(self, user_id: str, barcode: str) -> Optional[Product]:
        query = self._db.table(PRODUCTS_TABLE).select("*").eq("user_id", user_id)
        result = self._execute(query.eq("barcode", barcode).limit(1))
        if not result.data:
            return None
        return _map_to_product(result.data[0])

    def update(self, user_id: str, product_id: str, fields: dict[str, Any]) -> Optional[Product]:
        if not is_uuid(product_id):
            return None
        if not fields:
            return self.get_by_id(user_id, product_id)
        query = self._db.table(PRODUCTS_TABLE).update(fields).eq("id", product_id)
        result = self._execute(query.eq("user_id", user_id))
        if not result.data:
            return None
        return _map_to_product(result.data[0])

    def delete(self, user_id: str, product_id: str) -> bool:
        if not is_uuid(product_id):
            return False
        query = self._db.table(PRODUCTS_TABLE).delete().eq("id", product_id)
        result = self._execute(query.eq("user_id", user_id))
        return bool(result.data)


class MemoryProductRepository:
    """Product data access backed by the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._products = store.collection(PRODUCTS_TABLE, PRODUCT_UNIQUE_KEYS)

    def _owned(self, user_id: str, product_id: str) -> Optional[dict[str, Any]]:
        return self._products.find_one(
            lambda d: d["id"] == product_id and d["user_id"] == user_id
        )

    def create(self, user_id: str, data: dict[str, Any]) -> Product:
        return _map_to_product(self._products.insert({**data, "user_id": user_id}))

    def find(
        self,
        user_id: str,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Product]:
        needle = search.casefold() if search else None

        def matches(doc: dict[str, Any]) -> bool:
            if doc["user_id"] != user_id:
                return False
            if category is not None and doc.get("category") != category:
                return False
            if needle:
                return any(needle in str(doc.get(f) or "").casefold() for f in SEARCH_FIELDS)
            return True

        return [_map_to_product(doc) for doc in self._products.find(matches)]

    def get_by_id(self, user_id: str, product_id: str) -> Optional[Product]:
        doc = self._owned(user_id, product_id)
        return _map_to_product(doc) if doc else None

    def get_by_barcode(self, user_id: str, barcode: str) -> Optional[Product]:
        doc = self._products.find_one(
            lambda d: d["user_id"] == user_id and d["barcode"] == barcode
        )
        return _map_to_product(doc) if doc else None

    def update(self, user_id: str, product_id: str, fields: dict[str, Any]) -> Optional[Product]:
        if self._owned(user_id, product_id) is None:
            return None
        updated = self._products.update(product_id, fields)
        return _map_to_product(updated) if updated else None

    def delete(self, user_id: str, product_id: str) -> bool:
        if self._owned(user_id, product_id) is None:
            return False
        return self._products.delete(product_id) is not None
