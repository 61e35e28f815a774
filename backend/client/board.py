"""
Kanban board state.

Holds one user's categories and products, groups products into columns and
applies moves and deletes optimistically against the API.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .api import ApiResult, InventoryClient
from .helpers import DEFAULT_CATEGORY, is_default_category
from .optimistic import OptimisticAction

logger = logging.getLogger(__name__)

Product = dict[str, Any]


@dataclass
class Column:
    """One category and the products in it, newest first."""

    name: str
    products: list[Product] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.products)


@dataclass
class BatchResult:
    """Per-item outcome of a batch move or delete."""

    verb: str
    succeeded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        """E.g. "3 deleted, 1 failed"."""
        text = f"{len(self.succeeded)} {self.verb}"
        if self.failed:
            text += f", {len(self.failed)} failed"
        return text


class KanbanBoard:
    """Client-side view of one user's catalog."""

    def __init__(self, client: InventoryClient):
        self._client = client
        self.categories: list[str] = [DEFAULT_CATEGORY]
        self.products: list[Product] = []

    def _index_of(self, product_id: str) -> Optional[int]:
        for i, product in enumerate(self.products):
            if product.get("id") == product_id:
                return i
        return None

    def get_product(self, product_id: str) -> Optional[Product]:
        index = self._index_of(product_id)
        return self.products[index] if index is not None else None

    async def refresh(self) -> ApiResult:
        """Reload products and categories together."""
        products, categories = await asyncio.gather(
            self._client.get_products(),
            self._client.get_categories(),
        )
        self.products = list(products.data or [])
        self.categories = list(categories.data or [DEFAULT_CATEGORY])
        if not products.success:
            return products
        return categories if not categories.success else products

    def columns(self) -> list[Column]:
        """
        Products grouped by category, in category-list order.

        Products whose category is not in the list get their own trailing
        column, in order of first appearance.
        """
        columns = {name: Column(name) for name in self.categories}
        for product in self.products:
            name = product.get("category") or DEFAULT_CATEGORY
            if is_default_category(name):
                name = DEFAULT_CATEGORY
            columns.setdefault(name, Column(name)).products.append(product)
        return list(columns.values())

    async def move_product(self, product_id: str, category: str) -> ApiResult:
        """Move one product to ``category``, undoing the move if the server refuses."""
        index = self._index_of(product_id)
        if index is None:
            return ApiResult(success=False, message="Product not found", status=404)

        original = self.products[index]
        if original.get("category") == category:
            return ApiResult(success=True, message="Product is already in this category", data=original)

        def replace(product: Product) -> None:
            current = self._index_of(product_id)
            if current is not None:
                self.products[current] = product

        action = OptimisticAction(
            lambda: replace({**original, "category": category}),
            lambda: replace(original),
        )

        result = await action.run(
            lambda: self._client.update_product(product_id, {"category": category})
        )
        if result.success and isinstance(result.data, dict):
            # Reconcile with what the server stored (it normalizes names)
            replace(result.data)
        return result

    async def delete_product(self, product_id: str) -> ApiResult:
        """Remove one product, putting it back if the server refuses."""
        index = self._index_of(product_id)
        if index is None:
            return ApiResult(success=False, message="Product not found", status=404)

        original = self.products[index]

        def apply_change() -> None:
            self.products.pop(index)

        def revert_change() -> None:
            self.products.insert(min(index, len(self.products)), original)

        action = OptimisticAction(apply_change, revert_change)
        return await action.run(lambda: self._client.delete_product(product_id))

    async def move_products(self, product_ids: list[str], category: str) -> BatchResult:
        """Move several products; each one succeeds or fails on its own."""
        results = await asyncio.gather(
            *(self._client.update_product(pid, {"category": category}) for pid in product_ids)
        )

        batch = BatchResult("moved")
        for product_id, result in zip(product_ids, results):
            if not result.success:
                batch.failed.append(product_id)
                continue
            batch.succeeded.append(product_id)
            index = self._index_of(product_id)
            if index is not None:
                self.products[index] = (
                    result.data if isinstance(result.data, dict)
                    else {**self.products[index], "category": category}
                )
        if batch.failed:
            logger.info("Batch move: %s", batch.summary())
        return batch

    async def delete_products(self, product_ids: list[str]) -> BatchResult:
        """Delete several products; only the successful ones leave the board."""
        results = await asyncio.gather(
            *(self._client.delete_product(pid) for pid in product_ids)
        )

        batch = BatchResult("deleted")
        for product_id, result in zip(product_ids, results):
            (batch.succeeded if result.success else batch.failed).append(product_id)

        removed = set(batch.succeeded)
        self.products = [p for p in self.products if p.get("id") not in removed]
        if batch.failed:
            logger.info("Batch delete: %s", batch.summary())
        return batch

    async def create_category(self, name: str) -> ApiResult:
        """Create a category, checking the local list before asking the server."""
        name = (name or "").strip()
        if not name:
            return ApiResult(success=False, message="Category name is required")
        if is_default_category(name) or name in self.categories:
            return ApiResult(success=False, message="Category already exists")

        result = await self._client.create_category(name)
        if result.success:
            categories = await self._client.get_categories()
            self.categories = list(categories.data)
            if name not in self.categories:
                self.categories.append(name)
        return result

    async def delete_category(self, name: str) -> ApiResult:
        """Delete a category on the server, then move its products locally."""
        if is_default_category(name):
            return ApiResult(success=False, message="Cannot delete the default category")

        result = await self._client.delete_category(name)
        if result.success:
            self.categories = [c for c in self.categories if c != name]
            self.products = [
                {**p, "category": DEFAULT_CATEGORY} if p.get("category") == name else p
                for p in self.products
            ]
        return result
