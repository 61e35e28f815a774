"""Tests for product repositories."""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from shared.exceptions import DuplicateRecordError
from shared.memory import MemoryStore
from modules.products.repository import (
    MemoryProductRepository,
    SupabaseProductRepository,
    _ilike_value,
)

USER = "6f1c2a9e-8d2b-4c7e-9b1a-0f3e5d7c9a11"
PRODUCT_ID = "0b7e4c1a-3f55-4a0e-8c6d-2d9a1e7f4b22"


def create_mock_product_data(**overrides) -> dict:
    """Helper to create a products row as PostgREST returns it."""
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": PRODUCT_ID,
        "user_id": USER,
        "barcode": "12345678",
        "name": "Milk",
        "price": 2.5,
        "description": "",
        "category": "Dairy",
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


class TestIlikeValue:
    """Tests for search term quoting."""

    def test_plain(self):
        assert _ilike_value("milk") == '"%milk%"'

    def test_wildcards_are_literal(self):
        """Should escape % and _ so they match themselves."""
        assert _ilike_value("50%_off") == '"%50\\\\%\\\\_off%"'

    def test_quotes_escaped(self):
        assert _ilike_value('a"b') == '"%a\\"b%"'


class TestSupabaseProductRepository:
    """Tests for the Supabase implementation."""

    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return SupabaseProductRepository(mock_db)

    def test_create(self, repo, mock_db):
        """Should insert with the owner and map the row."""
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_product_data()
        ]

        product = repo.create(USER, {"barcode": "12345678", "name": "Milk"})

        assert product.id == PRODUCT_ID
        assert product.price == 2.5
        mock_db.table.assert_called_with("products")
        mock_db.table.return_value.insert.assert_called_once_with(
            {"barcode": "12345678", "name": "Milk", "user_id": USER}
        )

    def test_find_plain(self, repo, mock_db):
        """Should filter by user and order newest first."""
        base = mock_db.table.return_value.select.return_value.eq.return_value
        base.order.return_value.execute.return_value.data = [create_mock_product_data()]

        products = repo.find(USER)

        assert len(products) == 1
        mock_db.table.return_value.select.return_value.eq.assert_called_once_with("user_id", USER)
        base.order.assert_called_once_with("created_at", desc=True)

    def test_find_with_category_and_search(self, repo, mock_db):
        """Should add a category filter and an or= of ilike clauses."""
        base = mock_db.table.return_value.select.return_value.eq.return_value
        filtered = base.eq.return_value
        filtered.or_.return_value.order.return_value.execute.return_value.data = []

        repo.find(USER, category="Dairy", search="milk")

        base.eq.assert_called_once_with("category", "Dairy")
        filtered.or_.assert_called_once_with(
            'name.ilike."%milk%",barcode.ilike."%milk%",'
            'description.ilike."%milk%",category.ilike."%milk%"'
        )

    def test_get_by_id_skips_non_uuid(self, repo, mock_db):
        """Malformed IDs should be not-found without a query."""
        assert repo.get_by_id(USER, "abc") is None
        assert repo.update(USER, "abc", {"name": "x"}) is None
        assert repo.delete(USER, "abc") is False
        mock_db.table.assert_not_called()

    def test_null_fields_get_defaults(self, repo, mock_db):
        chain = (
            mock_db.table.return_value.select.return_value.eq.return_value
            .eq.return_value.limit.return_value
        )
        chain.execute.return_value.data = [
            create_mock_product_data(price=None, description=None, category=None)
        ]

        product = repo.get_by_id(USER, PRODUCT_ID)

        assert product.price == 0
        assert product.description == ""
        assert product.category == "Uncategorized"

    def test_update_scoped_to_user(self, repo, mock_db):
        update = mock_db.table.return_value.update
        update.return_value.eq.return_value.eq.return_value.execute.return_value.data = [
            create_mock_product_data(name="Oat Milk")
        ]

        product = repo.update(USER, PRODUCT_ID, {"name": "Oat Milk"})

        assert product.name == "Oat Milk"
        update.assert_called_once_with({"name": "Oat Milk"})
        update.return_value.eq.assert_called_once_with("id", PRODUCT_ID)
        update.return_value.eq.return_value.eq.assert_called_once_with("user_id", USER)

    def test_update_not_owned(self, repo, mock_db):
        update = mock_db.table.return_value.update
        update.return_value.eq.return_value.eq.return_value.execute.return_value.data = []
        assert repo.update(USER, PRODUCT_ID, {"name": "x"}) is None

    def test_delete(self, repo, mock_db):
        delete = mock_db.table.return_value.delete
        delete.return_value.eq.return_value.eq.return_value.execute.return_value.data = [
            create_mock_product_data()
        ]
        assert repo.delete(USER, PRODUCT_ID) is True


class TestMemoryProductRepository:
    """Tests for the in-memory implementation."""

    @pytest.fixture
    def repo(self):
        return MemoryProductRepository(MemoryStore())

    def test_barcode_unique_per_user(self, repo):
        repo.create(USER, {"barcode": "1", "name": "Milk", "category": "Dairy"})
        repo.create("other", {"barcode": "1", "name": "Milk", "category": "Dairy"})
        with pytest.raises(DuplicateRecordError):
            repo.create(USER, {"barcode": "1", "name": "Again", "category": "Dairy"})

    def test_update_and_delete_scoped(self, repo):
        product = repo.create(USER, {"barcode": "1", "name": "Milk", "category": "Dairy"})
        assert repo.update("other", product.id, {"name": "x"}) is None
        assert repo.delete("other", product.id) is False
        assert repo.get_by_id(USER, product.id).name == "Milk"

    def test_search_ignores_like_wildcards(self, repo):
        """A % in the search term should not match everything."""
        repo.create(USER, {"barcode": "1", "name": "Milk", "category": "Dairy"})
        repo.create(USER, {"barcode": "2", "name": "50% off", "category": "Dairy"})
        assert [p.name for p in repo.find(USER, search="%")] == ["50% off"]
