"""Tests for the SQLAlchemy-backed store."""

from decimal import Decimal

import pytest

from storefront.domain.errors import WriteError


class TestQuery:
    def test_equality_filter(self, store, products):
        rows = store.query("products", {"id": "prod-b"})
        assert [r["name"] for r in rows] == ["Clay Vase"]

    def test_list_filter_means_in(self, store, products):
        rows = store.query("products", {"id": ["prod-a", "prod-c"]}, order_by="id")
        assert [r["id"] for r in rows] == ["prod-a", "prod-c"]

    def test_descending_order(self, store, products):
        rows = store.query("products", order_by="-price")
        assert rows[0]["id"] == "prod-a"
        assert rows[-1]["id"] == "prod-c"

    def test_returns_plain_dicts_with_decimal_prices(self, store, products):
        row = store.query("products", {"id": "prod-c"})[0]
        assert row["price"] == Decimal("9.50")
        assert row["images"] == []

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            store.query("gallery")


class TestWrites:
    def test_insert_many_assigns_ids(self, store, products):
        rows = store.insert(
            "wishlist_items",
            [{"user_id": "u", "product_id": "prod-a"}, {"user_id": "u", "product_id": "prod-b"}],
        )
        assert len(rows) == 2
        assert all(r["id"] for r in rows)
        assert rows[0]["created_at"] is not None

    def test_update_returns_updated_rows(self, store, products):
        rows = store.update("products", {"id": "prod-a"}, {"stock_quantity": 1})
        assert rows[0]["stock_quantity"] == 1
        assert store.query("products", {"id": "prod-a"})[0]["stock_quantity"] == 1

    def test_update_without_match_returns_empty_list(self, store, products):
        assert store.update("products", {"id": "missing"}, {"stock_quantity": 1}) == []

    def test_delete_returns_count(self, store, products):
        assert store.delete("products", {"id": ["prod-a", "prod-b"]}) == 2
        assert store.delete("products", {"id": "prod-a"}) == 0

    def test_insert_violating_constraints_is_write_error(self, store, products):
        with pytest.raises(WriteError) as exc:
            store.insert("products", {"id": "prod-a", "name": "Duplicate", "price": Decimal("1.00")})
        assert exc.value.collection == "products"
        assert exc.value.operation == "insert"
