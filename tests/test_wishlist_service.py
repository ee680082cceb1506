"""Tests for the wishlist."""

import pytest

from conftest import OTHER_USER_ID, USER_ID
from storefront.domain.errors import NotFound
from storefront.services.cart_service import CartService
from storefront.services.wishlist_service import WishlistService


class TestToggle:
    def test_toggle_adds_then_removes(self, store, products):
        wishlist = WishlistService(store, USER_ID)
        assert wishlist.toggle("prod-a") is True
        assert wishlist.is_wishlisted("prod-a") is True
        assert wishlist.toggle("prod-a") is False
        assert wishlist.is_wishlisted("prod-a") is False

    def test_unknown_product(self, store, products):
        with pytest.raises(NotFound):
            WishlistService(store, USER_ID).toggle("ghost")

    def test_wishlists_are_per_user(self, store, products):
        WishlistService(store, USER_ID).toggle("prod-a")
        assert WishlistService(store, OTHER_USER_ID).is_wishlisted("prod-a") is False


class TestListAndRemove:
    def test_list_joins_products(self, store, products):
        wishlist = WishlistService(store, USER_ID)
        wishlist.toggle("prod-b")
        wishlist.toggle("prod-out")
        items = {item.product_id: item for item in wishlist.list_items()}
        assert items["prod-b"].product.name == "Clay Vase"
        assert items["prod-b"].in_stock is True
        assert items["prod-out"].in_stock is False

    def test_remove(self, store, products):
        wishlist = WishlistService(store, USER_ID)
        wishlist.toggle("prod-c")
        item = wishlist.list_items()[0]
        wishlist.remove(item.id)
        assert wishlist.list_items() == []

    def test_cannot_remove_other_users_item(self, store, products):
        WishlistService(store, OTHER_USER_ID).toggle("prod-c")
        foreign = WishlistService(store, OTHER_USER_ID).list_items()[0]
        with pytest.raises(NotFound):
            WishlistService(store, USER_ID).remove(foreign.id)


def test_add_to_cart_keeps_wishlist(store, products):
    wishlist = WishlistService(store, USER_ID)
    wishlist.toggle("prod-c")
    cart = CartService(store, USER_ID)

    assert wishlist.add_to_cart("prod-c", cart) is True
    assert [(line.product_id, line.quantity) for line in cart.lines] == [("prod-c", 1)]
    assert wishlist.is_wishlisted("prod-c") is True
