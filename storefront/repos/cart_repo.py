# storefront/repos/cart_repo.py
from storefront.data.store import Store

COLLECTION = "cart_items"


class CartRepo:
    """cart_items rows, always scoped by the owning user."""

    def __init__(self, store: Store):
        self.store = store

    def get_cart_items(self, user_id: str) -> list[dict]:
        return self.store.query(COLLECTION, {"user_id": user_id}, order_by="created_at")

    def get_cart_item(self, user_id: str, product_id: str) -> dict | None:
        rows = self.store.query(COLLECTION, {"user_id": user_id, "product_id": product_id})
        return rows[0] if rows else None

    def add_cart_item(self, user_id: str, product_id: str, quantity: int) -> dict:
        return self.store.insert(
            COLLECTION,
            {"user_id": user_id, "product_id": product_id, "quantity": quantity},
        )[0]

    def update_quantity(self, cart_item_id: str, user_id: str, quantity: int) -> dict | None:
        rows = self.store.update(
            COLLECTION,
            {"id": cart_item_id, "user_id": user_id},
            {"quantity": quantity},
        )
        return rows[0] if rows else None

    def delete_cart_item(self, cart_item_id: str, user_id: str) -> int:
        return self.store.delete(COLLECTION, {"id": cart_item_id, "user_id": user_id})

    def delete_cart_items(self, user_id: str, cart_item_ids: list[str] | None = None) -> int:
        filters = {"user_id": user_id}
        if cart_item_ids is not None:
            if not cart_item_ids:
                return 0
            filters["id"] = list(cart_item_ids)
        return self.store.delete(COLLECTION, filters)
