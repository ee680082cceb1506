# storefront/repos/wishlist_repo.py
from storefront.data.store import Store

COLLECTION = "wishlist_items"


class WishlistRepo:
    def __init__(self, store: Store):
        self.store = store

    def get_items(self, user_id: str) -> list[dict]:
        return self.store.query(COLLECTION, {"user_id": user_id}, order_by="-created_at")

    def get_item(self, user_id: str, product_id: str) -> dict | None:
        rows = self.store.query(COLLECTION, {"user_id": user_id, "product_id": product_id})
        return rows[0] if rows else None

    def add_item(self, user_id: str, product_id: str) -> dict:
        return self.store.insert(COLLECTION, {"user_id": user_id, "product_id": product_id})[0]

    def delete_item(self, item_id: str, user_id: str) -> int:
        return self.store.delete(COLLECTION, {"id": item_id, "user_id": user_id})

    def delete_by_product(self, user_id: str, product_id: str) -> int:
        return self.store.delete(COLLECTION, {"user_id": user_id, "product_id": product_id})
