# storefront/repos/order_repo.py
from storefront.data.store import Store

ORDERS = "orders"
ORDER_ITEMS = "order_items"


class OrderRepo:
    def __init__(self, store: Store):
        self.store = store

    def create_order(self, order: dict) -> dict:
        return self.store.insert(ORDERS, order)[0]

    def create_order_items(self, items: list[dict]) -> list[dict]:
        # single write, the backend stores all rows or none
        return self.store.insert(ORDER_ITEMS, items)

    def get_order(self, order_id: str, user_id: str) -> dict | None:
        rows = self.store.query(ORDERS, {"id": order_id, "user_id": user_id})
        return rows[0] if rows else None

    def get_orders(self, user_id: str) -> list[dict]:
        return self.store.query(ORDERS, {"user_id": user_id}, order_by="-created_at")

    def get_order_items(self, order_id: str) -> list[dict]:
        return self.store.query(ORDER_ITEMS, {"order_id": order_id})

    def delete_order(self, order_id: str, user_id: str) -> int:
        self.store.delete(ORDER_ITEMS, {"order_id": order_id})
        return self.store.delete(ORDERS, {"id": order_id, "user_id": user_id})

    def update_order_status(self, order_id: str, user_id: str, status: str) -> dict | None:
        rows = self.store.update(ORDERS, {"id": order_id, "user_id": user_id}, {"status": status})
        return rows[0] if rows else None
