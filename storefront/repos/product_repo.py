# storefront/repos/product_repo.py
from storefront.data.store import Store

COLLECTION = "products"


class ProductRepo:
    def __init__(self, store: Store):
        self.store = store

    def get_product(self, product_id: str) -> dict | None:
        rows = self.store.query(COLLECTION, {"id": product_id})
        return rows[0] if rows else None

    def get_products(self, product_ids) -> dict[str, dict]:
        ids = sorted({str(pid) for pid in product_ids})
        if not ids:
            return {}
        return {str(row["id"]): row for row in self.store.query(COLLECTION, {"id": ids})}
