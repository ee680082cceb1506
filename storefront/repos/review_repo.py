# storefront/repos/review_repo.py
from storefront.data.store import Store

COLLECTION = "reviews"


class ReviewRepo:
    def __init__(self, store: Store):
        self.store = store

    def get_reviews(self, product_id: str) -> list[dict]:
        return self.store.query(COLLECTION, {"product_id": product_id}, order_by="-created_at")

    def get_user_review(self, user_id: str, product_id: str) -> dict | None:
        rows = self.store.query(COLLECTION, {"user_id": user_id, "product_id": product_id})
        return rows[0] if rows else None

    def add_review(self, user_id: str, product_id: str, rating: int, review_text: str) -> dict:
        return self.store.insert(
            COLLECTION,
            {"user_id": user_id, "product_id": product_id, "rating": rating, "review_text": review_text},
        )[0]

    def update_review(self, review_id: str, user_id: str, rating: int, review_text: str) -> dict | None:
        rows = self.store.update(
            COLLECTION,
            {"id": review_id, "user_id": user_id},
            {"rating": rating, "review_text": review_text},
        )
        return rows[0] if rows else None
