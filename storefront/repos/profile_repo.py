# storefront/repos/profile_repo.py
from storefront.data.store import Store

COLLECTION = "profiles"


class ProfileRepo:
    def __init__(self, store: Store):
        self.store = store

    def get_profile(self, user_id: str) -> dict | None:
        rows = self.store.query(COLLECTION, {"id": user_id})
        return rows[0] if rows else None

    def upsert_profile(self, user_id: str, fields: dict) -> dict:
        rows = self.store.update(COLLECTION, {"id": user_id}, fields)
        if rows:
            return rows[0]
        return self.store.insert(COLLECTION, {"id": user_id, **fields})[0]

    def get_profiles(self, user_ids) -> dict[str, dict]:
        ids = sorted({str(uid) for uid in user_ids})
        if not ids:
            return {}
        return {str(row["id"]): row for row in self.store.query(COLLECTION, {"id": ids})}
