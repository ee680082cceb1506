# storefront/data/backends.py
from storefront.data.database import SessionLocal
from storefront.data.store import SqlStore, Store
from storefront.services.store_client import StoreClient
from storefront.utils.settings import STORE_BACKEND, STORE_SERVICE_KEY


def create_store(access_token: str | None = None) -> Store:
    """
    Store for the configured backend. With the hosted backend the user's
    access token is forwarded so row-level policies apply to every call.
    """
    if STORE_BACKEND == "sql":
        return SqlStore(SessionLocal)
    return StoreClient(access_token=access_token)


def create_service_store() -> Store:
    """Store for background jobs, authenticated with the service key."""
    if STORE_BACKEND == "sql":
        return SqlStore(SessionLocal)
    return StoreClient(api_key=STORE_SERVICE_KEY)
