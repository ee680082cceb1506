import os

# keep imports of the settings module away from the production database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORE_BACKEND", "sql")

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.data import models  # noqa: F401
from storefront.data.database import Base
from storefront.data.store import SqlStore, Store
from storefront.domain.errors import DataUnavailable, WriteError
from storefront.domain.schemas import CheckoutForm

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


class FaultyStore(Store):
    """Wraps a store and makes chosen (operation, collection) pairs fail."""

    def __init__(self, inner: Store):
        self.inner = inner
        self.failures = set()
        self.no_match = set()
        self.calls = []

    def fail(self, operation, collection):
        self.failures.add((operation, collection))

    def match_nothing(self, operation, collection):
        """Update/delete succeeds but touches no rows, as when row policies hide them."""
        self.no_match.add((operation, collection))

    def heal(self):
        self.failures.clear()
        self.no_match.clear()

    def _check(self, operation, collection):
        self.calls.append((operation, collection))
        if (operation, collection) in self.failures:
            if operation == "query":
                raise DataUnavailable(collection, "simulated outage")
            raise WriteError(collection, operation, "simulated failure")

    def query(self, collection, filters=None, order_by=None):
        self._check("query", collection)
        return self.inner.query(collection, filters, order_by)

    def insert(self, collection, rows):
        self._check("insert", collection)
        return self.inner.insert(collection, rows)

    def update(self, collection, filters, patch):
        self._check("update", collection)
        if ("update", collection) in self.no_match:
            return []
        return self.inner.update(collection, filters, patch)

    def delete(self, collection, filters):
        self._check("delete", collection)
        if ("delete", collection) in self.no_match:
            return 0
        return self.inner.delete(collection, filters)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return SqlStore(session_factory)


@pytest.fixture
def faulty_store(store):
    return FaultyStore(store)


@pytest.fixture
def products(store):
    rows = store.insert(
        "products",
        [
            {"id": "prod-a", "name": "Woven Basket", "price": Decimal("2500.00"), "stock_quantity": 5, "images": ["/img/basket.jpg"]},
            {"id": "prod-b", "name": "Clay Vase", "price": Decimal("1200.00"), "stock_quantity": 3, "images": ["/img/vase.jpg"]},
            {"id": "prod-c", "name": "Brass Charm", "price": Decimal("9.50"), "stock_quantity": 10, "images": []},
            {"id": "prod-out", "name": "Sold Out Quilt", "price": Decimal("180.00"), "stock_quantity": 0, "images": []},
        ],
    )
    return {row["id"]: row for row in rows}


@pytest.fixture
def add_line(store, products):
    def _add(product_id, quantity, user_id=USER_ID):
        return store.insert(
            "cart_items",
            {"user_id": user_id, "product_id": product_id, "quantity": quantity},
        )[0]

    return _add


@pytest.fixture
def scenario_cart(add_line):
    """Basket 2 x 2500 and vase 1 x 1200, subtotal 6200."""
    return [add_line("prod-a", 2), add_line("prod-b", 1)]


@pytest.fixture
def checkout_form():
    return CheckoutForm(
        first_name="Ada",
        last_name="Weaver",
        email="ada@example.com",
        phone="555-0100",
        address="12 Loom Street",
        city="Portland",
        state="OR",
        zip_code="97201",
        country="United States",
        shipping_method="standard",
        payment_method="credit_card",
        card_number="4242 4242 4242 4242",
        card_name="Ada Weaver",
        expiry_date="12/29",
        cvv="123",
        notes="Leave at the door",
    )
