"""HTTP surface tests against the SQL store."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from conftest import OTHER_USER_ID, USER_ID
from storefront.api import create_app
from storefront.api.deps import get_current_user, get_public_store, get_store
from storefront.domain.schemas import CurrentUser


@pytest.fixture
def app(store):
    app = create_app()
    app.dependency_overrides[get_current_user] = lambda: CurrentUser(id=USER_ID, email="ada@example.com")
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_public_store] = lambda: store
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def form_payload(checkout_form):
    return checkout_form.model_dump(mode="json")


def test_health():
    assert TestClient(create_app()).get("/health").json() == {"status": "ok"}


def test_requires_sign_in():
    resp = TestClient(create_app()).get("/cart")
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"


class TestCartRoutes:
    def test_get_cart(self, client, scenario_cart):
        body = client.get("/cart").json()
        assert body["item_count"] == 3
        assert Decimal(body["subtotal"]) == Decimal("6200")
        assert [item["product_id"] for item in body["items"]] == ["prod-a", "prod-b"]

    def test_add_item(self, client, products):
        resp = client.post("/cart/items", json={"product_id": "prod-c", "quantity": 2})
        assert resp.status_code == 200
        assert resp.json()["item_count"] == 2

    def test_add_sold_out_item(self, client, products):
        resp = client.post("/cart/items", json={"product_id": "prod-out"})
        assert resp.status_code == 409

    def test_add_unknown_product(self, client, products):
        resp = client.post("/cart/items", json={"product_id": "nope"})
        assert resp.status_code == 404

    def test_quantity_above_stock_is_rejected(self, client, store, scenario_cart):
        line = scenario_cart[0]
        resp = client.patch(f"/cart/items/{line['id']}", json={"quantity": 6})
        assert resp.status_code == 409
        assert store.query("cart_items", {"id": line["id"]})[0]["quantity"] == 2

    def test_update_quantity(self, client, scenario_cart):
        line = scenario_cart[1]
        body = client.patch(f"/cart/items/{line['id']}", json={"quantity": 3}).json()
        assert body["item_count"] == 5
        assert Decimal(body["subtotal"]) == Decimal("8600")

    def test_remove_unknown_line(self, client, scenario_cart):
        assert client.delete("/cart/items/missing").status_code == 404

    def test_clear_cart(self, client, store, scenario_cart):
        body = client.delete("/cart").json()
        assert body["items"] == []
        assert store.query("cart_items") == []


class TestCheckoutRoutes:
    def test_summary(self, client, scenario_cart):
        body = client.get("/checkout/summary", params={"shipping_method": "express"}).json()
        assert Decimal(body["shipping"]) == Decimal("15.99")
        assert Decimal(body["tax"]) == Decimal("434.00")
        assert Decimal(body["total"]) == Decimal("6649.99")

    def test_place_order(self, client, store, scenario_cart, form_payload):
        resp = client.post("/checkout", json=form_payload)

        assert resp.status_code == 201
        body = resp.json()
        assert body["warnings"] == []
        assert Decimal(body["totals"]["total"]) == Decimal("6634.00")
        assert store.query("cart_items") == []
        assert store.query("orders")[0]["id"] == body["order_id"]

    def test_missing_fields(self, client, store, scenario_cart, form_payload):
        form_payload["zip_code"] = ""
        resp = client.post("/checkout", json=form_payload)

        assert resp.status_code == 422
        assert resp.json()["detail"]["missing_fields"] == ["zip_code"]
        assert store.query("orders") == []

    def test_empty_cart(self, client, products, form_payload):
        resp = client.post("/checkout", json=form_payload)
        assert resp.status_code == 422
        assert resp.json()["detail"]["missing_fields"] == ["cart"]


class TestOrderRoutes:
    def test_confirmation(self, client, scenario_cart, form_payload):
        order_id = client.post("/checkout", json=form_payload).json()["order_id"]

        body = client.get(f"/orders/{order_id}").json()
        assert body["id"] == order_id
        assert len(body["items"]) == 2
        assert body["tracking_number"].startswith("TSM")
        assert body["tracking_is_placeholder"] is True
        assert [o["id"] for o in client.get("/orders").json()] == [order_id]

    def test_order_of_another_user_is_not_found(self, app, client, scenario_cart, form_payload):
        order_id = client.post("/checkout", json=form_payload).json()["order_id"]

        app.dependency_overrides[get_current_user] = lambda: CurrentUser(id=OTHER_USER_ID)
        assert client.get(f"/orders/{order_id}").status_code == 404


class TestWishlistRoutes:
    def test_toggle_and_list(self, client, products):
        assert client.post("/wishlist/prod-b/toggle").json() == {"product_id": "prod-b", "wishlisted": True}

        items = client.get("/wishlist").json()
        assert [item["product_id"] for item in items] == ["prod-b"]
        assert items[0]["in_stock"] is True

        assert client.post("/wishlist/prod-b/toggle").json()["wishlisted"] is False
        assert client.get("/wishlist").json() == []

    def test_add_to_cart_keeps_wishlist_entry(self, client, products):
        client.post("/wishlist/prod-c/toggle")

        resp = client.post("/wishlist/prod-c/add-to-cart")

        assert resp.status_code == 200
        assert resp.json()["item_count"] == 1
        assert len(client.get("/wishlist").json()) == 1

    def test_remove_unknown_item(self, client, products):
        assert client.delete("/wishlist/missing").status_code == 404


class TestReviewRoutes:
    def test_submit_and_list(self, client, products):
        resp = client.post("/products/prod-a/reviews", json={"rating": 4, "review_text": "Sturdy and well made."})
        assert resp.status_code == 200
        assert resp.json()["rating"] == 4

        body = client.get("/products/prod-a/reviews").json()
        assert body["review_count"] == 1
        assert Decimal(body["average_rating"]) == Decimal("4.0")

    def test_short_review(self, client, products):
        resp = client.post("/products/prod-a/reviews", json={"rating": 4, "review_text": "ok"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["missing_fields"] == ["review_text"]

    def test_listing_needs_no_sign_in(self, store, products):
        app = create_app()
        app.dependency_overrides[get_public_store] = lambda: store
        assert TestClient(app).get("/products/prod-a/reviews").json()["review_count"] == 0
