"""Tests for saved profiles and the checkout pre-fill."""

from conftest import USER_ID
from storefront.data.seed import DEMO_PRODUCTS, seed
from storefront.domain.schemas import CurrentUser
from storefront.services.profile_service import ProfileService

USER = CurrentUser(id=USER_ID, email="ada@example.com")


def test_defaults_without_profile(store):
    form = ProfileService(store).checkout_defaults(USER)
    assert form.email == "ada@example.com"
    assert form.country == "United States"
    assert form.address == ""


def test_saved_details_prefill_the_form(store, checkout_form):
    svc = ProfileService(store)
    svc.save_shipping_details(USER_ID, checkout_form)

    form = svc.checkout_defaults(USER)

    assert form.first_name == "Ada"
    assert form.address == "12 Loom Street"
    assert form.zip_code == "97201"
    assert form.card_number == ""


def test_save_twice_updates_one_profile(store, checkout_form):
    svc = ProfileService(store)
    svc.save_shipping_details(USER_ID, checkout_form)
    profile = svc.save_shipping_details(USER_ID, checkout_form.model_copy(update={"city": "Salem"}))

    assert profile.city == "Salem"
    assert len(store.query("profiles")) == 1


def test_defaults_survive_an_outage(faulty_store):
    faulty_store.fail("query", "profiles")
    form = ProfileService(faulty_store).checkout_defaults(USER)
    assert form.email == "ada@example.com"


def test_seed_fills_an_empty_catalog_once(store, session_factory):
    assert seed(session_factory) == len(DEMO_PRODUCTS)
    assert seed(session_factory) == 0
    assert len(store.query("products")) == len(DEMO_PRODUCTS)
