# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_current_user, get_store, to_http
from storefront.data.store import Store
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    CheckoutForm,
    CurrentUser,
    OrderTotals,
    PlacedOrder,
    ShippingMethod,
)
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.profile_service import ProfileService

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.get("/defaults", response_model=CheckoutForm)
def checkout_defaults(
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    """Checkout form pre-filled from the saved profile."""
    return ProfileService(store).checkout_defaults(user)


@router.get("/summary", response_model=OrderTotals)
def checkout_summary(
    shipping_method: ShippingMethod = ShippingMethod.STANDARD,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    cart = CartService(store, user.id)
    try:
        cart.load()
    except StorefrontError as e:
        raise to_http(e)
    return CheckoutService.summary(cart, shipping_method)


@router.post("", response_model=PlacedOrder, status_code=201)
def place_order(
    form: CheckoutForm,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    """
    Places the order for the current cart.
    Non-fatal problems after the order is recorded come back in `warnings`.
    """
    svc = CheckoutService(store, user.id)
    try:
        return svc.place_order(CartService(store, user.id), form)
    except StorefrontError as e:
        raise to_http(e)
