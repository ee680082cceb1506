# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends

from storefront.api.deps import get_current_user, get_store, to_http
from storefront.data.store import Store
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CurrentUser, Order, OrderConfirmation
from storefront.services.order_confirmation_service import OrderConfirmationService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(store: Store) -> OrderConfirmationService:
    return OrderConfirmationService(store)


@router.get("", response_model=List[Order])
def list_orders(
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return get_service(store).list_orders(user.id)
    except StorefrontError as e:
        raise to_http(e)


@router.get("/{order_id}", response_model=OrderConfirmation)
def get_order(
    order_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    """
    Order with its items and display estimates for the confirmation page.
    """
    try:
        return get_service(store).get(order_id, user.id)
    except StorefrontError as e:
        raise to_http(e)
