# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_current_user, get_store, to_http
from storefront.data.store import Store
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CartOut, CurrentUser, ItemIn, QuantityIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(store: Store, user: CurrentUser) -> CartService:
    return CartService(store, user.id)


@router.get("", response_model=CartOut)
def get_cart(
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    svc = get_service(store, user)
    try:
        svc.load()
    except StorefrontError as e:
        raise to_http(e)
    return svc.view()


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    svc = get_service(store, user)
    try:
        added = svc.add_product(payload.product_id, payload.quantity)
    except StorefrontError as e:
        raise to_http(e)
    if not added:
        raise HTTPException(status_code=409, detail="Product is out of stock")
    return svc.view()


@router.patch("/items/{cart_item_id}", response_model=CartOut)
def update_item(
    cart_item_id: str,
    payload: QuantityIn,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    svc = get_service(store, user)
    try:
        svc.load()
        accepted = svc.set_quantity(cart_item_id, payload.quantity)
    except StorefrontError as e:
        raise to_http(e)
    if not accepted:
        raise HTTPException(status_code=409, detail="Requested quantity exceeds available stock")
    return svc.view()


@router.delete("/items/{cart_item_id}", response_model=CartOut)
def remove_item(
    cart_item_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    svc = get_service(store, user)
    try:
        svc.load()
        svc.remove(cart_item_id)
    except StorefrontError as e:
        raise to_http(e)
    return svc.view()


@router.delete("", response_model=CartOut)
def clear_cart(
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    svc = get_service(store, user)
    try:
        svc.clear()
    except StorefrontError as e:
        raise to_http(e)
    return svc.view()
