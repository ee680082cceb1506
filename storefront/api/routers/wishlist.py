# storefront/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_current_user, get_store, to_http
from storefront.data.store import Store
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CartOut, CurrentUser, WishlistItemOut
from storefront.services.cart_service import CartService
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("", response_model=List[WishlistItemOut])
def list_wishlist(
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        return WishlistService(store, user.id).list_items()
    except StorefrontError as e:
        raise to_http(e)


@router.post("/{product_id}/toggle")
def toggle_wishlist(
    product_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        wishlisted = WishlistService(store, user.id).toggle(product_id)
    except StorefrontError as e:
        raise to_http(e)
    return {"product_id": product_id, "wishlisted": wishlisted}


@router.delete("/{item_id}", status_code=204)
def remove_from_wishlist(
    item_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        WishlistService(store, user.id).remove(item_id)
    except StorefrontError as e:
        raise to_http(e)


@router.post("/{product_id}/add-to-cart", response_model=CartOut)
def add_to_cart(
    product_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    cart = CartService(store, user.id)
    try:
        added = WishlistService(store, user.id).add_to_cart(product_id, cart)
    except StorefrontError as e:
        raise to_http(e)
    if not added:
        raise HTTPException(status_code=409, detail="Product is out of stock")
    return cart.view()
