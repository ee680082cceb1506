# storefront/api/routers/reviews.py
from fastapi import APIRouter, Depends

from storefront.api.deps import get_current_user, get_public_store, get_store, to_http
from storefront.data.store import Store
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CurrentUser, ProductReviews, ReviewIn, ReviewOut
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/products", tags=["reviews"])


@router.get("/{product_id}/reviews", response_model=ProductReviews)
def list_reviews(product_id: str, store: Store = Depends(get_public_store)):
    try:
        return ReviewService(store).list_reviews(product_id)
    except StorefrontError as e:
        raise to_http(e)


@router.post("/{product_id}/reviews", response_model=ReviewOut)
def submit_review(
    product_id: str,
    payload: ReviewIn,
    user: CurrentUser = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    """Creates the user's review of the product, or replaces their earlier one."""
    try:
        return ReviewService(store).submit(user.id, product_id, payload.rating, payload.review_text)
    except StorefrontError as e:
        raise to_http(e)
