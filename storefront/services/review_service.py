from decimal import Decimal, ROUND_HALF_UP

from storefront.data.store import Store
from storefront.domain.errors import NotFound, ValidationError
from storefront.domain.schemas import ProductReviews, ReviewOut
from storefront.repos.product_repo import ProductRepo
from storefront.repos.profile_repo import ProfileRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MIN_REVIEW_LENGTH = 10
ANONYMOUS_REVIEWER = "Anonymous"


def _reviewer_name(profile: dict | None) -> str:
    if not profile:
        return ANONYMOUS_REVIEWER
    name = f"{profile.get('first_name') or ''} {profile.get('last_name') or ''}".strip()
    return name or ANONYMOUS_REVIEWER


class ReviewService:
    """Product reviews; one review per user and product, editable by its author."""

    def __init__(self, store: Store):
        self.repo = ReviewRepo(store)
        self.products = ProductRepo(store)
        self.profiles = ProfileRepo(store)

    def list_reviews(self, product_id: str) -> ProductReviews:
        rows = self.repo.get_reviews(product_id)
        profiles = self.profiles.get_profiles(row["user_id"] for row in rows)

        reviews = [self._out(row, profiles.get(str(row["user_id"]))) for row in rows]
        average = None
        if reviews:
            average = (Decimal(sum(r.rating for r in reviews)) / len(reviews)).quantize(
                Decimal("0.1"), rounding=ROUND_HALF_UP
            )
        return ProductReviews(
            product_id=product_id,
            review_count=len(reviews),
            average_rating=average,
            reviews=reviews,
        )

    def user_review(self, user_id: str, product_id: str) -> ReviewOut | None:
        row = self.repo.get_user_review(user_id, product_id)
        if row is None:
            return None
        return self._out(row, self.profiles.get_profiles([user_id]).get(user_id))

    def submit(self, user_id: str, product_id: str, rating: int, review_text: str) -> ReviewOut:
        """Add the user's review of a product, or update the one they already wrote."""
        text = (review_text or "").strip()
        missing = []
        if not 1 <= rating <= 5:
            missing.append("rating")
        if len(text) < MIN_REVIEW_LENGTH:
            missing.append("review_text")
        if missing:
            raise ValidationError(
                missing,
                f"A review needs a rating from 1 to 5 and at least {MIN_REVIEW_LENGTH} characters",
            )

        if self.products.get_product(product_id) is None:
            raise NotFound(f"Product {product_id} not found")

        existing = self.repo.get_user_review(user_id, product_id)
        if existing:
            row = self.repo.update_review(existing["id"], user_id, rating, text)
            if row is None:
                raise NotFound(f"Review {existing['id']} not found")
            logger.info(f"Updated review {row['id']} of product {product_id} by user {user_id}")
        else:
            row = self.repo.add_review(user_id, product_id, rating, text)
            logger.info(f"Added review {row['id']} of product {product_id} by user {user_id}")

        return self._out(row, self.profiles.get_profiles([user_id]).get(user_id))

    @staticmethod
    def _out(row: dict, profile: dict | None) -> ReviewOut:
        return ReviewOut(
            id=row["id"],
            product_id=row["product_id"],
            user_id=row["user_id"],
            rating=row["rating"],
            review_text=row["review_text"],
            reviewer_name=_reviewer_name(profile),
            created_at=row["created_at"],
        )
