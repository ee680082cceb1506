from storefront.data.store import Store
from storefront.domain.errors import NotFound
from storefront.domain.schemas import Product, WishlistItemOut
from storefront.repos.product_repo import ProductRepo
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.services.cart_service import CartService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, store: Store, user_id: str):
        self.repo = WishlistRepo(store)
        self.products = ProductRepo(store)
        self.user_id = user_id

    def list_items(self) -> list[WishlistItemOut]:
        rows = self.repo.get_items(self.user_id)
        products = self.products.get_products(row["product_id"] for row in rows)

        items = []
        for row in rows:
            product = products.get(str(row["product_id"]))
            if product is None:
                continue
            product = Product.model_validate(product)
            items.append(
                WishlistItemOut(
                    id=row["id"],
                    product_id=product.id,
                    product=product,
                    in_stock=product.stock_quantity > 0,
                )
            )
        return items

    def is_wishlisted(self, product_id: str) -> bool:
        return self.repo.get_item(self.user_id, product_id) is not None

    def toggle(self, product_id: str) -> bool:
        """Add or remove the product; returns whether it is wishlisted afterwards."""
        if self.is_wishlisted(product_id):
            self.repo.delete_by_product(self.user_id, product_id)
            logger.info(f"Product {product_id} removed from wishlist of user {self.user_id}")
            return False

        if self.products.get_product(product_id) is None:
            raise NotFound(f"Product {product_id} not found")

        self.repo.add_item(self.user_id, product_id)
        logger.info(f"Product {product_id} added to wishlist of user {self.user_id}")
        return True

    def remove(self, item_id: str) -> None:
        if self.repo.delete_item(item_id, self.user_id) == 0:
            raise NotFound(f"Wishlist item {item_id} not found")

    def add_to_cart(self, product_id: str, cart: CartService) -> bool:
        """Put one unit of a wishlisted product in the cart; the wishlist keeps it."""
        return cart.add_product(product_id, 1)
