from decimal import Decimal

from storefront.data.store import Store
from storefront.domain.errors import NotFound
from storefront.domain.pricing import line_total, to_money
from storefront.domain.schemas import CartLine, CartItemOut, CartOut, Product
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart of one signed-in user, kept in memory and reconciled with the store.

    The user id comes from the request session and scopes every read and
    write. Subtotal and item count are recomputed from the lines after each
    mutation, never adjusted incrementally.
    """

    def __init__(self, store: Store, user_id: str):
        self.repo = CartRepo(store)
        self.products = ProductRepo(store)
        self.user_id = user_id
        self.lines: list[CartLine] = []
        self.loaded = False
        self._subtotal = Decimal("0.00")
        self._item_count = 0

    # query
    def load(self) -> list[CartLine]:
        """Fetch the user's cart lines joined with their products.

        Raises DataUnavailable when the store cannot be read; callers should
        offer a retry rather than showing an empty cart.
        """
        rows = self.repo.get_cart_items(self.user_id)
        products = self.products.get_products(row["product_id"] for row in rows)

        lines = []
        for row in rows:
            product = products.get(str(row["product_id"]))
            if product is None:
                logger.warning(f"Cart item {row['id']} of user {self.user_id} references missing product {row['product_id']}")
                continue
            lines.append(CartLine(**row, product=Product.model_validate(product)))

        self.lines = lines
        self.loaded = True
        self._recompute()
        return self.lines

    def subtotal(self) -> Decimal:
        return self._subtotal

    def item_count(self) -> int:
        return self._item_count

    def view(self) -> CartOut:
        return CartOut(
            user_id=self.user_id,
            items=[
                CartItemOut(
                    id=line.id,
                    product_id=line.product_id,
                    name=line.product.name,
                    image=line.product.images[0] if line.product.images else None,
                    price=line.product.price,
                    quantity=line.quantity,
                    line_total=line_total(line.product.price, line.quantity),
                    stock_quantity=line.product.stock_quantity,
                    # drives the disabled "+" button
                    can_increment=line.quantity < line.product.stock_quantity,
                )
                for line in self.lines
            ],
            subtotal=self._subtotal,
            item_count=self._item_count,
        )

    # commands
    def add_product(self, product_id: str, quantity: int = 1) -> bool:
        """Add a product, or raise the quantity of its existing line.

        Quantity is clamped to stock; returns False when nothing could be added.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if product is None:
            raise NotFound(f"Product {product_id} not found")

        existing = self.repo.get_cart_item(self.user_id, product_id)
        current = existing["quantity"] if existing else 0
        new_quantity = min(current + quantity, int(product["stock_quantity"]))

        if new_quantity <= current:
            logger.info(f"Product {product_id} out of stock for user {self.user_id}, nothing added")
            return False

        if existing:
            logger.info(f"Product {product_id} already in cart, quantity {current} -> {new_quantity}")
            self.repo.update_quantity(existing["id"], self.user_id, new_quantity)
        else:
            logger.info(f"Adding product {product_id} to cart of user {self.user_id}")
            self.repo.add_cart_item(self.user_id, product_id, new_quantity)

        self.load()
        return True

    def set_quantity(self, cart_item_id: str, new_quantity: int) -> bool:
        """Set a line's quantity; zero or less removes the line.

        Returns False, leaving store and cart untouched, when the quantity
        exceeds the product's stock.
        """
        if new_quantity <= 0:
            self.remove(cart_item_id)
            return True

        line = self._line(cart_item_id)
        if new_quantity > line.product.stock_quantity:
            logger.info(
                f"Rejected quantity {new_quantity} for cart item {cart_item_id}, "
                f"stock is {line.product.stock_quantity}"
            )
            return False

        row = self.repo.update_quantity(cart_item_id, self.user_id, new_quantity)
        self._merge(cart_item_id, row)
        return True

    def remove(self, cart_item_id: str) -> None:
        logger.info(f"Removing cart item {cart_item_id} of user {self.user_id}")
        removed = self.repo.delete_cart_item(cart_item_id, self.user_id)
        self.lines = [line for line in self.lines if line.id != cart_item_id]
        self._recompute()
        if removed == 0:
            raise NotFound(f"Cart item {cart_item_id} not found")

    def clear(self) -> None:
        """Delete every cart line of the user. Safe to repeat on an empty cart."""
        removed = self.repo.delete_cart_items(self.user_id)
        logger.info(f"Cleared cart of user {self.user_id} ({removed} lines)")
        self.lines = []
        self.loaded = True
        self._recompute()

    # helpers
    def _line(self, cart_item_id: str) -> CartLine:
        if not self.loaded:
            self.load()
        line = next((line for line in self.lines if line.id == cart_item_id), None)
        if line is None:
            raise NotFound(f"Cart item {cart_item_id} not found")
        return line

    def _merge(self, cart_item_id: str, row: dict | None) -> None:
        # the store's answer wins over local state
        if row is None:
            logger.warning(f"Cart item {cart_item_id} disappeared from the store, dropping it")
            self.lines = [line for line in self.lines if line.id != cart_item_id]
        else:
            for line in self.lines:
                if line.id == cart_item_id:
                    line.quantity = int(row["quantity"])
        self._recompute()

    def _recompute(self) -> None:
        self._subtotal = to_money(
            sum((line.product.price * line.quantity for line in self.lines), Decimal("0.00"))
        )
        self._item_count = sum(line.quantity for line in self.lines)
