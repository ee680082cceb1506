import uuid

from storefront.data.store import Store
from storefront.domain.errors import OrderCreationFailed, ValidationError, WriteError
from storefront.domain.pricing import price_order
from storefront.domain.schemas import (
    CartLine,
    CheckoutForm,
    OrderStatus,
    OrderTotals,
    PaymentMethod,
    PlacedOrder,
    ShippingMethod,
)
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.profile_service import ProfileService
from storefront.services.repair_service import RepairService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = [
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "state",
    "zip_code",
    "country",
]
# presence only, there is no payment processor behind these
CARD_FIELDS = ["card_number", "card_name", "expiry_date", "cvv"]

WARNING_CART_NOT_CLEARED = "cart_not_cleared"
WARNING_PROFILE_NOT_SAVED = "profile_not_saved"


class CheckoutService:
    """
    Turns a user's cart into an order.

    Steps run strictly in sequence, each one only after the previous write
    succeeded:
    1. validate the form
    2. re-read the cart and price it (this read is the price snapshot)
    3. insert the order header
    4. insert the order items, undoing step 3 if this fails
    5. clear the cart (failure only produces a warning)
    6. save shipping details to the profile (failure only produces a warning)
    """

    def __init__(self, store: Store, user_id: str, repair_service: RepairService | None = None):
        self.repo = OrderRepo(store)
        self.profiles = ProfileService(store)
        self.repair_service = repair_service or RepairService()
        self.user_id = user_id

    @staticmethod
    def validate(form: CheckoutForm) -> None:
        required = list(REQUIRED_FIELDS)
        if form.payment_method == PaymentMethod.CREDIT_CARD:
            required += CARD_FIELDS

        missing = [field for field in required if not (getattr(form, field) or "").strip()]
        if missing:
            raise ValidationError(missing)

    @staticmethod
    def summary(cart: CartService, shipping_method: ShippingMethod = ShippingMethod.STANDARD) -> OrderTotals:
        """Totals shown next to the checkout form; same formula as the stored total."""
        return price_order(cart.subtotal(), shipping_method)

    def place_order(self, cart: CartService, form: CheckoutForm) -> PlacedOrder:
        if cart.user_id != self.user_id:
            raise PermissionError("Cart belongs to another user")

        self.validate(form)

        lines = cart.load()
        if not lines:
            raise ValidationError(["cart"], "Cart is empty")

        totals = price_order(cart.subtotal(), form.shipping_method)
        order_id = str(uuid.uuid4())

        logger.info(
            f"[checkout] user={self.user_id} order={order_id} placing order for "
            f"{len(lines)} lines, total {totals.total}"
        )

        try:
            self.repo.create_order(self._order_row(order_id, form, totals))
        except WriteError as e:
            logger.error(f"[checkout] user={self.user_id} order={order_id} step=create_order failed: {e}")
            raise OrderCreationFailed("create_order", order_id, e) from e

        try:
            self.repo.create_order_items(self._item_rows(order_id, lines))
        except WriteError as e:
            logger.error(f"[checkout] user={self.user_id} order={order_id} step=create_order_items failed: {e}")
            self._undo_order(order_id)
            raise OrderCreationFailed("create_order_items", order_id, e) from e

        warnings = []

        try:
            cart.clear()
        except WriteError as e:
            # the order stands, the leftover lines get purged later
            logger.warning(f"[checkout] user={self.user_id} order={order_id} step=clear_cart failed: {e}")
            warnings.append(WARNING_CART_NOT_CLEARED)
            self.repair_service.schedule_cart_purge(self.user_id, [line.id for line in lines])

        try:
            self.profiles.save_shipping_details(self.user_id, form)
        except WriteError as e:
            logger.warning(f"[checkout] user={self.user_id} order={order_id} step=save_profile failed: {e}")
            warnings.append(WARNING_PROFILE_NOT_SAVED)

        logger.info(f"[checkout] user={self.user_id} order={order_id} placed")
        return PlacedOrder(order_id=order_id, totals=totals, warnings=warnings)

    def _undo_order(self, order_id: str) -> None:
        """Compensate a header written without its items: delete it, else cancel it."""
        # a write that matches no rows (row policies) counts as a failure
        try:
            if self.repo.delete_order(order_id, self.user_id):
                logger.info(f"[checkout] user={self.user_id} order={order_id} removed after failed item insert")
                return
            logger.warning(f"[checkout] user={self.user_id} order={order_id} delete matched no rows, cancelling")
        except WriteError as e:
            logger.warning(f"[checkout] user={self.user_id} order={order_id} delete failed, cancelling: {e}")

        try:
            if self.repo.update_order_status(order_id, self.user_id, OrderStatus.CANCELLED.value) is not None:
                logger.warning(
                    f"[checkout] user={self.user_id} order={order_id} marked cancelled after failed item insert"
                )
                return
            logger.error(
                f"[checkout] user={self.user_id} order={order_id} has no items and cancelling it matched no rows"
            )
        except WriteError as e:
            logger.error(
                f"[checkout] user={self.user_id} order={order_id} has no items and could not be "
                f"removed or cancelled: {e}"
            )

        self.repair_service.schedule_order_cancellation(order_id, self.user_id)

    def _order_row(self, order_id: str, form: CheckoutForm, totals: OrderTotals) -> dict:
        return {
            "id": order_id,
            "user_id": self.user_id,
            "status": OrderStatus.PENDING.value,
            "total_amount": totals.total,
            "shipping_address": (
                f"{form.address.strip()}, {form.city.strip()}, {form.state.strip()} "
                f"{form.zip_code.strip()}, {form.country.strip()}"
            ),
            "shipping_method": form.shipping_method.value,
            "payment_method": form.payment_method.value,
            "notes": form.notes or None,
            "contact_email": form.email.strip(),
            "contact_phone": form.phone.strip(),
            "recipient_name": f"{form.first_name.strip()} {form.last_name.strip()}",
        }

    @staticmethod
    def _item_rows(order_id: str, lines: list[CartLine]) -> list[dict]:
        return [
            {
                "order_id": order_id,
                "product_id": line.product_id,
                "quantity": line.quantity,
                "price_per_unit": line.product.price,
            }
            for line in lines
        ]
