import zlib
from datetime import date, timedelta

from storefront.data.store import Store
from storefront.domain.errors import NotFound
from storefront.domain.pricing import line_total, to_money
from storefront.domain.schemas import (
    Order,
    OrderConfirmation,
    OrderItem,
    OrderItemOut,
    PaymentMethod,
    ShippingMethod,
)
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# display estimate only, nothing schedules against it
DELIVERY_BUSINESS_DAYS = {
    ShippingMethod.STANDARD: 7,
    ShippingMethod.PRIORITY: 4,
    ShippingMethod.EXPRESS: 2,
}

SHIPPING_LABELS = {
    ShippingMethod.STANDARD: "Standard Shipping (5-7 business days)",
    ShippingMethod.PRIORITY: "Priority Shipping (3-5 business days)",
    ShippingMethod.EXPRESS: "Express Shipping (1-2 business days)",
}

PAYMENT_LABELS = {
    PaymentMethod.CREDIT_CARD: "Credit Card",
    PaymentMethod.PAYPAL: "PayPal",
}


def add_business_days(start: date, days: int) -> date:
    current = start
    while days > 0:
        current += timedelta(days=1)
        if current.weekday() < 5:
            days -= 1
    return current


def placeholder_tracking_number(order_id: str) -> str:
    """Stable fake tracking number; no carrier is wired in yet."""
    return f"TSM{zlib.crc32(order_id.encode()) % 10_000_000:07d}"


class OrderConfirmationService:
    """Read side for the confirmation page and the order history."""

    def __init__(self, store: Store):
        self.repo = OrderRepo(store)
        self.products = ProductRepo(store)

    def get(self, order_id: str, user_id: str) -> OrderConfirmation:
        # always scoped by owner, another user's order looks like a missing one
        row = self.repo.get_order(order_id, user_id)
        if row is None:
            logger.info(f"Order {order_id} not found for user {user_id}")
            raise NotFound(f"Order {order_id} not found")

        order = Order.model_validate(row)
        items = [OrderItem.model_validate(r) for r in self.repo.get_order_items(order_id)]
        products = self.products.get_products(item.product_id for item in items)

        items_out = []
        for item in items:
            product = products.get(item.product_id, {})
            images = product.get("images") or []
            items_out.append(
                OrderItemOut(
                    **item.model_dump(),
                    product_name=product.get("name"),
                    image=images[0] if images else None,
                    line_total=line_total(item.price_per_unit, item.quantity),
                )
            )

        return OrderConfirmation(
            **order.model_dump(),
            items=items_out,
            items_subtotal=to_money(sum((i.line_total for i in items_out), 0)),
            estimated_delivery=add_business_days(
                order.created_at.date(), DELIVERY_BUSINESS_DAYS[order.shipping_method]
            ),
            tracking_number=placeholder_tracking_number(order.id),
            tracking_is_placeholder=True,
            shipping_method_label=SHIPPING_LABELS[order.shipping_method],
            payment_method_label=PAYMENT_LABELS[order.payment_method],
        )

    def list_orders(self, user_id: str) -> list[Order]:
        return [Order.model_validate(row) for row in self.repo.get_orders(user_id)]
