# storefront/domain/pricing.py
from decimal import Decimal, ROUND_HALF_UP

from storefront.domain.schemas import OrderTotals, ShippingMethod

CENTS = Decimal("0.01")

FREE_SHIPPING_THRESHOLD = Decimal("50.00")
TAX_RATE = Decimal("0.07")

SHIPPING_RATES = {
    ShippingMethod.STANDARD: Decimal("4.99"),
    ShippingMethod.PRIORITY: Decimal("9.99"),
    ShippingMethod.EXPRESS: Decimal("15.99"),
}


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(price, quantity: int) -> Decimal:
    return to_money(Decimal(str(price)) * quantity)


def shipping_cost(method: ShippingMethod, subtotal: Decimal) -> Decimal:
    method = ShippingMethod(method)
    # standard shipping is free strictly above the threshold
    if method == ShippingMethod.STANDARD and subtotal > FREE_SHIPPING_THRESHOLD:
        return Decimal("0.00")
    return SHIPPING_RATES[method]


def tax(subtotal: Decimal) -> Decimal:
    return to_money(subtotal * TAX_RATE)


def price_order(subtotal: Decimal, method: ShippingMethod) -> OrderTotals:
    """
    Single pricing formula shared by the checkout summary and the persisted
    order total_amount.
    """
    subtotal = to_money(subtotal)
    shipping = shipping_cost(method, subtotal)
    tax_amount = tax(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax_amount,
        total=subtotal + shipping + tax_amount,
    )
