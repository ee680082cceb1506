# storefront/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ShippingMethod(str, Enum):
    STANDARD = "standard"
    PRIORITY = "priority"
    EXPRESS = "express"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class CurrentUser(BaseModel):
    """Authenticated user resolved from the identity provider."""

    id: str
    email: str | None = None
    access_token: str | None = None


class Product(BaseModel):
    id: str
    name: str
    price: Decimal
    images: List[str] = Field(default_factory=list)
    stock_quantity: int = 0

    model_config = ConfigDict(from_attributes=True)


class CartLine(BaseModel):
    """A cart_items row joined with its product."""

    id: str
    product_id: str
    user_id: str
    quantity: int = Field(..., ge=1)
    created_at: datetime | None = None
    product: Product


class ItemIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0)


class QuantityIn(BaseModel):
    # zero or less removes the line
    quantity: int


class CartItemOut(BaseModel):
    id: str
    product_id: str
    name: str
    image: str | None = None
    price: Decimal
    quantity: int
    line_total: Decimal
    stock_quantity: int
    can_increment: bool


class CartOut(BaseModel):
    user_id: str
    items: List[CartItemOut]
    subtotal: Decimal
    item_count: int


class CheckoutForm(BaseModel):
    """Shipping, contact and payment details entered at checkout."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "United States"
    shipping_method: ShippingMethod = ShippingMethod.STANDARD
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    # collected but never sent to a processor
    card_number: str = ""
    card_name: str = ""
    expiry_date: str = ""
    cvv: str = ""
    notes: str | None = None


class OrderTotals(BaseModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


class PlacedOrder(BaseModel):
    order_id: str
    totals: OrderTotals
    warnings: List[str] = Field(default_factory=list)


class Order(BaseModel):
    id: str
    user_id: str
    status: OrderStatus
    total_amount: Decimal
    shipping_address: str
    shipping_method: ShippingMethod
    payment_method: PaymentMethod
    notes: str | None = None
    contact_email: str
    contact_phone: str
    recipient_name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderItem(BaseModel):
    id: str
    order_id: str
    product_id: str
    quantity: int
    price_per_unit: Decimal


class OrderItemOut(OrderItem):
    product_name: str | None = None
    image: str | None = None
    line_total: Decimal


class OrderConfirmation(Order):
    items: List[OrderItemOut]
    items_subtotal: Decimal
    estimated_delivery: date
    # synthetic until a carrier integration exists
    tracking_number: str
    tracking_is_placeholder: bool = True
    shipping_method_label: str
    payment_method_label: str


class Profile(BaseModel):
    id: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    updated_at: datetime | None = None


class WishlistItemOut(BaseModel):
    id: str
    product_id: str
    product: Product
    in_stock: bool


class ReviewIn(BaseModel):
    rating: int = Field(5, ge=1, le=5)
    review_text: str


class ReviewOut(BaseModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    review_text: str
    reviewer_name: str
    created_at: datetime


class ProductReviews(BaseModel):
    product_id: str
    review_count: int
    # None until the first review
    average_rating: Decimal | None = None
    reviews: List[ReviewOut]
