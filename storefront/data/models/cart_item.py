import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # no unique (user_id, product_id) constraint, the hosted schema has none either
    user_id = Column(String(36), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
