import uuid

from sqlalchemy import Column, Integer, ForeignKey, String, Numeric

from storefront.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), nullable=False)

    quantity = Column(Integer, nullable=False)
    # price snapshot taken when the order was placed
    price_per_unit = Column(Numeric(10, 2), nullable=False)
