import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Numeric, Text

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)

    status = Column(String, nullable=False, default="pending")  # pending, processing, shipped, delivered, cancelled
    total_amount = Column(Numeric(10, 2), nullable=False)
    shipping_address = Column(Text, nullable=False)
    shipping_method = Column(String, nullable=False)
    payment_method = Column(String, nullable=False)
    notes = Column(Text, nullable=True)
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    recipient_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
