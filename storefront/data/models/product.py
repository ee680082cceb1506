import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Numeric, JSON, DateTime

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    images = Column(JSON, nullable=False, default=list)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
