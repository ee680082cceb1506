# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import ProductModel

DEMO_PRODUCTS = [
    {"name": "Hand-thrown Ceramic Mug", "price": Decimal("24.00"), "stock_quantity": 12, "images": ["/images/mug.jpg"]},
    {"name": "Macrame Wall Hanging", "price": Decimal("58.50"), "stock_quantity": 4, "images": ["/images/macrame.jpg"]},
    {"name": "Beeswax Candle Set", "price": Decimal("18.99"), "stock_quantity": 30, "images": ["/images/candles.jpg"]},
    {"name": "Merino Yarn Bundle", "price": Decimal("32.00"), "stock_quantity": 0, "images": ["/images/yarn.jpg"]},
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # only seed an empty catalog
        if db.query(ProductModel).first():
            return 0
        db.add_all([ProductModel(**product) for product in DEMO_PRODUCTS])
        db.commit()
        return len(DEMO_PRODUCTS)
    finally:
        db.close()
