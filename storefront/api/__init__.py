# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.routers import carts, checkout, health, orders, reviews, wishlist


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(orders.router)
    app.include_router(reviews.router)
    app.include_router(wishlist.router)

    return app
