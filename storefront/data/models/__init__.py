# import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.profile import ProfileModel
from storefront.data.models.review import ReviewModel
from storefront.data.models.wishlist_item import WishlistItemModel

# collection name -> model, used by SqlStore
COLLECTIONS = {
    model.__tablename__: model
    for model in (
        ProductModel,
        CartItemModel,
        OrderModel,
        OrderItemModel,
        ProfileModel,
        ReviewModel,
        WishlistItemModel,
    )
}

__all__ = [
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ProfileModel",
    "ReviewModel",
    "WishlistItemModel",
    "COLLECTIONS",
]
