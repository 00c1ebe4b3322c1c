#import all models so SQLAlchemy registers them in Base.metadata

from retech.data.models.product import ProductModel
from retech.data.models.cart import CartModel
from retech.data.models.cart_item import CartItemModel
from retech.data.models.order import OrderModel
from retech.data.models.order_item import OrderItemModel
from retech.data.models.user import ProfileModel, UserRoleModel

__all__ = [
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ProfileModel",
    "UserRoleModel",
]
