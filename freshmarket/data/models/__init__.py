#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from freshmarket.data.models.user import UserModel
from freshmarket.data.models.category import CategoryModel
from freshmarket.data.models.product import ProductModel
from freshmarket.data.models.cart_item import CartItemModel
from freshmarket.data.models.order import OrderModel
from freshmarket.data.models.order_item import OrderItemModel
from freshmarket.data.models.contact_message import ContactMessageModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ContactMessageModel",
]
