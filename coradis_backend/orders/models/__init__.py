from .favorite_order import FavoriteOrder
from .order import Order
from .order_item import OrderItem

__all__ = [
    "FavoriteOrder",
    "Order",
    "OrderItem",
]
